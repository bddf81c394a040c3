"""
Face Emoji Tracker
MediaPipe face mesh based head direction and expression tracking
"""

__version__ = "0.1.0"

from .models import (
    ExpressionResult,
    Expression,
    FacialMetrics,
    HeadDirection,
    Landmark,
    TrackingResult,
)
from .processing.direction import DirectionClassifier
from .processing.expression import ExpressionClassifier

__all__ = [
    'DirectionClassifier',
    'ExpressionClassifier',
    'ExpressionResult',
    'Expression',
    'FacialMetrics',
    'HeadDirection',
    'Landmark',
    'TrackingResult',
]
