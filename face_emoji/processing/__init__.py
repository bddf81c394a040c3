"""Processing layer components"""

from .direction import DirectionClassifier
from .emoji_counter import EmojiCollection
from .expression import EXPRESSION_RULES, ExpressionClassifier, ExpressionRule
from .face_tracker import FaceTracker
from .geometry import GeometryCalculator

__all__ = [
    'DirectionClassifier',
    'EmojiCollection',
    'EXPRESSION_RULES',
    'ExpressionClassifier',
    'ExpressionRule',
    'FaceTracker',
    'GeometryCalculator',
]
