"""Data model definitions"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np


class HeadDirection(Enum):
    """Discrete head orientation"""
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Expression(Enum):
    """Facial expression classes"""
    NEUTRAL = "neutral"
    HAPPY = "happy"
    VERY_HAPPY = "very_happy"
    SAD = "sad"
    SURPRISED = "surprised"
    ANGRY = "angry"
    WINK = "wink"
    KISS = "kiss"
    TONGUE_OUT = "tongue_out"
    THINKING = "thinking"
    SLEEPY = "sleepy"
    CONFUSED = "confused"

    @property
    def emoji(self) -> str:
        return EXPRESSION_EMOJI[self]


EXPRESSION_EMOJI: Dict[Expression, str] = {
    Expression.NEUTRAL: '😐',
    Expression.HAPPY: '🙂',
    Expression.VERY_HAPPY: '😄',
    Expression.SAD: '😢',
    Expression.SURPRISED: '😮',
    Expression.ANGRY: '😠',
    Expression.WINK: '😉',
    Expression.KISS: '😘',
    Expression.TONGUE_OUT: '😛',
    Expression.THINKING: '🤔',
    Expression.SLEEPY: '😴',
    Expression.CONFUSED: '😕',
}


@dataclass
class Landmark:
    """Single landmark point"""

    x: float  # normalized x (0-1)
    y: float  # normalized y (0-1)
    z: float = 0.0  # relative depth

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'z': self.z}


# One face in one frame: 468 points when resolved, empty when no face
LandmarkFrame = Sequence[Landmark]


def landmarks_from_array(points: np.ndarray) -> List[Landmark]:
    """
    Build landmarks from an (N, 2) or (N, 3) array of normalized coordinates

    Args:
        points: array of x, y[, z] rows

    Returns:
        List[Landmark]
    """
    points = np.asarray(points, dtype=float)
    if points.ndim != 2 or points.shape[1] not in (2, 3):
        raise ValueError(f"Expected an (N, 2) or (N, 3) array, got shape {points.shape}")

    if points.shape[1] == 2:
        return [Landmark(x=float(x), y=float(y)) for x, y in points]
    return [Landmark(x=float(x), y=float(y), z=float(z)) for x, y, z in points]


@dataclass
class FacialMetrics:
    """Geometric measurements used by the expression rules"""

    mouth_openness: float = 0.0
    smile_level: float = 0.0
    eyebrow_raise: float = 0.0
    left_eye_openness: float = 0.0
    right_eye_openness: float = 0.0
    mouth_width: float = 0.0
    lips_pucker: float = 0.0
    head_tilt: float = 0.0

    @property
    def eye_difference(self) -> float:
        return abs(self.left_eye_openness - self.right_eye_openness)

    def to_dict(self) -> Dict[str, float]:
        return {
            'mouth_openness': round(self.mouth_openness, 4),
            'smile_level': round(self.smile_level, 4),
            'eyebrow_raise': round(self.eyebrow_raise, 4),
            'left_eye_openness': round(self.left_eye_openness, 4),
            'right_eye_openness': round(self.right_eye_openness, 4),
            'mouth_width': round(self.mouth_width, 4),
            'lips_pucker': round(self.lips_pucker, 4),
            'head_tilt': round(self.head_tilt, 4),
        }


@dataclass
class ExpressionResult:
    """Committed expression of one analyze() call"""

    expression: Expression
    emoji: str
    confidence: float  # fixed per rule, 0 when the frame was incomplete

    def to_dict(self) -> Dict[str, Any]:
        return {
            'expression': self.expression.value,
            'emoji': self.emoji,
            'confidence': self.confidence,
        }


@dataclass
class TrackingResult:
    """Per-frame output consumed by rendering and UI"""

    detected: bool
    landmarks: List[Landmark] = field(default_factory=list)
    direction: HeadDirection = HeadDirection.CENTER
    confidence: float = 0.0
    emoji: Optional[str] = None
    expression: Optional[Expression] = None

    @classmethod
    def empty(cls) -> 'TrackingResult':
        """No face in the frame"""
        return cls(detected=False)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'detected': self.detected,
            'direction': self.direction.value,
            'confidence': self.confidence,
            'landmark_count': len(self.landmarks),
        }
        if self.expression is not None:
            result['expression'] = self.expression.value
            result['emoji'] = self.emoji
        return result


@dataclass
class ApplicationState:
    """Snapshot of the running application"""

    camera_active: bool = False
    tracker_ready: bool = False
    current_direction: HeadDirection = HeadDirection.CENTER
    fps: int = 0
    error: Optional[str] = None
    emoji: Optional[str] = EXPRESSION_EMOJI[Expression.NEUTRAL]
    expression: Optional[Expression] = Expression.NEUTRAL
    frames_processed: int = 0
    frames_skipped: int = 0
