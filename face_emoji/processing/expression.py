"""Facial expression classification from landmark geometry"""

from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Tuple

from ..config.constants import (
    DIRECTION_LANDMARKS,
    EYE_OPENNESS_LANDMARKS,
    EYEBROW_LANDMARKS,
    MOUTH_LANDMARKS,
)
from ..models import Expression, ExpressionResult, FacialMetrics, LandmarkFrame
from ..utils import get_logger
from .geometry import GeometryCalculator

logger = get_logger(__name__)


class ExpressionRule(NamedTuple):
    """One row of the decision table"""
    expression: Expression
    confidence: float
    matches: Callable[[FacialMetrics], bool]


# Evaluated top to bottom, first match wins
EXPRESSION_RULES: Tuple[ExpressionRule, ...] = (
    ExpressionRule(
        Expression.WINK, 0.9,
        lambda m: m.eye_difference > 0.012
        and (m.left_eye_openness < 0.015 or m.right_eye_openness < 0.015),
    ),
    ExpressionRule(
        Expression.KISS, 0.85,
        lambda m: m.lips_pucker > 0.015 and m.mouth_width < 0.12,
    ),
    ExpressionRule(
        Expression.SURPRISED, 0.9,
        lambda m: m.mouth_openness > 0.045 and m.eyebrow_raise > 0.035,
    ),
    ExpressionRule(
        Expression.TONGUE_OUT, 0.8,
        lambda m: m.mouth_openness > 0.05 and m.mouth_width > 0.14 and m.smile_level > 0.01,
    ),
    ExpressionRule(
        Expression.VERY_HAPPY, 0.9,
        lambda m: m.smile_level > 0.045 and m.mouth_width > 0.15,
    ),
    ExpressionRule(
        Expression.HAPPY, 0.85,
        lambda m: m.smile_level > 0.025,
    ),
    ExpressionRule(
        Expression.SAD, 0.8,
        lambda m: m.smile_level < -0.015,
    ),
    ExpressionRule(
        Expression.THINKING, 0.75,
        lambda m: abs(m.head_tilt) > 0.03 and 0.025 < m.eyebrow_raise < 0.04,
    ),
    ExpressionRule(
        Expression.SLEEPY, 0.8,
        lambda m: m.left_eye_openness < 0.018 and m.right_eye_openness < 0.018
        and m.eye_difference < 0.005,
    ),
    ExpressionRule(
        Expression.CONFUSED, 0.7,
        lambda m: 0.02 < m.eyebrow_raise < 0.035 and abs(m.smile_level) < 0.015,
    ),
    ExpressionRule(
        Expression.ANGRY, 0.75,
        lambda m: m.eyebrow_raise < 0.025 and m.smile_level < 0.005 and m.mouth_width < 0.13,
    ),
)

DEFAULT_CONFIDENCE = 0.5

# A wide mouth counts toward the smile
WIDE_SMILE_WIDTH = 0.15
WIDE_SMILE_BONUS = 0.02


@dataclass
class StabilityState:
    """Rolling smoothing state, one per tracked face"""
    last_expression: Expression = Expression.NEUTRAL
    counter: int = 0


class ExpressionClassifier:
    """
    Expression classifier with frame-to-frame smoothing

    Eight geometric metrics feed an ordered rule table. The committed
    label is then passed through a small stability filter whose state
    lives on the instance: use one classifier per camera stream.
    """

    STABLE_FRAMES = 2

    def __init__(self):
        self._state = StabilityState()

    @property
    def stability(self) -> StabilityState:
        """Copy of the rolling state"""
        return StabilityState(self._state.last_expression, self._state.counter)

    def reset(self):
        """Same as constructing a new classifier"""
        self._state = StabilityState()

    def analyze(self, landmarks: LandmarkFrame) -> ExpressionResult:
        """
        Classify the expression of one frame

        Args:
            landmarks: 468 landmarks

        Returns:
            ExpressionResult: committed expression, its emoji and the
            confidence of the rule that fired this call. Incomplete frames
            give NEUTRAL with confidence 0 and leave the state untouched.
        """
        if not GeometryCalculator.has_full_mesh(landmarks):
            return ExpressionResult(
                expression=Expression.NEUTRAL,
                emoji=Expression.NEUTRAL.emoji,
                confidence=0.0,
            )

        metrics = self.compute_metrics(landmarks)
        detected, confidence = self.classify_metrics(metrics)
        committed = self._update_stability(detected)

        logger.debug(f"expression raw={detected.value} committed={committed.value} "
                     f"metrics={metrics.to_dict()}")

        return ExpressionResult(
            expression=committed,
            emoji=committed.emoji,
            confidence=confidence,
        )

    @staticmethod
    def classify_metrics(metrics: FacialMetrics,
                         rules: Tuple[ExpressionRule, ...] = EXPRESSION_RULES
                         ) -> Tuple[Expression, float]:
        """First matching rule, NEUTRAL when none matches"""
        for rule in rules:
            if rule.matches(metrics):
                return rule.expression, rule.confidence
        return Expression.NEUTRAL, DEFAULT_CONFIDENCE

    def _update_stability(self, detected: Expression) -> Expression:
        state = self._state
        if detected == state.last_expression:
            state.counter += 1
        else:
            state.counter = 0

        # NOTE: the second clause commits any change immediately, so
        # STABLE_FRAMES never delays a switch.
        if state.counter >= self.STABLE_FRAMES or detected != state.last_expression:
            state.last_expression = detected

        return state.last_expression

    # ── metrics ──

    @classmethod
    def compute_metrics(cls, landmarks: LandmarkFrame) -> FacialMetrics:
        return FacialMetrics(
            mouth_openness=cls.mouth_openness(landmarks),
            smile_level=cls.smile_level(landmarks),
            eyebrow_raise=cls.eyebrow_raise(landmarks),
            left_eye_openness=cls.eye_openness(landmarks, 'left'),
            right_eye_openness=cls.eye_openness(landmarks, 'right'),
            mouth_width=cls.mouth_width(landmarks),
            lips_pucker=cls.lips_pucker(landmarks),
            head_tilt=cls.head_tilt(landmarks),
        )

    @staticmethod
    def mouth_openness(landmarks: LandmarkFrame) -> float:
        """Mean of the outer and inner lip gaps"""
        outer = GeometryCalculator.vertical_gap(
            landmarks[MOUTH_LANDMARKS['upper_lip_outer']],
            landmarks[MOUTH_LANDMARKS['lower_lip_outer']],
        )
        inner = GeometryCalculator.vertical_gap(
            landmarks[MOUTH_LANDMARKS['upper_lip_inner']],
            landmarks[MOUTH_LANDMARKS['lower_lip_inner']],
        )
        return (outer + inner) / 2

    @staticmethod
    def smile_level(landmarks: LandmarkFrame) -> float:
        """
        Positive when the mouth corners sit above the lip centers

        Mouths wider than WIDE_SMILE_WIDTH get a fixed bonus.
        """
        left_corner = landmarks[MOUTH_LANDMARKS['left_corner']]
        right_corner = landmarks[MOUTH_LANDMARKS['right_corner']]
        upper = landmarks[MOUTH_LANDMARKS['upper_lip_center']]
        lower = landmarks[MOUTH_LANDMARKS['lower_lip_center']]

        mouth_center_y = (upper.y + lower.y) / 2
        corner_y = (left_corner.y + right_corner.y) / 2

        bonus = WIDE_SMILE_BONUS if abs(right_corner.x - left_corner.x) > WIDE_SMILE_WIDTH else 0.0
        return mouth_center_y - corner_y + bonus

    @staticmethod
    def eyebrow_raise(landmarks: LandmarkFrame) -> float:
        """Mean distance from eye top up to the eyebrow, both sides"""
        distances: List[float] = []
        for side in ('left', 'right'):
            points = EYEBROW_LANDMARKS[side]
            brow_y = GeometryCalculator.mean_y(landmarks[i] for i in points['brow'])
            distances.append(landmarks[points['eye_top']].y - brow_y)
        return sum(distances) / len(distances)

    @staticmethod
    def eye_openness(landmarks: LandmarkFrame, side: str) -> float:
        """Mean eyelid gap over four paired points"""
        if side not in EYE_OPENNESS_LANDMARKS:
            raise ValueError(f"side must be 'left' or 'right', got {side!r}")
        points = EYE_OPENNESS_LANDMARKS[side]
        return GeometryCalculator.mean_vertical_gap(landmarks, points['top'], points['bottom'])

    @staticmethod
    def mouth_width(landmarks: LandmarkFrame) -> float:
        return GeometryCalculator.horizontal_gap(
            landmarks[MOUTH_LANDMARKS['left_corner']],
            landmarks[MOUTH_LANDMARKS['right_corner']],
        )

    @staticmethod
    def lips_pucker(landmarks: LandmarkFrame) -> float:
        """Horizontal shift of the lip centers away from the corner midpoint"""
        lip_x, _ = GeometryCalculator.midpoint(
            landmarks[MOUTH_LANDMARKS['upper_lip_center']],
            landmarks[MOUTH_LANDMARKS['lower_lip_center']],
        )
        corner_x, _ = GeometryCalculator.midpoint(
            landmarks[MOUTH_LANDMARKS['left_corner']],
            landmarks[MOUTH_LANDMARKS['right_corner']],
        )
        return abs(lip_x - corner_x)

    @staticmethod
    def head_tilt(landmarks: LandmarkFrame) -> float:
        """Slope of the eye line, positive when tilted right"""
        return GeometryCalculator.slope(
            landmarks[DIRECTION_LANDMARKS['left_eye']],
            landmarks[DIRECTION_LANDMARKS['right_eye']],
        )
