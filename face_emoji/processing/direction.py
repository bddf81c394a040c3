"""Head direction classification from nose position"""

from typing import Optional, Tuple

from ..config.constants import DEFAULT_DIRECTION_THRESHOLD, DIRECTION_LANDMARKS
from ..models import HeadDirection, LandmarkFrame
from ..utils import get_logger
from .geometry import GeometryCalculator

logger = get_logger(__name__)


class DirectionClassifier:
    """
    Maps a landmark frame to one of five head directions

    The nose tip is compared with a face center built from both eyes
    (horizontal) and eyes plus chin (vertical). Only the axis with the
    larger offset is tested against the threshold. The capture is
    mirrored, so the nose moving right in the image means looking LEFT.

    Stateless: the same frame and threshold always give the same label.
    """

    def __init__(self, threshold: float = DEFAULT_DIRECTION_THRESHOLD):
        """
        Args:
            threshold: minimum normalized offset needed to leave CENTER
        """
        self.threshold = threshold

    def classify(self, landmarks: LandmarkFrame,
                 threshold: Optional[float] = None) -> HeadDirection:
        """
        Classify head direction

        Args:
            landmarks: 468 landmarks (shorter frames give CENTER)
            threshold: overrides the instance threshold for this call

        Returns:
            HeadDirection
        """
        if threshold is None:
            threshold = self.threshold

        if not GeometryCalculator.has_full_mesh(landmarks):
            return HeadDirection.CENTER

        horizontal_offset, vertical_offset = self.offsets(landmarks)

        # horizontal wins only with a strictly larger magnitude
        if abs(horizontal_offset) > abs(vertical_offset):
            if horizontal_offset > threshold:
                direction = HeadDirection.LEFT
            elif horizontal_offset < -threshold:
                direction = HeadDirection.RIGHT
            else:
                direction = HeadDirection.CENTER
        else:
            if vertical_offset > threshold:
                direction = HeadDirection.DOWN
            elif vertical_offset < -threshold:
                direction = HeadDirection.UP
            else:
                direction = HeadDirection.CENTER

        logger.debug(
            f"direction offsets h={horizontal_offset:.4f} v={vertical_offset:.4f} "
            f"-> {direction.value}"
        )
        return direction

    @staticmethod
    def offsets(landmarks: LandmarkFrame) -> Tuple[float, float]:
        """
        Nose tip offset from the face center

        Returns:
            (horizontal_offset, vertical_offset) in normalized units
        """
        nose_tip = landmarks[DIRECTION_LANDMARKS['nose_tip']]
        left_eye = landmarks[DIRECTION_LANDMARKS['left_eye']]
        right_eye = landmarks[DIRECTION_LANDMARKS['right_eye']]
        chin = landmarks[DIRECTION_LANDMARKS['chin']]

        center_x = (left_eye.x + right_eye.x) / 2
        # vertical center averages both eyes and the chin
        center_y = (left_eye.y + right_eye.y + chin.y) / 3

        return nose_tip.x - center_x, nose_tip.y - center_y
