"""Landmark geometry helpers shared by the classifiers"""

from typing import Iterable, Sequence, Tuple

from ..config.constants import FACE_MESH_SIZE, TILT_EPSILON
from ..models import Landmark, LandmarkFrame


class GeometryCalculator:
    """Measurements on normalized landmark coordinates"""

    @staticmethod
    def has_full_mesh(landmarks: LandmarkFrame) -> bool:
        """
        Whether the frame is a fully resolved face

        Args:
            landmarks: landmark frame (may be empty)

        Returns:
            True when at least 468 points are present
        """
        return landmarks is not None and len(landmarks) >= FACE_MESH_SIZE

    @staticmethod
    def midpoint(p1: Landmark, p2: Landmark) -> Tuple[float, float]:
        return ((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)

    @staticmethod
    def vertical_gap(p1: Landmark, p2: Landmark) -> float:
        return abs(p2.y - p1.y)

    @staticmethod
    def horizontal_gap(p1: Landmark, p2: Landmark) -> float:
        return abs(p2.x - p1.x)

    @staticmethod
    def mean_y(points: Iterable[Landmark]) -> float:
        points = list(points)
        return sum(p.y for p in points) / len(points)

    @staticmethod
    def mean_vertical_gap(landmarks: LandmarkFrame,
                          top: Sequence[int],
                          bottom: Sequence[int]) -> float:
        """
        Average |dy| over paired landmark indices

        Args:
            landmarks: landmark frame
            top: indices of the upper points
            bottom: indices of the lower points, paired by position

        Returns:
            float: mean vertical distance
        """
        pairs = list(zip(top, bottom))
        total = sum(
            GeometryCalculator.vertical_gap(landmarks[t], landmarks[b]) for t, b in pairs
        )
        return total / len(pairs)

    @staticmethod
    def slope(p1: Landmark, p2: Landmark, epsilon: float = TILT_EPSILON) -> float:
        """dy / (dx + epsilon) of the line p1 -> p2"""
        return (p2.y - p1.y) / (p2.x - p1.x + epsilon)
