"""Per-frame face tracking: landmarks -> direction + expression"""

from typing import Optional

import numpy as np

from ..config.constants import DETECTED_CONFIDENCE
from ..config.settings import TrackingConfig
from ..models import LandmarkFrame, TrackingResult
from ..utils import get_logger
from ..utils.exceptions import TrackerNotReadyError
from .direction import DirectionClassifier
from .expression import ExpressionClassifier

logger = get_logger(__name__)


class FaceTracker:
    """
    Runs the landmark model and both classifiers on each frame

    One tracker owns one ExpressionClassifier, so each camera stream
    needs its own tracker.
    """

    def __init__(self, detector=None,
                 config: Optional[TrackingConfig] = None):
        """
        Args:
            detector: object with detect(image) -> List[Landmark] and close()
                (None: MediaPipe FaceMesh created in initialize())
            config: tracking settings
        """
        self.config = config or TrackingConfig()
        self.detector = detector
        self.direction_classifier = DirectionClassifier(self.config.direction_threshold)
        self.expression_classifier = ExpressionClassifier()
        self.last_result: Optional[TrackingResult] = None
        self._ready = False

    def initialize(self):
        """Load the landmark model"""
        if self.detector is None:
            from ..core.face_detector import FaceMeshDetector
            self.detector = FaceMeshDetector(self.config)

        self._ready = True
        logger.info(f"FaceTracker ready (direction_threshold={self.config.direction_threshold})")

    def is_ready(self) -> bool:
        return self._ready

    def process_frame(self, image: np.ndarray) -> TrackingResult:
        """
        Track the face in one camera frame

        Args:
            image: BGR frame

        Returns:
            TrackingResult

        Raises:
            TrackerNotReadyError: initialize() was not called
        """
        if not self._ready or self.detector is None:
            raise TrackerNotReadyError("FaceTracker not initialized. Call initialize() first.")

        landmarks = self.detector.detect(image)
        return self.process_landmarks(landmarks)

    def process_landmarks(self, landmarks: LandmarkFrame) -> TrackingResult:
        """
        Build the tracking result for an already extracted landmark frame

        Args:
            landmarks: landmark frame, empty when no face was found

        Returns:
            TrackingResult
        """
        if not landmarks:
            result = TrackingResult.empty()
        else:
            expression = self.expression_classifier.analyze(landmarks)
            result = TrackingResult(
                detected=True,
                landmarks=list(landmarks),
                direction=self.direction_classifier.classify(landmarks),
                confidence=DETECTED_CONFIDENCE,
                emoji=expression.emoji,
                expression=expression.expression,
            )

        self.last_result = result
        return result

    def dispose(self):
        """Release the landmark model"""
        if self.detector is not None:
            self.detector.close()
            self.detector = None
        self._ready = False
        self.last_result = None
