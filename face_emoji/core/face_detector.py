"""MediaPipe FaceMesh landmark detector"""

from typing import Any, Dict, List, Optional

import cv2
import mediapipe as mp
import numpy as np

from ..config.settings import TrackingConfig
from ..models import Landmark
from ..utils import get_logger
from ..utils.exceptions import ConfigurationError, DetectionError
from ..utils.validators import validate_image

logger = get_logger(__name__)


class FaceMeshDetector:
    """MediaPipe FaceMesh wrapper producing one landmark frame per image"""

    def __init__(self, config: Optional[TrackingConfig] = None):
        """
        Args:
            config: detection settings

        Raises:
            ConfigurationError: FaceMesh could not be created
        """
        self.config = config or TrackingConfig()

        try:
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=False,
                max_num_faces=self.config.max_num_faces,
                refine_landmarks=self.config.refine_landmarks,
                min_detection_confidence=self.config.min_detection_confidence,
                min_tracking_confidence=self.config.min_tracking_confidence
            )
            logger.info(f"MediaPipe FaceMesh initialized: {self.get_model_info()}")
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize MediaPipe FaceMesh: {e}") from e

    def detect(self, image: np.ndarray) -> List[Landmark]:
        """
        Detect the first face in a frame

        Args:
            image: BGR image (H, W, 3)

        Returns:
            List[Landmark]: face mesh points (468, or 478 with iris
            refinement), empty when no face is found
        """
        validate_image(image)

        # MediaPipe expects RGB
        image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB) if image.ndim == 3 else image

        try:
            results = self.face_mesh.process(image_rgb)
        except Exception as e:
            raise DetectionError(f"FaceMesh processing failed: {e}") from e

        if not results or not results.multi_face_landmarks:
            logger.debug("No face detected")
            return []

        face_landmarks = results.multi_face_landmarks[0]
        return [
            Landmark(x=lm.x, y=lm.y, z=lm.z or 0.0)
            for lm in face_landmarks.landmark
        ]

    def get_model_info(self) -> Dict[str, Any]:
        return {
            'max_num_faces': self.config.max_num_faces,
            'min_detection_confidence': self.config.min_detection_confidence,
            'min_tracking_confidence': self.config.min_tracking_confidence,
            'refine_landmarks': self.config.refine_landmarks,
        }

    def close(self):
        """Release the FaceMesh graph"""
        if getattr(self, 'face_mesh', None) is not None:
            self.face_mesh.close()
            self.face_mesh = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
