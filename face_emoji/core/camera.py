"""OpenCV camera capture"""

from typing import Callable, List, Optional

import cv2
import numpy as np

from ..config.settings import CameraConfig
from ..utils import get_logger
from ..utils.exceptions import CameraError

logger = get_logger(__name__)


class CameraManager:
    """Opens a capture device and hands out BGR frames"""

    def __init__(self, config: Optional[CameraConfig] = None,
                 capture_factory: Callable[[int], object] = cv2.VideoCapture):
        """
        Args:
            config: capture settings
            capture_factory: builds the capture object from a device id
        """
        self.config = config or CameraConfig()
        self._capture_factory = capture_factory
        self._capture = None
        self._read_failures = 0
        self._error_callbacks: List[Callable[[CameraError], None]] = []
        self._ready_callbacks: List[Callable[[], None]] = []

    def on_error(self, callback: Callable[[CameraError], None]):
        self._error_callbacks.append(callback)

    def on_ready(self, callback: Callable[[], None]):
        self._ready_callbacks.append(callback)

    def initialize(self):
        """
        Open the device

        Raises:
            CameraError: device missing or not delivering frames
        """
        capture = self._capture_factory(self.config.device_id)
        if capture is None or not capture.isOpened():
            self._fail(CameraError(
                f"No camera found at device {self.config.device_id}", kind='not_found'))

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
        self._capture = capture
        self._read_failures = 0

        logger.info(
            f"Camera {self.config.device_id} opened "
            f"({self.config.width}x{self.config.height}, mirror={self.config.mirror})"
        )
        for callback in self._ready_callbacks:
            callback()

    def read(self) -> Optional[np.ndarray]:
        """
        Grab the next frame

        Returns:
            BGR frame, None when the camera is inactive or returned nothing

        Raises:
            CameraError: kind 'not_readable' after max_read_failures
                consecutive empty reads (the camera is stopped first)
        """
        if self._capture is None:
            return None

        ok, frame = self._capture.read()
        if not ok or frame is None:
            self._read_failures += 1
            logger.debug(f"Camera returned no frame ({self._read_failures} in a row)")
            if self._read_failures >= self.config.max_read_failures:
                self.stop()
                self._fail(CameraError(
                    f"Camera {self.config.device_id} returned no frame "
                    f"{self._read_failures} times in a row", kind='not_readable'))
            return None

        self._read_failures = 0
        if self.config.mirror:
            frame = cv2.flip(frame, 1)
        return frame

    def is_active(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    def stop(self):
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info("Camera stopped")

    def _fail(self, error: CameraError):
        logger.error(f"Camera error ({error.kind}): {error.message}")
        for callback in self._error_callbacks:
            callback(error)
        raise error
