"""Application controller: camera -> tracker -> renderer loop"""

import threading
import time
from dataclasses import replace
from typing import Optional

import cv2
import numpy as np

from .config.settings import AppConfig
from .core.camera import CameraManager
from .models import ApplicationState, TrackingResult
from .processing.emoji_counter import EmojiCollection
from .processing.face_tracker import FaceTracker
from .rendering.renderer import RenderingEngine
from .utils import get_logger
from .utils.exceptions import CameraError, FaceEmojiError

logger = get_logger(__name__)

WINDOW_NAME = 'Face Emoji Tracker'
_QUIT_KEYS = (ord('q'), 27)  # q, Esc
_STOP_KEY = ord(' ')


class ApplicationController:
    """
    Orchestrates capture, tracking and rendering

    Frames are processed one at a time. A step() that arrives while the
    previous frame is still being processed is dropped, not queued.
    """

    def __init__(self, camera: CameraManager, tracker: FaceTracker,
                 renderer: RenderingEngine, config: Optional[AppConfig] = None,
                 collection: Optional[EmojiCollection] = None,
                 clock=time.perf_counter):
        """
        Args:
            camera: frame source
            tracker: landmark model + classifiers
            renderer: overlay drawing
            config: application settings
            collection: emoji counters (created from config when None)
            clock: monotonic time source in seconds
        """
        self.camera = camera
        self.tracker = tracker
        self.renderer = renderer
        self.config = config or AppConfig()
        self.collection = collection or EmojiCollection(self.config.recognition_interval)
        self._clock = clock

        self.state = ApplicationState()
        self.last_frame: Optional[np.ndarray] = None
        self._processing = threading.Lock()
        self._frame_count = 0
        self._last_fps_update = 0.0
        self._frame_budget_ms = self.config.rendering.frame_budget_ms

    def start(self):
        """
        Open the camera, then load the tracker

        Raises:
            CameraError / FaceEmojiError: startup failed (also stored in state.error)
        """
        self.camera.on_error(lambda error: self._handle_error(error.message))

        try:
            self.camera.initialize()
            self.state.camera_active = True

            self.tracker.initialize()
            self.state.tracker_ready = True
        except CameraError:
            # already reported through on_error
            raise
        except FaceEmojiError as e:
            self._handle_error(str(e))
            raise

        self._last_fps_update = self._clock()
        logger.info("Application started")

    def step(self) -> Optional[TrackingResult]:
        """
        Process the next camera frame

        Safe to call from several threads (e.g. a capture callback and
        the main loop): only one frame is processed at a time.

        Returns:
            TrackingResult, None when no frame was available or the
            previous frame is still in flight
        """
        if not self._processing.acquire(blocking=False):
            self.state.frames_skipped += 1
            return None

        try:
            frame = self.camera.read()
            if frame is None:
                return None

            started = self._clock()
            result = self.tracker.process_frame(frame)
            self.last_frame = self.renderer.render_frame(frame, result, self.state.fps)

            self.state.current_direction = result.direction
            if result.detected:
                self.state.emoji = result.emoji
                self.state.expression = result.expression
            self.collection.record(result.expression)
            self.state.frames_processed += 1
            self._update_fps()

            processing_ms = (self._clock() - started) * 1000
            if processing_ms > self._frame_budget_ms:
                logger.warning(
                    f"Frame processing took {processing_ms:.2f}ms "
                    f"(budget: {self._frame_budget_ms:.0f}ms)"
                )
            return result
        finally:
            self._processing.release()

    def run(self, max_frames: Optional[int] = None, display: bool = True):
        """
        Main loop until 'q'/Esc, Space (stops the camera) or max_frames

        Args:
            max_frames: stop after this many processed frames
            display: show the annotated frames in an OpenCV window
        """
        try:
            while self.state.camera_active:
                if max_frames is not None and self.state.frames_processed >= max_frames:
                    break

                try:
                    self.step()
                except CameraError:
                    # already reported through on_error
                    break
                except FaceEmojiError as e:
                    # one bad frame does not end the session
                    logger.error(f"Error processing frame: {e}")

                if not self.camera.is_active():
                    self._handle_error("Camera stopped delivering frames")
                    break

                if display and self.last_frame is not None:
                    cv2.imshow(WINDOW_NAME, self.last_frame)
                    key = cv2.waitKey(1) & 0xFF
                    if key in _QUIT_KEYS:
                        break
                    if key == _STOP_KEY:
                        logger.info("Camera stopped. Restart the application to resume.")
                        break
        finally:
            self.stop()
            if display:
                cv2.destroyAllWindows()

    def stop(self):
        """Release camera and tracker"""
        self.camera.stop()
        self.state.camera_active = False

        self.tracker.dispose()
        self.state.tracker_ready = False

        self.renderer.clear()
        logger.info(f"Application stopped, collected: {self.collection.counts()}")

    def get_state(self) -> ApplicationState:
        return replace(self.state)

    def _update_fps(self):
        now = self._clock()
        self._frame_count += 1

        elapsed = now - self._last_fps_update
        if elapsed >= 1.0:
            self.state.fps = round(self._frame_count / elapsed)
            self._frame_count = 0
            self._last_fps_update = now

    def _handle_error(self, message: str):
        self.state.error = message
        logger.error(f"Application error: {message}")
