"""Overlay rendering: landmarks, direction border, status text"""

from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..config.constants import OVERLAY_LANDMARK_INDICES
from ..config.settings import RenderingConfig
from ..models import HeadDirection, Landmark, TrackingResult
from ..utils import get_logger

logger = get_logger(__name__)

BGR = Tuple[int, int, int]


def hex_to_bgr(color: str) -> BGR:
    """'#RRGGBB' -> (B, G, R)"""
    value = color.lstrip('#')
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)


class RenderingEngine:
    """Draws tracking results on top of camera frames"""

    def __init__(self, config: Optional[RenderingConfig] = None):
        """
        Args:
            config: colors, radius and border settings
        """
        self.config = config or RenderingConfig()
        self.landmark_color = hex_to_bgr(self.config.landmark_color)
        self.border_colors: Dict[HeadDirection, BGR] = {
            direction: hex_to_bgr(color)
            for direction, color in self.config.border_colors.items()
        }
        self.current_direction = HeadDirection.CENTER
        self._font = self._load_font(self.config.font_path, self.config.font_size)

    @staticmethod
    def _load_font(font_path: Optional[str], size: int):
        if font_path:
            try:
                return ImageFont.truetype(font_path, size)
            except OSError as e:
                logger.warning(f"Font {font_path} not usable, falling back to default: {e}")
        return ImageFont.load_default()

    def border_color(self, direction: HeadDirection) -> BGR:
        return self.border_colors[direction]

    def update_border(self, direction: HeadDirection):
        self.current_direction = direction

    def draw_landmarks(self, image: np.ndarray, landmarks: List[Landmark]) -> np.ndarray:
        """
        Draw the key landmarks in place

        Args:
            image: BGR frame
            landmarks: normalized landmarks of the frame

        Returns:
            the same image
        """
        height, width = image.shape[:2]
        for index in OVERLAY_LANDMARK_INDICES:
            if index >= len(landmarks):
                continue
            landmark = landmarks[index]
            center = (int(landmark.x * width), int(landmark.y * height))
            cv2.circle(image, center, self.config.landmark_radius, self.landmark_color, -1)
        return image

    def draw_border(self, image: np.ndarray, direction: HeadDirection) -> np.ndarray:
        thickness = self.config.border_thickness
        if thickness <= 0:
            return image
        height, width = image.shape[:2]
        # inset so the full stroke stays inside the frame
        half = thickness // 2
        cv2.rectangle(image, (half, half), (width - 1 - half, height - 1 - half),
                      self.border_color(direction), thickness)
        return image

    def draw_status(self, image: np.ndarray, result: TrackingResult, fps: int = 0) -> np.ndarray:
        """
        Direction, expression and FPS in the top-left corner

        Pillow is used so non-ASCII glyphs render when the configured
        font has them.
        """
        if result.detected:
            expression = result.expression.value if result.expression else '-'
            glyph = f" {result.emoji}" if self.config.font_path and result.emoji else ''
            text = f"{result.direction.value.upper()} | {expression}{glyph} | {fps} FPS"
        else:
            text = f"NO FACE | {fps} FPS"

        pil_image = Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
        draw = ImageDraw.Draw(pil_image)
        offset = self.config.border_thickness + 6
        b, g, r = self.border_color(result.direction)
        draw.text((offset, offset), text, font=self._font, fill=(r, g, b))
        image[:] = cv2.cvtColor(np.asarray(pil_image), cv2.COLOR_RGB2BGR)
        return image

    def render_frame(self, image: np.ndarray, result: TrackingResult, fps: int = 0) -> np.ndarray:
        """
        Annotated copy of a frame

        Args:
            image: BGR camera frame (left untouched)
            result: tracking result for this frame
            fps: measured frame rate

        Returns:
            np.ndarray: annotated BGR frame
        """
        canvas = image.copy()

        if result.detected and result.landmarks:
            self.draw_landmarks(canvas, result.landmarks)

        self.update_border(result.direction)
        self.draw_border(canvas, result.direction)
        self.draw_status(canvas, result, fps)
        return canvas

    def clear(self):
        self.current_direction = HeadDirection.CENTER
