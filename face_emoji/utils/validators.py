"""Input validation helpers"""

import re

import numpy as np

from .exceptions import ConfigurationError, InvalidImageError

_HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


def validate_image(image: np.ndarray) -> None:
    """
    Validate a camera frame

    Args:
        image: frame to validate (numpy array)

    Raises:
        InvalidImageError: image is not usable
    """
    if image is None:
        raise InvalidImageError("Image is None")

    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"Image must be numpy.ndarray, got {type(image)}")

    if image.size == 0:
        raise InvalidImageError("Image is empty")

    if len(image.shape) not in [2, 3]:
        raise InvalidImageError(f"Image must be 2D or 3D, got shape {image.shape}")

    if len(image.shape) == 3 and image.shape[2] not in [1, 3, 4]:
        raise InvalidImageError(f"Image channels must be 1, 3, or 4, got {image.shape[2]}")


def validate_confidence(confidence: float, param_name: str = "confidence") -> None:
    """Confidence must lie in [0.0, 1.0]"""
    if not 0.0 <= confidence <= 1.0:
        raise ConfigurationError(
            f"{param_name} must be between 0.0 and 1.0, got {confidence}"
        )


def validate_hex_color(color: str, param_name: str = "color") -> None:
    """Colors are configured as '#RRGGBB'"""
    if not isinstance(color, str) or not _HEX_COLOR.match(color):
        raise ConfigurationError(f"{param_name} must be a '#RRGGBB' string, got {color!r}")
