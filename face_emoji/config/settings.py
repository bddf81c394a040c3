"""Application settings"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ..models import HeadDirection
from ..utils.config_loader import Config
from ..utils.exceptions import ConfigurationError
from ..utils.validators import validate_confidence, validate_hex_color
from .constants import DEFAULT_BORDER_COLORS, DEFAULT_DIRECTION_THRESHOLD


@dataclass
class CameraConfig:
    """Capture settings"""

    device_id: int = 0
    width: int = 640
    height: int = 480
    mirror: bool = True  # flip horizontally like a front-facing preview
    max_read_failures: int = 30  # consecutive empty reads before the camera is given up

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"camera size must be positive, got {self.width}x{self.height}"
            )
        if self.device_id < 0:
            raise ConfigurationError("device_id must be >= 0")
        if self.max_read_failures < 1:
            raise ConfigurationError("max_read_failures must be >= 1")


@dataclass
class TrackingConfig:
    """Landmark model and direction classification settings"""

    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    direction_threshold: float = DEFAULT_DIRECTION_THRESHOLD
    max_num_faces: int = 1
    refine_landmarks: bool = True

    def __post_init__(self):
        validate_confidence(self.min_detection_confidence, "min_detection_confidence")
        validate_confidence(self.min_tracking_confidence, "min_tracking_confidence")
        if self.direction_threshold <= 0:
            raise ConfigurationError(
                f"direction_threshold must be > 0, got {self.direction_threshold}"
            )
        if self.max_num_faces < 1:
            raise ConfigurationError("max_num_faces must be >= 1")


@dataclass
class RenderingConfig:
    """Overlay and border style"""

    target_fps: int = 30
    landmark_color: str = '#00FF00'
    landmark_radius: int = 2
    border_thickness: int = 12
    font_path: Optional[str] = None  # TrueType font with emoji glyphs
    font_size: int = 18
    border_colors: Dict[HeadDirection, str] = field(
        default_factory=lambda: {HeadDirection(k): v for k, v in DEFAULT_BORDER_COLORS.items()}
    )

    def __post_init__(self):
        if self.target_fps <= 0:
            raise ConfigurationError("target_fps must be > 0")
        if self.landmark_radius < 1:
            raise ConfigurationError("landmark_radius must be >= 1")
        if self.font_size < 1:
            raise ConfigurationError("font_size must be >= 1")
        if self.border_thickness < 0:
            raise ConfigurationError("border_thickness must be >= 0")
        validate_hex_color(self.landmark_color, "landmark_color")

        # keys may come in as 'left' strings from YAML
        try:
            self.border_colors = {HeadDirection(k): v for k, v in self.border_colors.items()}
        except ValueError as e:
            raise ConfigurationError(f"Unknown direction in border_colors: {e}")

        missing = set(HeadDirection) - set(self.border_colors)
        if missing:
            names = ', '.join(sorted(d.value for d in missing))
            raise ConfigurationError(f"border_colors missing: {names}")

        for direction, color in self.border_colors.items():
            validate_hex_color(color, f"border_colors.{direction.value}")

        # each direction must be visually distinguishable
        normalized = [c.lower() for c in self.border_colors.values()]
        if len(set(normalized)) != len(normalized):
            raise ConfigurationError("border_colors must be distinct per direction")

    @property
    def frame_budget_ms(self) -> float:
        return 1000.0 / self.target_fps


@dataclass
class AppConfig:
    """All application settings"""

    camera: CameraConfig = field(default_factory=CameraConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    recognition_interval: float = 1.0

    def __post_init__(self):
        if self.recognition_interval < 0:
            raise ConfigurationError("recognition_interval must be >= 0")


def _section(config: Config, name: str, fields: Tuple[str, ...]) -> Dict[str, Any]:
    data = config.get(name, {}) or {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"'{name}' section must be a mapping")
    return {k: data[k] for k in fields if k in data}


def load_app_config(config_path: Optional[str] = None,
                    config: Optional[Config] = None) -> AppConfig:
    """
    Build AppConfig from a YAML file

    Args:
        config_path: YAML path (ignored when config is given)
        config: already loaded Config

    Returns:
        AppConfig: validated settings, dataclass defaults for missing keys
    """
    if config is None:
        config = Config(config_path)

    camera = CameraConfig(**_section(
        config, 'camera', ('device_id', 'width', 'height', 'mirror', 'max_read_failures')))
    tracking = TrackingConfig(**_section(
        config, 'tracking', ('min_detection_confidence', 'min_tracking_confidence',
                             'direction_threshold', 'max_num_faces', 'refine_landmarks')))
    rendering = RenderingConfig(**_section(
        config, 'rendering', ('target_fps', 'landmark_color', 'landmark_radius',
                              'border_thickness', 'font_path', 'font_size',
                              'border_colors')))

    interval = config.get('emoji_collection.recognition_interval', 1.0)

    return AppConfig(
        camera=camera,
        tracking=tracking,
        rendering=rendering,
        recognition_interval=float(interval),
    )
