"""Settings and landmark constants"""

from .settings import (
    AppConfig,
    CameraConfig,
    RenderingConfig,
    TrackingConfig,
    load_app_config,
)

__all__ = [
    'AppConfig',
    'CameraConfig',
    'RenderingConfig',
    'TrackingConfig',
    'load_app_config',
]
