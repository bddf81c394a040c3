"""Tests for the YAML config loader and settings dataclasses."""

import pytest
import yaml

from face_emoji.config.settings import (
    AppConfig,
    CameraConfig,
    RenderingConfig,
    TrackingConfig,
    load_app_config,
)
from face_emoji.models import HeadDirection
from face_emoji.utils import config_loader
from face_emoji.utils.config_loader import CONFIG_ENV_VAR, Config
from face_emoji.utils.exceptions import ConfigurationError
from face_emoji.utils.validators import validate_confidence, validate_hex_color


@pytest.fixture
def write_config(tmp_path):
    def _write(data, name='config.yaml'):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def restore_global_config():
    yield
    config_loader.set_config(None)


class TestConfigLoader:
    def test_packaged_default(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        config = Config()
        assert config.config_path == config_loader.DEFAULT_CONFIG_PATH
        assert config.get('tracking.direction_threshold') == 0.05

    def test_env_var_overrides_default(self, monkeypatch, write_config):
        path = write_config({'camera': {'device_id': 3}})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert Config().get('camera.device_id') == 3

    def test_dotted_get_with_default(self, write_config):
        config = Config(str(write_config({'a': {'b': {'c': 1}}})))
        assert config.get('a.b.c') == 1
        assert config.get('a.x.c', 'fallback') == 'fallback'
        assert config.get('a.b.c.d') is None

    def test_attribute_access(self, write_config):
        config = Config(str(write_config({'rendering': {'border_colors': {'up': '#9C27B0'}}})))
        assert config.rendering.border_colors.up == '#9C27B0'
        with pytest.raises(AttributeError):
            config.missing

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / 'nope.yaml'))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text('camera: [unclosed', encoding='utf-8')
        with pytest.raises(ValueError):
            Config(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text('- 1\n- 2\n', encoding='utf-8')
        with pytest.raises(ValueError):
            Config(str(path))

    def test_reload(self, write_config):
        path = write_config({'camera': {'device_id': 1}})
        config = Config(str(path))
        write_config({'camera': {'device_id': 2}})
        config.reload()
        assert config.get('camera.device_id') == 2

    def test_set_config_replaces_global(self, write_config, restore_global_config):
        config = Config(str(write_config({'camera': {'device_id': 5}})))
        config_loader.set_config(config)
        assert config_loader.get_config() is config

    def test_reload_global_config(self, write_config, restore_global_config):
        config_loader.set_config(Config(str(write_config({'camera': {'device_id': 5}}))))
        write_config({'camera': {'device_id': 6}})
        config_loader.reload_config()
        assert config_loader.get_config().get('camera.device_id') == 6


class TestSettings:
    def test_defaults(self):
        config = AppConfig()
        assert config.camera.mirror is True
        assert config.tracking.direction_threshold == 0.05
        assert config.rendering.border_colors[HeadDirection.LEFT] == '#2196F3'
        assert config.recognition_interval == 1.0

    def test_frame_budget(self):
        assert RenderingConfig(target_fps=50).frame_budget_ms == pytest.approx(20.0)

    @pytest.mark.parametrize("kwargs", [
        dict(direction_threshold=0),
        dict(direction_threshold=-0.1),
        dict(min_detection_confidence=1.5),
        dict(min_tracking_confidence=-0.1),
        dict(max_num_faces=0),
    ])
    def test_invalid_tracking(self, kwargs):
        with pytest.raises(ConfigurationError):
            TrackingConfig(**kwargs)

    def test_invalid_camera(self):
        with pytest.raises(ConfigurationError):
            CameraConfig(width=0)
        with pytest.raises(ConfigurationError):
            CameraConfig(device_id=-1)
        with pytest.raises(ConfigurationError):
            CameraConfig(max_read_failures=0)

    def test_border_color_keys_from_strings(self):
        colors = {'center': '#000001', 'left': '#000002', 'right': '#000003',
                  'up': '#000004', 'down': '#000005'}
        config = RenderingConfig(border_colors=colors)
        assert config.border_colors[HeadDirection.DOWN] == '#000005'

    def test_border_colors_must_be_distinct(self):
        colors = {'center': '#667eea', 'left': '#667EEA', 'right': '#FF9800',
                  'up': '#9C27B0', 'down': '#F44336'}
        with pytest.raises(ConfigurationError, match='distinct'):
            RenderingConfig(border_colors=colors)

    def test_border_colors_must_cover_every_direction(self):
        with pytest.raises(ConfigurationError, match='missing'):
            RenderingConfig(border_colors={'center': '#667eea'})

    def test_unknown_direction(self):
        colors = {'center': '#000001', 'left': '#000002', 'right': '#000003',
                  'up': '#000004', 'down': '#000005', 'sideways': '#000006'}
        with pytest.raises(ConfigurationError):
            RenderingConfig(border_colors=colors)

    def test_invalid_hex_color(self):
        with pytest.raises(ConfigurationError):
            RenderingConfig(landmark_color='green')

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestLoadAppConfig:
    def test_packaged_config(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        config = load_app_config()
        assert config.camera.width == 640
        assert config.rendering.target_fps == 30
        assert config.rendering.border_colors[HeadDirection.CENTER] == '#667eea'

    def test_partial_file_uses_defaults(self, write_config):
        path = write_config({'tracking': {'direction_threshold': 0.1},
                             'emoji_collection': {'recognition_interval': 2}})
        config = load_app_config(str(path))
        assert config.tracking.direction_threshold == 0.1
        assert config.tracking.min_detection_confidence == 0.5
        assert config.camera == CameraConfig()
        assert config.recognition_interval == 2.0

    def test_unknown_keys_are_ignored(self, write_config):
        path = write_config({'camera': {'device_id': 1, 'exposure': 'auto'}})
        assert load_app_config(str(path)).camera.device_id == 1

    def test_invalid_value(self, write_config):
        path = write_config({'tracking': {'direction_threshold': -1}})
        with pytest.raises(ConfigurationError):
            load_app_config(str(path))

    def test_section_must_be_mapping(self, write_config):
        path = write_config({'camera': 'usb'})
        with pytest.raises(ConfigurationError):
            load_app_config(str(path))

    def test_from_loaded_config(self, write_config):
        config = Config(str(write_config({'camera': {'mirror': False}})))
        assert load_app_config(config=config).camera.mirror is False


class TestValidators:
    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_valid_confidence(self, value):
        validate_confidence(value)

    @pytest.mark.parametrize("value", ['#abc', '00FF00', '#00FF0G', None])
    def test_invalid_hex(self, value):
        with pytest.raises(ConfigurationError):
            validate_hex_color(value)
