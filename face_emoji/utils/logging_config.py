"""
Logging configuration module.
Centralized logging setup with console and rotating file handlers.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config_loader import get_config

ROOT_LOGGER = 'face_emoji'

_DEFAULT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
_DEFAULT_DATE_FORMAT = '%H:%M:%S'


def _level(value, default: int) -> int:
    return getattr(logging, str(value).upper(), default)


def _configure_root(level: Optional[str] = None, reset: bool = False) -> logging.Logger:
    """Attach handlers to the package logger once; module loggers propagate to it"""
    root = logging.getLogger(ROOT_LOGGER)

    if reset:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    # handlers already attached: do not duplicate
    if root.handlers:
        if level is not None:
            root.setLevel(_level(level, logging.INFO))
        return root

    log_config = get_config().get('logging', {}) or {}
    root.setLevel(_level(level if level is not None else log_config.get('level', 'INFO'),
                         logging.INFO))

    formatter = logging.Formatter(
        log_config.get('format', _DEFAULT_FORMAT),
        datefmt=log_config.get('date_format', _DEFAULT_DATE_FORMAT),
    )

    console = log_config.get('console', {}) or {}
    if console.get('enabled', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console.get('level', 'INFO'), logging.INFO))
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    file_config = log_config.get('file', {}) or {}
    if file_config.get('enabled', False):
        log_dir = Path(file_config.get('directory', 'logs'))
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / file_config.get('filename', 'face_emoji.log'),
            maxBytes=file_config.get('max_bytes', 1_048_576),
            backupCount=file_config.get('backup_count', 3),
            encoding='utf-8'
        )
        file_handler.setLevel(_level(file_config.get('level', 'DEBUG'), logging.DEBUG))
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def setup_logging(name: Optional[str] = None, level: Optional[str] = None,
                  reset: bool = False) -> logging.Logger:
    """
    Configure logging from config.yaml and return a logger

    Args:
        name: logger name (usually __name__)
        level: overrides logging.level from config.yaml
        reset: drop the existing handlers and rebuild them from the
            current get_config() (after set_config() at startup)

    Returns:
        logging.Logger: configured logger
    """
    _configure_root(level, reset)
    return logging.getLogger(name or ROOT_LOGGER)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Shorthand for setup_logging(name)"""
    return setup_logging(name)
