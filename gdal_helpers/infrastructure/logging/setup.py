"""Setup and configuration for the structured logging system."""

import logging
from typing import Optional, Dict, Any

from .structured_logger import get_logger
from .handlers import ConsoleHandler, FileHandler


def _clear_handlers(root_logger: logging.Logger):
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()


def setup_logging(config=None,
                  log_file: Optional[str] = None,
                  console: Optional[bool] = None,
                  log_level: Optional[str] = None):
    """Configure the structured logging system.

    Explicit arguments win over the ``logging`` section of the config.

    Args:
        config: Config instance (defaults to the global config)
        log_file: Optional log file path; enables file logging
        console: Whether to enable console logging
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    if config is None:
        from gdal_helpers.config import config as global_config
        config = global_config

    log_level = log_level or config.get('logging.level', 'INFO')
    if console is None:
        console = config.get('logging.console', True)

    root_logger = logging.getLogger()
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    root_logger.setLevel(level)
    _clear_handlers(root_logger)

    if console:
        root_logger.addHandler(ConsoleHandler.from_config(config, level=level))

    file_handler = None
    if log_file is not None or config.get('logging.file', False):
        file_handler = FileHandler.from_config(config, filename=log_file)
        root_logger.setLevel(min(level, logging.DEBUG))
        root_logger.addHandler(file_handler)

    logger = get_logger(__name__)
    logger.debug(
        "Structured logging system initialized",
        extra={
            'context': {
                'log_level': log_level,
                'handlers': {
                    'console': bool(console),
                    'file': file_handler.baseFilename if file_handler else None,
                }
            }
        }
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """Setup console-only logging for testing/debugging."""
    root_logger = logging.getLogger()
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)
    _clear_handlers(root_logger)

    root_logger.addHandler(ConsoleHandler(level=level))


def get_log_stats() -> Dict[str, Any]:
    """Describe the handlers attached to the root logger."""
    stats: Dict[str, Any] = {}

    for handler in logging.getLogger().handlers:
        if isinstance(handler, FileHandler):
            stats['file'] = {
                'filename': handler.baseFilename,
                'max_bytes': handler.maxBytes,
                'backup_count': handler.backupCount
            }
        elif isinstance(handler, ConsoleHandler):
            stats['console'] = {
                'level': logging.getLevelName(handler.level),
                'gdal_level': logging.getLevelName(handler.gdal_level)
            }

    return stats
