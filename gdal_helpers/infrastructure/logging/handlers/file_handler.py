"""Rotating log file under the configured logs directory."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ..formatters import HumanFormatter, JsonFormatter

DEFAULT_LOG_NAME = 'gdal_helpers.log'


def default_log_path(config) -> Path:
    """``logging.log_file`` if set, else ``<paths.logs_dir>/gdal_helpers.log``."""
    configured = config.get('logging.log_file')
    if configured:
        return Path(configured).expanduser()
    return Path(config.get('paths.logs_dir')).expanduser() / DEFAULT_LOG_NAME


class FileHandler(RotatingFileHandler):
    """Records at every level, one JSON object per line unless ``use_json`` is off.

    The file (and its directory) is only created once the first record is
    written.
    """

    def __init__(self,
                 filename: Union[str, Path],
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 3,
                 use_json: bool = True):
        path = Path(filename).expanduser()
        self.log_path = path
        super().__init__(str(path), maxBytes=max_bytes, backupCount=backup_count,
                         encoding='utf-8', delay=True)

        formatter = JsonFormatter() if use_json else HumanFormatter(use_colors=False)
        self.setFormatter(formatter)
        self.setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, config, filename: Optional[Union[str, Path]] = None) -> 'FileHandler':
        """Build a handler from the ``logging`` and ``paths`` sections of a Config."""
        return cls(
            filename if filename is not None else default_log_path(config),
            max_bytes=config.get('logging.max_file_size', 10 * 1024 * 1024),
            backup_count=config.get('logging.backup_count', 3),
            use_json=config.get('logging.use_json', True),
        )

    def _open(self):
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        return super()._open()
