"""Console output for the CLI and interactive sessions."""

import logging
import os
import sys
from typing import Optional, Union

from ..formatters import HumanFormatter
from ..gdal_bridge import GDAL_LOGGER_NAME

Level = Union[int, str]


def level_number(level: Level, default: int = logging.INFO) -> int:
    """Accept 'warning', 'WARNING' or logging.WARNING."""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), default)


def stream_supports_color(stream) -> bool:
    if not getattr(stream, 'isatty', None) or not stream.isatty():
        return False
    # https://no-color.org
    if os.environ.get('NO_COLOR'):
        return False
    return os.environ.get('TERM', '') != 'dumb'


class ConsoleHandler(logging.StreamHandler):
    """Human-readable records on stderr.

    Messages forwarded from GDAL's error handler get their own threshold,
    ``gdal_level``. CPL debug output (``CPL_DEBUG=ON``) is very chatty, so
    by default only GDAL warnings and worse reach the console even when
    the handler itself runs at INFO or DEBUG. File handlers still see
    everything.
    """

    def __init__(self,
                 stream=None,
                 level: Level = logging.INFO,
                 gdal_level: Level = logging.WARNING,
                 use_colors: Optional[bool] = None,
                 show_context: bool = True):
        super().__init__(sys.stderr if stream is None else stream)

        if use_colors is None:
            use_colors = stream_supports_color(self.stream)

        self.gdal_level = level_number(gdal_level, logging.WARNING)
        self.setLevel(level_number(level))
        self.setFormatter(HumanFormatter(use_colors=use_colors, show_context=show_context))

    @classmethod
    def from_config(cls, config, level: Optional[Level] = None, stream=None) -> 'ConsoleHandler':
        """Build a handler from the ``logging`` section of a Config."""
        return cls(
            stream=stream,
            level=level if level is not None else config.get('logging.level', 'INFO'),
            gdal_level=config.get('logging.gdal_console_level', 'WARNING'),
            show_context=config.get('logging.show_context', True),
        )

    def filter(self, record: logging.LogRecord) -> bool:
        from_gdal = (record.name == GDAL_LOGGER_NAME
                     or record.name.startswith(GDAL_LOGGER_NAME + '.'))
        if from_gdal and record.levelno < self.gdal_level:
            return False
        return super().filter(record)
