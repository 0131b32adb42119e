"""Forward messages emitted by GDAL/CPL into Python logging."""

import logging
import threading
from typing import Dict, Any

from osgeo import gdal

from .structured_logger import get_logger

GDAL_LOGGER_NAME = 'gdal_helpers.gdal'

# CPLErr -> logging level
CPL_LEVELS = {
    gdal.CE_None: logging.DEBUG,
    gdal.CE_Debug: logging.DEBUG,
    gdal.CE_Warning: logging.WARNING,
    gdal.CE_Failure: logging.ERROR,
    gdal.CE_Fatal: logging.CRITICAL,
}

CPL_NAMES = {
    gdal.CE_None: 'CE_None',
    gdal.CE_Debug: 'CE_Debug',
    gdal.CE_Warning: 'CE_Warning',
    gdal.CE_Failure: 'CE_Failure',
    gdal.CE_Fatal: 'CE_Fatal',
}


class GDALErrorLogger:
    """Callable suitable for gdal.SetErrorHandler().

    GDAL invokes it as ``handler(err_class, err_num, message)``. Each call
    becomes a log record on the ``gdal_helpers.gdal`` logger at the level
    matching the GDAL error class.
    """

    def __init__(self, logger_name: str = GDAL_LOGGER_NAME):
        self.logger = get_logger(logger_name)
        self._lock = threading.Lock()
        self._counts: Dict[str, int] = {name: 0 for name in CPL_NAMES.values()}

    def __call__(self, err_class: int, err_num: int, message: str):
        level = CPL_LEVELS.get(err_class, logging.ERROR)
        class_name = CPL_NAMES.get(err_class, f'CPLErr({err_class})')

        with self._lock:
            self._counts[class_name] = self._counts.get(class_name, 0) + 1

        text = message.strip() if isinstance(message, str) else str(message)
        self.logger.log(
            level,
            text,
            extra={'context': {
                'gdal_error_class': class_name,
                'gdal_error_num': err_num,
            }}
        )

    def get_stats(self) -> Dict[str, Any]:
        """Number of messages seen per GDAL error class."""
        with self._lock:
            return dict(self._counts)
