# gdal_helpers/core/environment.py
"""GDAL runtime initialisation and teardown.

Any code that consumes the GDAL/OGR API through these helpers should call
``init_gdal()`` once before use (or wrap its work in ``gdal_environment()``).
Initialisation points GDAL at its data directory, applies config options,
registers every format driver and forwards GDAL's own error messages into
Python logging.
"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from osgeo import gdal, ogr, osr

from gdal_helpers.infrastructure.logging import GDALErrorLogger, get_logger

logger = get_logger(__name__)

_lock = threading.Lock()
_error_handler: Optional[GDALErrorLogger] = None
_initialized = False


def _resolve_config(config):
    if config is None:
        from gdal_helpers.config import config as global_config
        return global_config
    return config


def init_gdal(config=None) -> Optional[GDALErrorLogger]:
    """Configure GDAL from the ``gdal`` config section.

    Safe to call more than once: options are re-applied, but the error
    handler is only installed the first time.

    Returns:
        The installed GDALErrorLogger, or None when handler installation is disabled.
    """
    global _error_handler, _initialized
    config = _resolve_config(config)

    with _lock:
        data_dir = config.get('gdal.data_dir')
        if data_dir:
            data_path = Path(data_dir).expanduser().resolve()
            if not data_path.is_dir():
                logger.warning(f"GDAL data directory does not exist: {data_path}")
            gdal.SetConfigOption('GDAL_DATA', str(data_path))

        for key, value in (config.get('gdal.config_options') or {}).items():
            gdal.SetConfigOption(str(key), None if value is None else str(value))

        cache_max_mb = config.get('gdal.cache_max_mb')
        if cache_max_mb:
            gdal.SetCacheMax(int(cache_max_mb) * 1024 * 1024)

        if config.get('gdal.use_exceptions', True):
            gdal.UseExceptions()
            ogr.UseExceptions()
            osr.UseExceptions()

        if config.get('gdal.register_drivers', True):
            gdal.AllRegister()

        if config.get('gdal.install_error_handler', True) and _error_handler is None:
            _error_handler = GDALErrorLogger()
            # Global handler, applies to every thread
            gdal.SetErrorHandler(_error_handler)

        if not _initialized:
            logger.info(
                f"GDAL {gdal.VersionInfo('RELEASE_NAME')} initialised "
                f"with {gdal.GetDriverCount()} drivers",
                extra={'context': {'gdal_data': gdal.GetConfigOption('GDAL_DATA')}}
            )
        _initialized = True

        return _error_handler


def shutdown_gdal():
    """Restore GDAL's default error handler if init_gdal() replaced it."""
    global _error_handler, _initialized

    with _lock:
        if _error_handler is not None:
            gdal.SetErrorHandler('CPLDefaultErrorHandler')
            _error_handler = None
        _initialized = False


def is_initialized() -> bool:
    return _initialized


def get_error_handler() -> Optional[GDALErrorLogger]:
    return _error_handler


@contextmanager
def gdal_environment(config=None):
    """Initialise GDAL for the duration of a block.

    Example:
        with gdal_environment():
            ds = open_raster('dem.tif')
    """
    handler = init_gdal(config)
    try:
        yield handler
    finally:
        shutdown_gdal()


def gdal_version_num() -> int:
    """GDAL version as an integer, e.g. 3080400 for 3.8.4."""
    return int(gdal.VersionInfo('VERSION_NUM'))


def gdal_compute_version(major: int, minor: int, patch: int = 0) -> int:
    """Python counterpart of the GDAL_COMPUTE_VERSION macro."""
    return major * 1000000 + minor * 10000 + patch * 100
