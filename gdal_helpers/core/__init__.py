"""Core GDAL runtime management and error types."""

from .environment import (
    init_gdal, shutdown_gdal, gdal_environment, is_initialized,
    get_error_handler, gdal_version_num, gdal_compute_version
)
from .exceptions import (
    GDALHelperError, DatasetOpenError, GeoTransformError, SpatialReferenceError,
    CoordinateTransformError, RasterStatisticsError, UtilityOptionsError,
    TranslateError, handle_gdal_error
)

__all__ = [
    'init_gdal',
    'shutdown_gdal',
    'gdal_environment',
    'is_initialized',
    'get_error_handler',
    'gdal_version_num',
    'gdal_compute_version',
    'GDALHelperError',
    'DatasetOpenError',
    'GeoTransformError',
    'SpatialReferenceError',
    'CoordinateTransformError',
    'RasterStatisticsError',
    'UtilityOptionsError',
    'TranslateError',
    'handle_gdal_error',
]
