"""GDAL helper exceptions for consistent error handling."""

import functools
from typing import Optional, Type


class GDALHelperError(Exception):
    """Base error for all GDAL helper failures."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class DatasetOpenError(GDALHelperError):
    """Raised when GDAL cannot open a raster or vector dataset."""
    pass


class GeoTransformError(GDALHelperError):
    """Raised when a geo-transform cannot be read, written or inverted."""
    pass


class SpatialReferenceError(GDALHelperError):
    """Raised when a spatial reference system cannot be built or exported."""
    pass


class CoordinateTransformError(GDALHelperError):
    """Raised when a coordinate transformation cannot be created or applied."""
    pass


class RasterStatisticsError(GDALHelperError):
    """Raised when band statistics cannot be computed."""
    pass


class UtilityOptionsError(GDALHelperError):
    """Raised when arguments for a GDAL utility program are rejected."""
    pass


class TranslateError(GDALHelperError):
    """Raised when gdal_translate fails to produce a dataset."""
    pass


def handle_gdal_error(operation_name: str, error_class: Type[GDALHelperError] = GDALHelperError):
    """Decorator to convert GDAL exceptions into GDAL helper errors.

    With gdal.UseExceptions() in effect the bindings raise RuntimeError.
    Those are wrapped in ``error_class``; errors already in the hierarchy
    pass through.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except GDALHelperError:
                raise
            except RuntimeError as e:
                raise error_class(f"{operation_name} failed: {e}", e) from e
        return wrapper
    return decorator
