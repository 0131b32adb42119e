from .raster_types import (
    Vector2D, Vector3D, GeoTransform, RasterCornerCoordinates, RasterMinMax
)

__all__ = [
    'Vector2D',
    'Vector3D',
    'GeoTransform',
    'RasterCornerCoordinates',
    'RasterMinMax',
]
