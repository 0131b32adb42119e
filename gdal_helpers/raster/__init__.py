"""
Raster and vector dataset helpers.

This package provides:
- Dataset access (open/close, /vsimem/ filenames)
- Geo-transform arithmetic (corners, inversion, point mapping)
- Band statistics and raster buffers
"""

from .access import (
    open_raster, open_vector, open_dataset, close_dataset,
    unique_mem_filename, remove_mem_file
)
from .geotransform import (
    get_geo_transform, get_inverted_geo_transform, invert_geo_transform,
    apply_geo_transform, apply_geo_transform_array,
    get_raster_corners, set_raster_corners
)
from .statistics import compute_raster_min_max, allocate_raster_array, read_raster_data

__all__ = [
    # Dataset access
    'open_raster',
    'open_vector',
    'open_dataset',
    'close_dataset',
    'unique_mem_filename',
    'remove_mem_file',

    # Geo-transforms
    'get_geo_transform',
    'get_inverted_geo_transform',
    'invert_geo_transform',
    'apply_geo_transform',
    'apply_geo_transform_array',
    'get_raster_corners',
    'set_raster_corners',

    # Statistics
    'compute_raster_min_max',
    'allocate_raster_array',
    'read_raster_data',
]
