"""
Convenience helpers for working with GDAL/OGR from Python.

Call init_gdal() once before using the helpers (or use gdal_environment()):

    from gdal_helpers import init_gdal, open_raster, get_raster_corners

    init_gdal()
    ds = open_raster('dem.tif')
    corners = get_raster_corners(ds)
"""

from .core import (
    init_gdal, shutdown_gdal, gdal_environment,
    GDALHelperError, DatasetOpenError, GeoTransformError, SpatialReferenceError,
    CoordinateTransformError, RasterStatisticsError, UtilityOptionsError, TranslateError
)
from .foundations.types import (
    Vector2D, Vector3D, GeoTransform, RasterCornerCoordinates, RasterMinMax
)
from .raster import (
    open_raster, open_vector, open_dataset, close_dataset, unique_mem_filename, remove_mem_file,
    get_geo_transform, get_inverted_geo_transform, invert_geo_transform,
    apply_geo_transform, apply_geo_transform_array, get_raster_corners, set_raster_corners,
    compute_raster_min_max, allocate_raster_array, read_raster_data
)
from .spatial import wkt_from_epsg, create_coordinate_transform, transform_coordinate, transform_coordinates
from .utilities import (
    UtilityOptions, parse_info_options, parse_translate_options, parse_warp_app_options,
    parse_vector_translate_options, parse_dem_processing_options, parse_nearblack_options,
    parse_grid_options, parse_rasterize_options, parse_build_vrt_options,
    parse_multi_dim_info_options, parse_multi_dim_translate_options, translate, info
)

__version__ = '0.1.0'

__all__ = [
    # Environment
    'init_gdal',
    'shutdown_gdal',
    'gdal_environment',

    # Errors
    'GDALHelperError',
    'DatasetOpenError',
    'GeoTransformError',
    'SpatialReferenceError',
    'CoordinateTransformError',
    'RasterStatisticsError',
    'UtilityOptionsError',
    'TranslateError',

    # Types
    'Vector2D',
    'Vector3D',
    'GeoTransform',
    'RasterCornerCoordinates',
    'RasterMinMax',

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

    # Spatial reference
    'wkt_from_epsg',
    'create_coordinate_transform',
    'transform_coordinate',
    'transform_coordinates',

    # Raster data
    'compute_raster_min_max',
    'allocate_raster_array',
    'read_raster_data',

    # Utility programs
    'UtilityOptions',
    'parse_info_options',
    'parse_translate_options',
    'parse_warp_app_options',
    'parse_vector_translate_options',
    'parse_dem_processing_options',
    'parse_nearblack_options',
    'parse_grid_options',
    'parse_rasterize_options',
    'parse_build_vrt_options',
    'parse_multi_dim_info_options',
    'parse_multi_dim_translate_options',
    'translate',
    'info',
]
