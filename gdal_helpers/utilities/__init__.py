"""Helpers for GDAL's utility programs (gdal_translate, gdalwarp, ogr2ogr, ...)."""

from .options import (
    UtilityOptions, UtilityProgram, UTILITY_PROGRAMS, parse_options, is_program_supported,
    parse_info_options, parse_translate_options, parse_warp_app_options,
    parse_vector_translate_options, parse_dem_processing_options, parse_nearblack_options,
    parse_grid_options, parse_rasterize_options, parse_build_vrt_options,
    parse_multi_dim_info_options, parse_multi_dim_translate_options
)
from .programs import translate, info

__all__ = [
    'UtilityOptions',
    'UtilityProgram',
    'UTILITY_PROGRAMS',
    'parse_options',
    'is_program_supported',
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
