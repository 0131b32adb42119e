"""Spatial reference system and coordinate conversion helpers."""

from .srs import (
    wkt_from_epsg, create_coordinate_transform, transform_coordinate,
    transform_coordinates, spatial_reference_from_epsg, spatial_reference_from_wkt
)

__all__ = [
    'wkt_from_epsg',
    'create_coordinate_transform',
    'transform_coordinate',
    'transform_coordinates',
    'spatial_reference_from_epsg',
    'spatial_reference_from_wkt',
]
