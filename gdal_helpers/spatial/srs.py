# gdal_helpers/spatial/srs.py
"""Spatial reference system and coordinate transformation helpers."""

import math
from typing import Iterable, List, Sequence

from osgeo import osr

from gdal_helpers.core.exceptions import CoordinateTransformError, SpatialReferenceError
from gdal_helpers.foundations.types import Vector3D
from gdal_helpers.infrastructure.logging import get_logger

logger = get_logger(__name__)

OGRERR_NONE = 0


def _check(err, message: str, error_class=SpatialReferenceError):
    # Without osr.UseExceptions() the bindings return an OGRErr code instead of raising
    if err not in (None, OGRERR_NONE):
        raise error_class(f"{message} (OGRErr {err})")


def spatial_reference_from_epsg(epsg: int) -> osr.SpatialReference:
    """Build an osr.SpatialReference from an EPSG code."""
    if isinstance(epsg, bool) or not isinstance(epsg, int) or epsg <= 0:
        raise SpatialReferenceError(f"EPSG code must be a positive integer, got {epsg!r}")

    srs = osr.SpatialReference()
    try:
        _check(srs.ImportFromEPSG(epsg), f"Unknown EPSG code {epsg}")
    except RuntimeError as e:
        raise SpatialReferenceError(f"Unknown EPSG code {epsg}: {e}", e) from e
    return srs


def spatial_reference_from_wkt(wkt: str) -> osr.SpatialReference:
    """Build an osr.SpatialReference from Well-Known Text."""
    if not wkt or not str(wkt).strip():
        raise SpatialReferenceError("Empty WKT supplied")

    srs = osr.SpatialReference()
    try:
        _check(srs.ImportFromWkt(str(wkt)), "Invalid WKT")
    except RuntimeError as e:
        raise SpatialReferenceError(f"Invalid WKT: {e}", e) from e
    return srs


def wkt_from_epsg(epsg: int, pretty: bool = False) -> str:
    """Retrieve the WKT for the spatial reference system with an EPSG code.

    Args:
        epsg: EPSG identifier, e.g. 4326
        pretty: Export multi-line, indented WKT

    Raises:
        SpatialReferenceError: if the code is unknown or cannot be exported
    """
    srs = spatial_reference_from_epsg(epsg)

    try:
        wkt = srs.ExportToPrettyWkt() if pretty else srs.ExportToWkt()
    except RuntimeError as e:
        raise SpatialReferenceError(f"Cannot export EPSG:{epsg} to WKT: {e}", e) from e

    if not wkt:
        raise SpatialReferenceError(f"Cannot export EPSG:{epsg} to WKT")
    return wkt


def create_coordinate_transform(source_wkt: str, target_wkt: str,
                                traditional_gis_order: bool = False) -> osr.CoordinateTransformation:
    """Create a transformation between two spatial reference systems.

    Args:
        source_wkt: WKT of the source system
        target_wkt: WKT of the target system
        traditional_gis_order: Use longitude/easting-first axis order for both
            systems instead of the axis order declared by the authority
            (EPSG:4326 is latitude-first by default)

    Raises:
        SpatialReferenceError: if either WKT is invalid
        CoordinateTransformError: if GDAL cannot build the transformation
    """
    source = spatial_reference_from_wkt(source_wkt)
    target = spatial_reference_from_wkt(target_wkt)

    if traditional_gis_order:
        source.SetAxisMappingStrategy(osr.OAMS_TRADITIONAL_GIS_ORDER)
        target.SetAxisMappingStrategy(osr.OAMS_TRADITIONAL_GIS_ORDER)

    try:
        transformation = osr.CoordinateTransformation(source, target)
    except (RuntimeError, TypeError, ValueError) as e:
        raise CoordinateTransformError(f"Cannot create coordinate transformation: {e}", e) from e

    if transformation is None:
        raise CoordinateTransformError("Cannot create coordinate transformation")

    logger.debug(
        "Created coordinate transformation",
        extra={'context': {
            'source': source.GetName(),
            'target': target.GetName(),
            'traditional_gis_order': traditional_gis_order,
        }}
    )
    return transformation


def transform_coordinate(transformation: osr.CoordinateTransformation,
                         point: Sequence[float]) -> Vector3D:
    """Convert a single coordinate with a transformation.

    ``point`` is (x, y) or (x, y, z); z defaults to 0.

    Raises:
        CoordinateTransformError: if no transformation is supplied or the
            conversion fails
    """
    if transformation is None:
        raise CoordinateTransformError("No coordinate transformation supplied")

    x, y = float(point[0]), float(point[1])
    z = float(point[2]) if len(point) > 2 else 0.0

    try:
        result = transformation.TransformPoint(x, y, z)
    except RuntimeError as e:
        raise CoordinateTransformError(f"Failed to transform ({x}, {y}, {z}): {e}", e) from e

    # Failed points come back as inf when exceptions are disabled
    if result is None or not all(math.isfinite(v) for v in result[:3]):
        raise CoordinateTransformError(f"Failed to transform ({x}, {y}, {z})")

    return Vector3D(float(result[0]), float(result[1]), float(result[2]))


def transform_coordinates(transformation: osr.CoordinateTransformation,
                          points: Iterable[Sequence[float]]) -> List[Vector3D]:
    """Convert many coordinates; fails on the first point that cannot be converted."""
    return [transform_coordinate(transformation, point) for point in points]
