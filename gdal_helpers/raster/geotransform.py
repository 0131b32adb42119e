# gdal_helpers/raster/geotransform.py
"""Affine geo-transform helpers.

A GDAL geo-transform maps pixel/line coordinates to georeferenced space::

    Xgeo = gt[0] + P * gt[1] + L * gt[2]
    Ygeo = gt[3] + P * gt[4] + L * gt[5]

For north-up images gt[2] == gt[4] == 0 and gt[5] is negative.
"""

from typing import Sequence, Tuple, Union

import numpy as np
from osgeo import gdal

from gdal_helpers.core.exceptions import GeoTransformError, handle_gdal_error
from gdal_helpers.foundations.types import GeoTransform, RasterCornerCoordinates, Vector2D
from gdal_helpers.infrastructure.logging import get_logger

logger = get_logger(__name__)

TransformLike = Union[GeoTransform, Sequence[float]]

# Relative determinant threshold below which GDAL treats a transform as singular
SINGULAR_EPSILON = 1e-10


def _as_transform(transform: TransformLike) -> GeoTransform:
    if transform is None:
        raise GeoTransformError("No geo-transform supplied")
    if isinstance(transform, GeoTransform):
        return transform
    try:
        return GeoTransform.from_gdal(transform)
    except (TypeError, ValueError) as e:
        raise GeoTransformError(f"Invalid geo-transform: {transform!r}", e) from e


def _require_dataset(dataset: gdal.Dataset, operation: str):
    if dataset is None:
        raise GeoTransformError(f"{operation}: no dataset supplied")


@handle_gdal_error("get_geo_transform", GeoTransformError)
def get_geo_transform(dataset: gdal.Dataset) -> GeoTransform:
    """Retrieve the geo-transform of a dataset.

    Raises:
        GeoTransformError: if the dataset is missing or is not georeferenced
    """
    _require_dataset(dataset, "get_geo_transform")

    gt = dataset.GetGeoTransform(can_return_null=True)
    if gt is None:
        raise GeoTransformError(
            f"Dataset {dataset.GetDescription()} has no geo-transform"
        )
    return GeoTransform.from_gdal(gt)


def invert_geo_transform(transform: TransformLike) -> GeoTransform:
    """Invert a geo-transform, mirroring GDALInvGeoTransform().

    The inverse maps georeferenced coordinates back to pixel/line space.

    Raises:
        GeoTransformError: if the transform is singular
    """
    gt = _as_transform(transform)
    c0, c1, c2, c3, c4, c5 = gt.to_gdal()

    # Fast path for the common north-up, non-rotated case
    if c2 == 0.0 and c4 == 0.0 and c1 != 0.0 and c5 != 0.0:
        return GeoTransform(-c0 / c1, 1.0 / c1, 0.0, -c3 / c5, 0.0, 1.0 / c5)

    det = c1 * c5 - c2 * c4
    magnitude = max(abs(c1), abs(c2), abs(c4), abs(c5))
    if abs(det) <= SINGULAR_EPSILON * magnitude * magnitude:
        raise GeoTransformError(f"Geo-transform is not invertible: {gt.to_gdal()}")

    inv_det = 1.0 / det
    return GeoTransform(
        (c2 * c3 - c0 * c5) * inv_det,
        c5 * inv_det,
        -c2 * inv_det,
        (-c1 * c3 + c0 * c4) * inv_det,
        -c4 * inv_det,
        c1 * inv_det,
    )


def get_inverted_geo_transform(dataset: gdal.Dataset) -> GeoTransform:
    """Retrieve a dataset's geo-transform and invert it.

    Useful for converting georeferenced coordinates to pixel coordinates.
    """
    return invert_geo_transform(get_geo_transform(dataset))


def apply_geo_transform(transform: TransformLike, point: Sequence[float]) -> Vector2D:
    """Apply a geo-transform to a single 2D point.

    ``transform`` may be a GeoTransform or any 6-element sequence in GDAL
    order, such as the tuple returned by ``Dataset.GetGeoTransform()``.
    """
    c0, c1, c2, c3, c4, c5 = _as_transform(transform).to_gdal()
    px, py = float(point[0]), float(point[1])
    return Vector2D(c0 + px * c1 + py * c2, c3 + px * c4 + py * c5)


def apply_geo_transform_array(transform: TransformLike, xs, ys) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorised apply_geo_transform() over arrays of x and y coordinates."""
    c0, c1, c2, c3, c4, c5 = _as_transform(transform).to_gdal()
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.shape != ys.shape:
        raise GeoTransformError(f"Coordinate arrays differ in shape: {xs.shape} vs {ys.shape}")
    return c0 + xs * c1 + ys * c2, c3 + xs * c4 + ys * c5


def get_raster_corners(dataset: gdal.Dataset) -> RasterCornerCoordinates:
    """Compute a dataset's corner coordinates from its geo-transform.

    The inverse of set_raster_corners(); rotation terms are ignored.
    """
    _require_dataset(dataset, "get_raster_corners")
    gt = get_geo_transform(dataset)

    x_size = dataset.RasterXSize
    y_size = dataset.RasterYSize

    upper_left = Vector2D(gt.origin_x, gt.origin_y)
    lower_right = Vector2D(
        upper_left.x + gt.pixel_width * x_size,
        upper_left.y + gt.pixel_height * y_size,
    )
    return RasterCornerCoordinates(upper_left=upper_left, lower_right=lower_right)


@handle_gdal_error("set_raster_corners", GeoTransformError)
def set_raster_corners(dataset: gdal.Dataset,
                       upper_left: Sequence[float],
                       lower_right: Sequence[float]) -> GeoTransform:
    """Set a dataset's corner coordinates by writing its geo-transform.

    Uses the same calculation as gdal_translate's ``-a_ullr`` option. The
    dataset must be writable (or a format that keeps the transform in a
    sidecar, such as GeoTIFF's .aux.xml).

    Returns:
        The geo-transform written to the dataset
    """
    _require_dataset(dataset, "set_raster_corners")

    x_size = dataset.RasterXSize
    y_size = dataset.RasterYSize
    if x_size <= 0 or y_size <= 0:
        raise GeoTransformError(f"Dataset has no raster extent ({x_size}x{y_size})")

    ul_x, ul_y = float(upper_left[0]), float(upper_left[1])
    lr_x, lr_y = float(lower_right[0]), float(lower_right[1])

    transform = GeoTransform(
        origin_x=ul_x,
        pixel_width=(lr_x - ul_x) / x_size,
        row_rotation=0.0,
        origin_y=ul_y,
        column_rotation=0.0,
        pixel_height=(lr_y - ul_y) / y_size,
    )

    if dataset.SetGeoTransform(list(transform.to_gdal())) != gdal.CE_None:
        raise GeoTransformError(
            f"GDAL rejected geo-transform for {dataset.GetDescription()}"
        )

    logger.debug(f"Set corners of {dataset.GetDescription()} to {upper_left} / {lower_right}")
    return transform
