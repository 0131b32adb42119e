# gdal_helpers/raster/statistics.py
"""Raster band statistics and raster buffer helpers."""

import time
from typing import Optional, Sequence

import numpy as np
from osgeo import gdal

from gdal_helpers.core.exceptions import RasterStatisticsError
from gdal_helpers.foundations.types import RasterMinMax
from gdal_helpers.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _get_band(dataset: gdal.Dataset, band_index: int) -> gdal.Band:
    """Fetch a 1-indexed band, validating the index first."""
    if dataset is None:
        raise RasterStatisticsError("No dataset supplied")

    band_count = dataset.RasterCount
    if (isinstance(band_index, bool) or not isinstance(band_index, (int, np.integer))
            or not 1 <= band_index <= band_count):
        raise RasterStatisticsError(
            f"Band index {band_index} out of range: dataset has {band_count} band(s) "
            f"and GDAL bands are numbered from 1"
        )

    band = dataset.GetRasterBand(int(band_index))
    if band is None:
        raise RasterStatisticsError(f"Cannot access band {band_index}")
    return band


def compute_raster_min_max(dataset: gdal.Dataset, band_index: int) -> RasterMinMax:
    """Compute the exact minimum and maximum of a raster band.

    Note that GDAL raster bands are 1-indexed, so the first band is 1.
    Nodata pixels are excluded by GDAL.

    Raises:
        RasterStatisticsError: on a missing dataset, bad band index, or when
            GDAL cannot compute the values (e.g. every pixel is nodata)
    """
    band = _get_band(dataset, band_index)
    start_time = time.time()

    try:
        min_max = band.ComputeRasterMinMax(False, can_return_none=True)
    except RuntimeError as e:
        raise RasterStatisticsError(
            f"Failed to compute min/max for band {band_index}: {e}", e
        ) from e

    # Without GDAL exceptions a failure comes back as None
    if min_max is None:
        raise RasterStatisticsError(
            f"Failed to compute min/max for band {band_index}: {gdal.GetLastErrorMsg()}"
        )

    logger.log_performance(
        'compute_raster_min_max',
        time.time() - start_time,
        band=band_index,
        pixels_processed=band.XSize * band.YSize
    )
    return RasterMinMax(float(min_max[0]), float(min_max[1]))


def allocate_raster_array(channels: int, rows: int, cols: int,
                          dtype=np.uint8, fill=0) -> np.ndarray:
    """Allocate a band-sequential ``(channels, rows, cols)`` raster buffer.

    The layout matches what ``Dataset.ReadAsArray()`` returns for
    multi-band rasters, so the buffer can be filled band by band and
    written back with ``Band.WriteArray(buffer[i])``.
    """
    for name, value in (('channels', channels), ('rows', rows), ('cols', cols)):
        if int(value) < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
    return np.full((int(channels), int(rows), int(cols)), fill, dtype=dtype)


def read_raster_data(dataset: gdal.Dataset,
                     bands: Optional[Sequence[int]] = None) -> np.ndarray:
    """Read bands of a dataset into a ``(channels, rows, cols)`` array.

    Args:
        dataset: Open raster dataset
        bands: 1-indexed band numbers to read (default: all bands)
    """
    if dataset is None:
        raise RasterStatisticsError("No dataset supplied")

    if bands is None:
        bands = range(1, dataset.RasterCount + 1)
    bands = list(bands)
    if not bands:
        raise RasterStatisticsError("No bands selected")

    first = _get_band(dataset, bands[0])
    dtype = gdal.GetDataTypeName(first.DataType)
    buffer = None

    for channel, band_index in enumerate(bands):
        band = _get_band(dataset, band_index)
        try:
            data = band.ReadAsArray()
        except RuntimeError as e:
            raise RasterStatisticsError(f"Failed to read band {band_index}: {e}", e) from e
        if data is None:
            raise RasterStatisticsError(f"Failed to read band {band_index}")

        if buffer is None:
            buffer = allocate_raster_array(len(bands), data.shape[0], data.shape[1],
                                           dtype=data.dtype)
        buffer[channel] = data

    logger.debug(f"Read {len(bands)} band(s) of type {dtype} from {dataset.GetDescription()}")
    return buffer
