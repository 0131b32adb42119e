# tests/conftest.py
import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pytest
from osgeo import gdal, osr

from gdal_helpers.config import Config
from gdal_helpers.core import init_gdal
from gdal_helpers.infrastructure.logging.handlers import ConsoleHandler, FileHandler


@pytest.fixture(scope="session", autouse=True)
def gdal_runtime():
    """Initialise GDAL once for the whole run with exceptions enabled."""
    test_config = Config(discover=False)
    test_config.update({'gdal': {'use_exceptions': True}})
    init_gdal(test_config)
    yield test_config


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop handlers installed by setup_logging() inside a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if isinstance(handler, (ConsoleHandler, FileHandler)):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def test_config():
    """A Config that ignores any config file on the machine."""
    return Config(discover=False)


class RasterTestHelper:
    """Helper class for creating test datasets."""

    @staticmethod
    def gradient(width: int, height: int, band: int = 1) -> np.ndarray:
        """Values 1..width*height in row-major order, scaled by the band number."""
        data = np.arange(1, width * height + 1, dtype=np.int32).reshape(height, width)
        return data * band

    @staticmethod
    def create_test_raster(
        output_path: Path,
        width: int = 20,
        height: int = 10,
        bounds: Optional[Tuple[float, float, float, float]] = (-10.0, 40.0, 10.0, 60.0),
        data_type: int = gdal.GDT_Int32,
        nodata_value: Optional[float] = None,
        nodata_pixels: Tuple[Tuple[int, int], ...] = (),
        band_count: int = 1,
        epsg: int = 4326
    ) -> Path:
        """Create a GeoTIFF with gradient bands.

        ``bounds`` is (west, south, east, north); pass None for a raster
        without a geo-transform.
        """
        driver = gdal.GetDriverByName('GTiff')
        dataset = driver.Create(str(output_path), width, height, band_count, data_type)

        if bounds is not None:
            srs = osr.SpatialReference()
            srs.ImportFromEPSG(epsg)
            dataset.SetProjection(srs.ExportToWkt())

            west, south, east, north = bounds
            pixel_width = (east - west) / width
            pixel_height = (north - south) / height
            dataset.SetGeoTransform([west, pixel_width, 0, north, 0, -pixel_height])

        for band_idx in range(1, band_count + 1):
            data = RasterTestHelper.gradient(width, height, band_idx)
            band = dataset.GetRasterBand(band_idx)
            if nodata_value is not None:
                for row, col in nodata_pixels:
                    data[row, col] = nodata_value
                band.SetNoDataValue(nodata_value)
            band.WriteArray(data)

        dataset.FlushCache()
        dataset = None

        return output_path

    @staticmethod
    def create_test_vector(output_path: Path) -> Path:
        """Write a one-feature GeoJSON file."""
        collection = {
            'type': 'FeatureCollection',
            'features': [{
                'type': 'Feature',
                'properties': {'name': 'origin'},
                'geometry': {'type': 'Point', 'coordinates': [0.0, 0.0]},
            }],
        }
        output_path.write_text(json.dumps(collection))
        return output_path


@pytest.fixture
def raster_helper():
    """Provide raster test helper."""
    return RasterTestHelper()


@pytest.fixture
def sample_raster(tmp_path, raster_helper):
    """20x10 single-band raster covering (-10, 40) .. (10, 60): 1 x 2 degree pixels."""
    return raster_helper.create_test_raster(tmp_path / "sample.tif")


@pytest.fixture
def multiband_raster(tmp_path, raster_helper):
    """Two-band raster with pixel (0, 0) marked nodata in both bands."""
    return raster_helper.create_test_raster(
        tmp_path / "multiband.tif",
        band_count=2,
        nodata_value=-1,
        nodata_pixels=((0, 0),)
    )


@pytest.fixture
def ungeoreferenced_raster(tmp_path, raster_helper):
    """Raster without any geo-transform."""
    return raster_helper.create_test_raster(tmp_path / "plain.tif", bounds=None)


@pytest.fixture
def sample_vector(tmp_path, raster_helper):
    return raster_helper.create_test_vector(tmp_path / "points.geojson")


@pytest.fixture
def mem_raster():
    """Writable 4x2 in-memory raster with no geo-transform."""
    dataset = gdal.GetDriverByName('MEM').Create('', 4, 2, 1, gdal.GDT_Byte)
    yield dataset
    dataset = None
