"""Tests for the GDAL helper exception hierarchy."""
import pytest

from gdal_helpers.core.exceptions import (
    CoordinateTransformError, DatasetOpenError, GDALHelperError, GeoTransformError,
    RasterStatisticsError, SpatialReferenceError, TranslateError, UtilityOptionsError,
    handle_gdal_error
)


@pytest.mark.parametrize('error_class', [
    DatasetOpenError, GeoTransformError, SpatialReferenceError, CoordinateTransformError,
    RasterStatisticsError, UtilityOptionsError, TranslateError
])
def test_hierarchy(error_class):
    error = error_class('boom')
    assert isinstance(error, GDALHelperError)
    assert str(error) == 'boom'
    assert error.original_exception is None


def test_original_exception_kept():
    cause = RuntimeError('CPL failure')
    error = GDALHelperError('wrapped', cause)
    assert error.original_exception is cause


class TestHandleGdalError:

    def test_runtime_error_wrapped(self):
        @handle_gdal_error('read_block', GeoTransformError)
        def failing():
            raise RuntimeError('Illegal band #')

        with pytest.raises(GeoTransformError, match='read_block failed: Illegal band #') as exc:
            failing()
        assert isinstance(exc.value.original_exception, RuntimeError)
        assert exc.value.__cause__ is exc.value.original_exception

    def test_helper_errors_pass_through(self):
        @handle_gdal_error('op', GeoTransformError)
        def failing():
            raise DatasetOpenError('not found')

        with pytest.raises(DatasetOpenError):
            failing()

    def test_other_errors_untouched(self):
        @handle_gdal_error('op')
        def failing():
            raise KeyError('x')

        with pytest.raises(KeyError):
            failing()

    def test_return_value_and_metadata(self):
        @handle_gdal_error('op')
        def add(a, b):
            """Add two numbers."""
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == 'add'
        assert add.__doc__ == 'Add two numbers.'
