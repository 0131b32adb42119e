# gdal_helpers/raster/access.py
"""Opening, closing and naming GDAL datasets."""

import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from osgeo import gdal

from gdal_helpers.core.exceptions import DatasetOpenError, GDALHelperError
from gdal_helpers.infrastructure.logging import get_logger, log_operation

logger = get_logger(__name__)

PathLike = Union[str, Path]

DATASET_KINDS = {
    'raster': gdal.OF_RASTER,
    'vector': gdal.OF_VECTOR,
}


def _open(path: PathLike, kind: str, read_only: bool,
          open_options: Optional[Sequence[str]]) -> gdal.Dataset:
    flags = DATASET_KINDS[kind] | gdal.OF_VERBOSE_ERROR
    flags |= gdal.OF_READONLY if read_only else gdal.OF_UPDATE

    # GDAL only sees driver open options when some were given
    kwargs = {}
    if open_options:
        kwargs['open_options'] = [str(o) for o in open_options]

    try:
        dataset = gdal.OpenEx(str(path), flags, **kwargs)
    except RuntimeError as e:
        raise DatasetOpenError(f"Cannot open {kind} dataset: {path}", e) from e

    if dataset is None:
        raise DatasetOpenError(f"Cannot open {kind} dataset: {path}")

    logger.debug(
        f"Opened {kind} dataset {path} ({'read-only' if read_only else 'update'})",
        extra={'context': {'driver': dataset.GetDriver().ShortName, 'dataset': str(path)}}
    )
    return dataset


@log_operation("open_raster")
def open_raster(path: PathLike, read_only: bool = True,
                open_options: Optional[Sequence[str]] = None) -> gdal.Dataset:
    """Open a raster dataset.

    Args:
        path: File path, /vsimem/ path or any GDAL connection string
        read_only: Open read-only (default) or for update
        open_options: Driver-specific ``KEY=VALUE`` open options

    Raises:
        DatasetOpenError: if no raster driver can open the dataset
    """
    return _open(path, 'raster', read_only, open_options)


@log_operation("open_vector")
def open_vector(path: PathLike, read_only: bool = True,
                open_options: Optional[Sequence[str]] = None) -> gdal.Dataset:
    """Open a vector dataset. Same contract as open_raster()."""
    return _open(path, 'vector', read_only, open_options)


def unique_mem_filename(extension: Optional[str] = None) -> str:
    """Create a unique ``/vsimem/...`` filename for in-memory datasets.

    The name is a fresh GUID rendered as 32 upper-case hex digits, so it
    can be handed to translate() or any driver's Create().
    """
    if extension is None:
        from gdal_helpers.config import config
        extension = config.get('vsimem.extension', '.tif')
    if extension and not extension.startswith('.'):
        extension = f'.{extension}'
    return f"/vsimem/{uuid.uuid4().hex.upper()}{extension}"


def remove_mem_file(path: str) -> bool:
    """Delete a /vsimem/ file. Returns False if it did not exist."""
    if not str(path).startswith('/vsimem/'):
        raise GDALHelperError(f"Not an in-memory path: {path}")
    if gdal.VSIStatL(str(path)) is None:
        return False
    return gdal.Unlink(str(path)) == 0


def close_dataset(dataset: Optional[gdal.Dataset]) -> None:
    """Flush pending writes and release a dataset handle.

    The caller must drop its own references too; GDAL closes the dataset
    once the last Python reference is gone.
    """
    if dataset is None:
        return
    dataset.FlushCache()
    # GDAL >= 3.8 closes deterministically; older bindings rely on refcounting
    if hasattr(dataset, 'Close'):
        dataset.Close()


@contextmanager
def open_dataset(path: PathLike, kind: str = 'raster', read_only: bool = True,
                 open_options: Optional[Sequence[str]] = None) -> Iterator[gdal.Dataset]:
    """Context manager around open_raster()/open_vector().

    Usage:
        with open_dataset('input.tif') as ds:
            corners = get_raster_corners(ds)
    """
    if kind not in DATASET_KINDS:
        raise ValueError(f"kind must be one of {sorted(DATASET_KINDS)}, got {kind!r}")

    opener = open_raster if kind == 'raster' else open_vector
    dataset = opener(path, read_only=read_only, open_options=open_options)
    try:
        yield dataset
    finally:
        close_dataset(dataset)
        dataset = None
