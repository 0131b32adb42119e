"""Logging context management for dataset and operation correlation."""

from contextlib import contextmanager
from typing import Optional
import time

from .structured_logger import dataset_context, operation_context, get_logger

logger = get_logger(__name__)


@contextmanager
def dataset_scope(path: Optional[str]):
    """Tag every record logged inside the block with the dataset path.

    Example:
        with dataset_scope('/data/dem.tif'):
            corners = get_raster_corners(ds)
    """
    token = dataset_context.set(str(path) if path is not None else None)
    try:
        yield
    finally:
        dataset_context.reset(token)


@contextmanager
def operation_scope(name: str, **metadata):
    """Tag records with an operation name and log its duration on exit.

    Nested scopes are joined with '/', so an inner 'parse' inside
    'translate' is reported as 'translate/parse'.
    """
    parent = operation_context.get()
    full_name = f"{parent}/{name}" if parent else name
    token = operation_context.set(full_name)
    start_time = time.time()
    status = 'completed'

    try:
        yield full_name
    except Exception:
        status = 'failed'
        raise
    finally:
        logger.log_performance(full_name, time.time() - start_time, status=status, **metadata)
        operation_context.reset(token)
