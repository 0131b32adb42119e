"""Structured logging infrastructure for the GDAL helpers."""

from .structured_logger import StructuredLogger, get_logger, dataset_context, operation_context
from .context import dataset_scope, operation_scope
from .decorators import log_operation
from .gdal_bridge import GDALErrorLogger
from .setup import setup_logging, setup_simple_logging, get_log_stats

__all__ = [
    'StructuredLogger',
    'get_logger',
    'dataset_context',
    'operation_context',
    'dataset_scope',
    'operation_scope',
    'log_operation',
    'GDALErrorLogger',
    'setup_logging',
    'setup_simple_logging',
    'get_log_stats'
]
