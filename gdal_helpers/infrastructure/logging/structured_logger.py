"""Structured logging with context propagation for GDAL helper calls."""

import logging
import sys
import traceback
from typing import Dict, Any, Optional
from contextvars import ContextVar
from datetime import datetime, timezone
import time

# Context variables for correlating log records with the dataset and operation in flight
dataset_context: ContextVar[Optional[str]] = ContextVar('dataset', default=None)
operation_context: ContextVar[Optional[str]] = ContextVar('operation', default=None)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


class StructuredLogger(logging.Logger):
    """Logger that attaches structured context to every record.

    Features:
    - Automatic context injection (dataset path, current operation)
    - Persistent per-logger context fields
    - Performance metrics logging
    - Full traceback capture for errors
    """

    def __init__(self, name: str):
        """Initialize structured logger.

        Args:
            name: Logger name (usually __name__)
        """
        super().__init__(name)
        self._context_fields: Dict[str, Any] = {}
        self._start_times: Dict[str, float] = {}

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, **kwargs):
        """Override to add context and structure.

        Enhances log records with:
        - Context from ContextVars
        - Persistent context fields
        - Traceback capture
        - Performance metrics
        """
        context = {
            'dataset': dataset_context.get(),
            'operation': operation_context.get(),
            'logger_name': self.name,
            'timestamp': _utc_timestamp(),
            **self._context_fields
        }
        context = {k: v for k, v in context.items() if v is not None}

        # Copy so callers can reuse their extra dicts
        extra = dict(extra) if isinstance(extra, dict) else {}
        performance = extra.pop('performance', None)
        context.update(extra.pop('context', None) or {})
        traceback_str = extra.pop('traceback', None)

        if not traceback_str and exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()
            if exc_info[0] is not None:
                traceback_str = ''.join(traceback.format_exception(*exc_info))

        extra.update({
            'context': context,
            'performance': performance,
            'traceback': traceback_str
        })

        super()._log(level, msg, args, exc_info=False, extra=extra,
                     stack_info=stack_info, **kwargs)

    def add_context(self, **fields):
        """Add persistent context fields to all future log messages.

        Example:
            logger.add_context(driver='GTiff')
        """
        self._context_fields.update(fields)

    def remove_context(self, *keys):
        """Remove persistent context fields."""
        for key in keys:
            self._context_fields.pop(key, None)

    def clear_context(self):
        """Clear all persistent context fields."""
        self._context_fields.clear()

    def start_operation(self, operation: str):
        """Start timing an operation."""
        self._start_times[operation] = time.time()
        self.debug(f"Started operation: {operation}")

    def end_operation(self, operation: str, **metrics):
        """End timing an operation and log performance."""
        if operation not in self._start_times:
            self.warning(f"No start time for operation: {operation}")
            return

        duration = time.time() - self._start_times.pop(operation)
        self.log_performance(operation, duration, **metrics)

    def log_performance(self, operation: str, duration: float, **metrics):
        """Log performance metrics for an operation.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **metrics: Additional metrics (pixels_processed, bands, etc.)

        Example:
            logger.log_performance('compute_raster_min_max', 0.42,
                                   pixels_processed=1_000_000)
        """
        performance_data = {
            'operation': operation,
            'duration_seconds': round(duration, 3),
            'timestamp': _utc_timestamp(),
            **metrics
        }

        if 'pixels_processed' in metrics and duration > 0:
            performance_data['pixels_per_second'] = round(
                metrics['pixels_processed'] / duration, 2
            )

        self.debug(
            f"Performance: {operation} completed in {duration:.3f}s",
            extra={'performance': performance_data}
        )

    def log_error_with_context(self, error: Exception, operation: Optional[str] = None, **context):
        """Log an error with full context and traceback.

        Args:
            error: The exception that occurred
            operation: Optional operation name for context
            **context: Additional context fields
        """
        error_context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            **context
        }
        if operation:
            error_context['operation'] = operation

        self.error(
            f"Error in {operation or 'operation'}: {error}",
            exc_info=error,
            extra={'context': error_context}
        )


_logger_cache: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        from gdal_helpers.infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    if name in _logger_cache:
        return _logger_cache[name]

    # Temporarily set logger class
    original_class = logging.getLoggerClass()
    logging.setLoggerClass(StructuredLogger)

    try:
        logger = logging.getLogger(name)
        if isinstance(logger, StructuredLogger):
            _logger_cache[name] = logger
        return logger
    finally:
        logging.setLoggerClass(original_class)
