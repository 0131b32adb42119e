"""Decorators for automatic logging and error capture."""

import functools
import inspect
import time
from typing import Callable, Any, Optional, TypeVar

from .structured_logger import get_logger, operation_context

# Type variable for decorated functions
F = TypeVar('F', bound=Callable[..., Any])


def _describe(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return f"<{type(value).__name__}>"


def log_operation(operation_name: Optional[str] = None,
                  log_args: bool = False,
                  log_result: bool = False):
    """Decorator to log operation execution and capture errors.

    Args:
        operation_name: Custom operation name (defaults to function name)
        log_args: Whether to log function arguments
        log_result: Whether to log function result

    Example:
        @log_operation("open_raster", log_args=True)
        def open_raster(path, read_only=True):
            ...
    """
    def decorator(func: F) -> F:
        name = operation_name or func.__name__
        logger = get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.time()
            context = {'operation': name}

            if log_args:
                bound_args = inspect.signature(func).bind(*args, **kwargs)
                bound_args.apply_defaults()
                context['arguments'] = {
                    arg_name: _describe(arg_value)
                    for arg_name, arg_value in bound_args.arguments.items()
                }

            token = operation_context.set(name)
            try:
                logger.debug(f"Starting {name}", extra={'context': context})
                result = func(*args, **kwargs)

                if log_result:
                    context['result'] = _describe(result)

                logger.log_performance(name, time.time() - start_time, status='success')
                if log_result:
                    logger.debug(f"Completed {name}", extra={'context': context})
                return result

            except Exception as e:
                duration = time.time() - start_time
                logger.error(
                    f"Failed {name}: {e}",
                    exc_info=True,
                    extra={
                        'context': context,
                        'performance': {
                            'duration': duration,
                            'status': 'failed',
                            'error_type': type(e).__name__
                        }
                    }
                )
                raise
            finally:
                operation_context.reset(token)

        return wrapper  # type: ignore
    return decorator
