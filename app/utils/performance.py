"""
Timing Utilities

Decorator and context manager that log how long an operation took.
"""

import time
import logging
import functools
import inspect
from typing import Optional, Callable, Any
from contextlib import contextmanager

logger = logging.getLogger(__name__)


def _log_elapsed(name: str, log_level: str, start_time: float) -> None:
    elapsed = time.perf_counter() - start_time
    getattr(logger, log_level.lower())(f"⏱️  {name} took {elapsed*1000:.2f}ms")


def timer(name: Optional[str] = None, log_level: str = "DEBUG"):
    """
    Decorator to time function execution.

    Usage:
        @timer("Analysis: command")
        def analyze(...):
            ...

    Args:
        name: Custom name for the timer (defaults to function qualname)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    def decorator(func: Callable) -> Callable:
        timer_name = name or func.__qualname__

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _log_elapsed(timer_name, log_level, start_time)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                _log_elapsed(timer_name, log_level, start_time)

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


@contextmanager
def timer_context(name: str, log_level: str = "INFO"):
    """
    Context manager to time a code block.

    Usage:
        with timer_context("Startup: build router"):
            ...
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        _log_elapsed(name, log_level, start_time)
