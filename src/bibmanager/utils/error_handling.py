"""Error handling utilities."""
import logging
from functools import wraps
from typing import Any, Callable

from ..exceptions import StorageError


def storage_error_handler(func: Callable) -> Callable:
    """
    Decorator for Repository save methods.

    A failed save is logged and queued on ``self.storage_errors`` for the
    session to display; the in-memory state is left as it is.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs) -> Any:
        try:
            return func(self, *args, **kwargs)
        except StorageError as e:
            logging.error(f"File operation error in {func.__name__}: {e}")
            self.storage_errors.append(str(e))
            return None
    return wrapper
