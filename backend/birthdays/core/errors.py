import logging
from typing import Callable, Any
from functools import wraps
import time

logger = logging.getLogger(__name__)

def retry_with_backoff(max_retries: int = 3, initial_delay: float = 1.0, backoff_factor: float = 2.0):
    """
    decorator to retry a function with exponential backoff

    usage:
        @retry_with_backoff(max_retries=5, initial_delay=2.0)
        def connect():
            # ... code that might fail while the database boots ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            delay = initial_delay
            last_exception = None

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    last_exception = e
                    if attempt < max_retries - 1:
                        logger.warning(
                            f"{func.__name__} failed (attempt {attempt + 1}/{max_retries}): {str(e)}. "
                            f"retrying in {delay}s..."
                        )
                        time.sleep(delay)
                        delay *= backoff_factor
                    else:
                        logger.error(
                            f"{func.__name__} failed after {max_retries} attempts: {str(e)}"
                        )

            raise last_exception

        return wrapper
    return decorator


class BirthdayServiceException(Exception):
    """base exception for birthday service errors"""
    pass


class ValidationError(BirthdayServiceException):
    """raised when client input breaks a validation rule; always a 400"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BirthdayServiceException):
    """raised when no user exists with the requested name"""
    pass


class ConflictError(BirthdayServiceException):
    """raised when a create loses the unique-name race to another writer"""
    pass


class StoreError(BirthdayServiceException):
    """raised when the database fails for any reason other than a name conflict"""
    pass


class StartupError(BirthdayServiceException):
    """raised when the process cannot start serving (config or database)"""
    pass
