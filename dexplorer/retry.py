"""
Transport-level retry with exponential backoff.

Wraps single HTTP calls made against the catalog provider. A load cycle
itself is never retried here; callers re-run ``load()`` for that.
"""

import time
import functools
from typing import Callable, Type, Tuple, Optional

import requests


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    retry_if: Optional[Callable[[Exception], bool]] = None,
    on_retry: Optional[Callable] = None,
    sleep: Optional[Callable[[float], None]] = None,
):
    """
    Decorator for retrying functions with exponential backoff.

    The last exception is re-raised unchanged once attempts run out, so
    callers handle the same error types with or without retries.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential calculation (delay *= base)
        exceptions: Tuple of exceptions to catch and retry
        retry_if: Optional predicate; an exception it rejects is raised at once
        on_retry: Optional callback function(attempt, exception, delay)
        sleep: Sleep function (default: time.sleep)

    Example:
        @exponential_backoff(max_retries=3, base_delay=1.0)
        def fetch_data(url):
            return requests.get(url)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            delay = base_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_retries:
                        raise
                    if retry_if is not None and not retry_if(e):
                        raise

                    current_delay = min(delay, max_delay)
                    if on_retry:
                        on_retry(attempt + 1, e, current_delay)

                    (sleep or time.sleep)(current_delay)
                    delay *= exponential_base

        return wrapper
    return decorator


def should_retry_http_status(status_code: int) -> bool:
    """
    Check if HTTP status code indicates a retryable error.

    Args:
        status_code: HTTP status code

    Returns:
        True if should retry
    """
    retryable_codes = {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    }

    return status_code in retryable_codes


def is_retryable_request_error(exception: Exception) -> bool:
    """True for timeouts, dropped connections and retryable HTTP statuses."""
    if isinstance(exception, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return True
    if isinstance(exception, requests.exceptions.HTTPError):
        response = exception.response
        return response is not None and should_retry_http_status(response.status_code)
    return False
