"""Retry logic with exponential backoff for failed tab host calls.

Host calls fail mostly because a tab or group id went stale, which retrying
cannot fix, so retries are off by default (max_attempts=1). Hosts that drop
calls transiently can enable them through configuration.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from tabnest.core.errors import HostOperationFailed
from tabnest.core.time.abc import Time

logger = logging.getLogger(__name__)

# Type variable for decorated function return type
T = TypeVar("T")


def retry_with_backoff(
    time: Time,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    *,
    backoff_factor: float = 2.0,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a host call on HostOperationFailed with exponential backoff.

    Delay before attempt n (n >= 1) is base_delay * backoff_factor ** (n - 1).
    Other exceptions propagate immediately. After the last attempt the
    HostOperationFailed is re-raised to the caller.

    Args:
        time: Time integration used for sleeping between attempts
        max_attempts: Maximum number of attempts (>= 1)
        base_delay: Initial delay in seconds
        backoff_factor: Multiplier for exponential backoff

    Returns:
        Decorator function that wraps the target function with retry logic

    Example:
        @retry_with_backoff(ctx.time, max_attempts=3)
        def regroup() -> int:
            return ctx.host.group_tabs(tab_ids)
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(max_attempts):
                if attempt > 0:
                    delay = base_delay * (backoff_factor ** (attempt - 1))
                    logger.debug(
                        "Retrying %s after %.2fs (attempt %d/%d)",
                        func.__name__,
                        delay,
                        attempt + 1,
                        max_attempts,
                    )
                    time.sleep(delay)

                try:
                    return func(*args, **kwargs)
                except HostOperationFailed as e:
                    if attempt == max_attempts - 1:
                        raise
                    logger.warning("Host call %s failed: %s", func.__name__, e)

            msg = f"Function {func.__name__} completed without result or exception"
            raise RuntimeError(msg)

        return wrapper

    return decorator
