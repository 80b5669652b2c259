"""
Retry logic for upstream content APIs.

Retries transient failures with backoff and re-raises the last error once
attempts run out, so callers decide whether a failure is fatal.
"""

import asyncio
import logging
import random
from enum import Enum
from typing import Any, Callable, Optional

__all__ = [
    "RetryStrategy",
    "calculate_delay",
    "retry_async",
]

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Retry Logic
# ══════════════════════════════════════════════════════════════════════════════


class RetryStrategy(Enum):
    """Retry delay strategies."""

    EXPONENTIAL = "exponential"  # 1s, 2s, 4s, 8s
    LINEAR = "linear"  # 1s, 2s, 3s, 4s
    CONSTANT = "constant"  # 1s, 1s, 1s, 1s


async def retry_async(
    func: Callable,
    *args,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 5.0,
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL,
    should_retry: Optional[Callable[[Exception], bool]] = None,
    on_retry: Optional[Callable[[int, Exception], None]] = None,
    **kwargs,
) -> Any:
    """
    Await ``func(*args, **kwargs)``, retrying on failure.

    Args:
        func: Async function to call
        *args: Positional arguments
        max_attempts: Total attempts including the first one
        base_delay: Base delay between attempts in seconds
        max_delay: Upper bound on a single delay
        strategy: Retry delay strategy
        should_retry: Predicate deciding whether an error is transient.
            Errors it rejects are raised immediately.
        on_retry: Called with (attempt, error) before each wait
        **kwargs: Keyword arguments

    Returns:
        Result from func

    Raises:
        The last error raised by func.
    """
    attempts = max(1, max_attempts)

    for attempt in range(attempts):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if should_retry is not None and not should_retry(e):
                raise
            if attempt >= attempts - 1:
                logger.warning(f"Failed after {attempts} attempts: {e}")
                raise

            delay = calculate_delay(attempt, base_delay, strategy, max_delay)
            logger.warning(
                f"Retry {attempt + 1}/{attempts - 1}: {type(e).__name__}. "
                f"Waiting {delay:.1f}s..."
            )
            if on_retry is not None:
                on_retry(attempt + 1, e)
            await asyncio.sleep(delay)


def calculate_delay(
    attempt: int,
    base: float,
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL,
    max_delay: float = 5.0,
) -> float:
    """Calculate retry delay with jitter."""
    if strategy == RetryStrategy.EXPONENTIAL:
        delay = min(base * (2**attempt), max_delay)
    elif strategy == RetryStrategy.LINEAR:
        delay = min(base * (attempt + 1), max_delay)
    else:
        delay = base

    # Up to 10% jitter
    return delay + random.uniform(0, 0.1 * delay)
