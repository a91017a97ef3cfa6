"""Retry with exponential backoff for upstream provider calls.

Only failures that signal the provider is temporarily unavailable or
overloaded are retried. Everything else, including malformed responses, is
raised on the first attempt.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from bff.errors import (
    GatewayError,
    ProviderError,
    RetryBudgetExhaustedError,
    ServiceBusyError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES = {503, 504}
RETRYABLE_MARKERS = ("503", "UNAVAILABLE", "overloaded")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    initial_delay_ms: int = 1000

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            initial_delay_ms=settings.RETRY_INITIAL_DELAY_MS,
        )


def is_retryable(exc: BaseException) -> bool:
    """True when *exc* looks like a transient "service unavailable" failure."""
    # Gateway errors may carry caller text; only ProviderError is classified.
    if isinstance(exc, GatewayError) and not isinstance(exc, ProviderError):
        return False
    if getattr(exc, "status_code", None) in RETRYABLE_STATUS_CODES:
        return True
    message = str(exc)
    return any(marker in message for marker in RETRYABLE_MARKERS)


async def with_retry(
    call: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Await ``call()`` until it succeeds, backing off on retryable failures.

    The delay starts at ``policy.initial_delay_ms`` and doubles after every
    retryable failure. When the attempts run out the caller gets a
    :class:`ServiceBusyError`; the original cause is logged, not surfaced.
    """
    policy = policy or RetryPolicy()
    attempt = 0
    delay_ms = policy.initial_delay_ms

    while attempt < policy.max_attempts:
        try:
            return await call()
        except Exception as exc:
            attempt += 1
            if not is_retryable(exc):
                raise
            if attempt >= policy.max_attempts:
                logger.error(
                    "Provider call failed after %d attempts: %s",
                    attempt, exc, exc_info=exc,
                )
                raise ServiceBusyError(attempts=attempt, last_error=exc) from exc
            logger.warning(
                "Provider call failed (attempt %d/%d). Retrying in %dms...",
                attempt, policy.max_attempts, delay_ms,
            )
            await sleep(delay_ms / 1000)
            delay_ms *= 2

    raise RetryBudgetExhaustedError()
