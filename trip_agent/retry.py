from __future__ import annotations

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from .errors import ServiceOverloaded

logger = logging.getLogger(__name__)

T = TypeVar("T")

_OVERLOAD_PATTERNS = (
    re.compile(r"\b503\b"),
    re.compile(r"UNAVAILABLE"),
    re.compile(r"model is overloaded", re.IGNORECASE),
)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 4
    base_delay_ms: int = 600


def is_overloaded(error: BaseException) -> bool:
    """True when the error message carries a transient overload signature."""
    message = str(error)
    return any(pattern.search(message) for pattern in _OVERLOAD_PATTERNS)


def backoff_delay_ms(attempt: int, policy: RetryPolicy, rand: Callable[[], float] = random.random) -> int:
    # jitter factor is uniform in [0.7, 1.3)
    return round(policy.base_delay_ms * (2 ** attempt) * (0.7 + rand() * 0.6))


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = RetryPolicy(),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    rand: Callable[[], float] = random.random,
) -> T:
    """Await ``operation`` and retry it while the provider reports overload.

    Errors without an overload signature are re-raised untouched on the first
    occurrence. Overload on the last permitted attempt becomes
    ``ServiceOverloaded``.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            if not is_overloaded(exc):
                raise
            if attempt >= policy.max_retries:
                raise ServiceOverloaded() from exc
            delay = backoff_delay_ms(attempt, policy, rand)
            logger.warning(
                "Gemini overloaded (attempt %d/%d). Retrying in %dms",
                attempt + 1,
                policy.max_retries,
                delay,
            )
            await sleep(delay / 1000)
            attempt += 1
