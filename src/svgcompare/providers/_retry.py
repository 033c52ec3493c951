from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import requests

from svgcompare import logger as logger_mod

from .errors import ProviderUnavailable

log = logger_mod.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Retry/backoff settings for provider calls.

    Notes:
    - `max_attempts` counts the first call, so the default of 1 means no retries.
    - Values are clamped rather than rejected.
    """

    max_attempts: int = 1
    base_delay_s: float = 1.0
    max_delay_s: float = 8.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            object.__setattr__(self, "max_attempts", 1)

        if self.base_delay_s <= 0:
            object.__setattr__(self, "base_delay_s", 0.1)

        if self.max_delay_s <= 0:
            object.__setattr__(self, "max_delay_s", 0.1)

        if self.max_delay_s < self.base_delay_s:
            object.__setattr__(self, "max_delay_s", float(self.base_delay_s))


def is_retryable_status(status: Optional[int]) -> bool:
    """Return True when an HTTP status is likely transient."""

    if not isinstance(status, int):
        return False

    # Transient server errors
    if 500 <= status <= 599:
        return True

    # Too many requests / request timeout
    return status in (429, 408)


def is_retryable_error(error: Exception) -> bool:
    """Return True when a provider failure is worth another attempt.

    Only `ProviderUnavailable` is considered: malformed envelopes are
    deterministic and would fail the same way again.
    """

    if not isinstance(error, ProviderUnavailable):
        return False

    if error.status is not None:
        return is_retryable_status(error.status)

    cause = error.__cause__
    if isinstance(cause, (requests.Timeout, requests.ConnectionError)):
        return True

    return False


def _sleep_with_backoff(
    *, delay_s: float, max_delay_s: float, attempt: int, context: str
) -> None:
    # exponential backoff with jitter (0.7x–1.3x)
    wait = min(max_delay_s, delay_s) * (0.7 + random.random() * 0.6)
    log.warning(
        f"⚠️ Retryable provider error while {context}; retrying in {wait:.1f}s "
        f"(attempt {attempt})"
    )
    time.sleep(wait)


def execute_with_retry(
    fn: Callable[[], T],
    *,
    context: str,
    retry: RetryConfig | None = None,
) -> T:
    """Execute a provider call with consistent retry/backoff."""

    retry = retry or RetryConfig()
    delay = retry.base_delay_s

    for attempt in range(1, retry.max_attempts + 1):
        try:
            return fn()
        except Exception as e:
            if (not is_retryable_error(e)) or attempt == retry.max_attempts:
                log.error(
                    f"❌ Provider error while {context} "
                    f"(attempt {attempt}/{retry.max_attempts}): {e}"
                )
                raise

            _sleep_with_backoff(
                delay_s=delay,
                max_delay_s=retry.max_delay_s,
                attempt=attempt,
                context=context,
            )
            delay *= 2

    raise RuntimeError(f"Unknown error while {context}")
