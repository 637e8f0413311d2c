"""Exponential backoff for transport-level failures."""

import logging
import random
import threading
import time
from collections.abc import Callable, Iterator
from typing import TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator

from spclient.exceptions import RequestCancelledError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_RANDOMIZATION_FACTOR = 0.5
DEFAULT_MULTIPLIER = 1.5
DEFAULT_MAX_INTERVAL = 60.0
DEFAULT_MAX_ELAPSED_TIME = 15 * 60.0


class RetryPolicy(BaseModel):
    """Exponential backoff policy applied to transport errors.

    Only network-level failures (``httpx.TransportError``: connect errors,
    timeouts, protocol errors) are retried. HTTP error statuses are returned
    to the caller untouched.

    Fields:
        initial_interval: First backoff delay in seconds.
        randomization_factor: Jitter, the delay is drawn uniformly from
            ``interval * (1 +/- randomization_factor)``.
        multiplier: Growth factor applied to the interval after each retry.
        max_interval: Ceiling for the (un-jittered) interval.
        max_elapsed_time: Give up once this many seconds have passed since the
            first attempt. ``None`` disables the limit.
        max_attempts: Give up after this many attempts. ``None`` disables the
            limit.
    """

    model_config = ConfigDict(frozen=True)

    initial_interval: float = Field(default=DEFAULT_INITIAL_INTERVAL, ge=0)
    randomization_factor: float = Field(default=DEFAULT_RANDOMIZATION_FACTOR, ge=0, le=1)
    multiplier: float = Field(default=DEFAULT_MULTIPLIER, ge=1)
    max_interval: float = Field(default=DEFAULT_MAX_INTERVAL, ge=0)
    max_elapsed_time: float | None = Field(default=DEFAULT_MAX_ELAPSED_TIME, gt=0)
    max_attempts: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def interval_bounds(self) -> "RetryPolicy":
        if self.max_interval < self.initial_interval:
            raise ValueError("max_interval must not be smaller than initial_interval")
        return self

    @classmethod
    def no_retry(cls) -> "RetryPolicy":
        """Policy that makes a single attempt."""
        return cls(max_attempts=1)

    def intervals(self) -> Iterator[float]:
        """Yield the un-jittered backoff intervals, forever."""
        interval = self.initial_interval
        while True:
            yield interval
            interval = min(interval * self.multiplier, self.max_interval)

    def randomize(self, interval: float) -> float:
        delta = self.randomization_factor * interval
        return random.uniform(interval - delta, interval + delta)

    def call(
        self,
        fn: Callable[[], T],
        *,
        description: str,
        deadline: float | None = None,
        cancel: threading.Event | None = None,
    ) -> T:
        """Run ``fn`` until it stops raising transport errors.

        Args:
            fn: The attempt. Called once per try.
            description: Operation name used in log lines and error messages.
            deadline: Absolute ``time.monotonic()`` value after which no new
                attempt is started.
            cancel: Event that aborts the loop when set, including while
                waiting between attempts.

        Returns:
            Whatever the first successful attempt returns.

        Raises:
            TransportError: When the policy or the deadline is exhausted.
            RequestCancelledError: When ``cancel`` is set.
        """
        started = time.monotonic()
        intervals = self.intervals()
        attempts = 0
        last_error: httpx.TransportError | None = None

        while True:
            _check_cancelled(cancel, description)
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning("%s deadline passed after %d attempt(s)", description, attempts)
                raise TransportError(
                    f"{description} request deadline passed after {attempts} attempt(s)",
                    attempts=attempts,
                ) from last_error
            attempts += 1
            try:
                return fn()
            except httpx.TransportError as e:
                last_error = e

            delay = self.randomize(next(intervals))
            now = time.monotonic()
            reason = None
            if self.max_attempts is not None and attempts >= self.max_attempts:
                reason = f"after {attempts} attempt(s)"
            elif self.max_elapsed_time is not None and now + delay - started > self.max_elapsed_time:
                reason = f"after {now - started:.1f}s"
            elif deadline is not None and now + delay >= deadline:
                reason = "before the call deadline"

            if reason is not None:
                logger.warning("%s failed %s: %s", description, reason, last_error)
                raise TransportError(
                    f"{description} request failed {reason}: {last_error}",
                    attempts=attempts,
                ) from last_error

            logger.debug(
                "%s attempt %d failed (%s), retrying in %.2fs",
                description,
                attempts,
                last_error,
                delay,
            )
            _wait(delay, cancel, description)


def _check_cancelled(cancel: threading.Event | None, description: str) -> None:
    if cancel is not None and cancel.is_set():
        raise RequestCancelledError(f"{description} request cancelled")


def _wait(delay: float, cancel: threading.Event | None, description: str) -> None:
    if cancel is None:
        time.sleep(delay)
    elif cancel.wait(delay):
        raise RequestCancelledError(f"{description} request cancelled")
