"""
Retry configuration for copy attempts.

Provides tenacity-based retry strategies for handling transient
filesystem failures (disk full, permission races, concurrent deletion)
while a Mover copies a finished download.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    stop_never,
    wait_exponential,
    wait_none,
    wait_random,
)

from folder_organizer.config.constants import (
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_WAIT_SECONDS,
)
from folder_organizer.config.settings import Settings
from folder_organizer.errors import CopyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how fast a failed copy is attempted again.

    The defaults retry forever at the fixed ``wait_seconds`` debounce
    interval. Setting ``max_attempts`` gives up after that many copy
    attempts; ``backoff_multiplier`` adds exponential backoff on top of
    the debounce, capped at ``max_wait_seconds``, plus up to
    ``jitter_seconds`` of random jitter.

    Attributes:
        wait_seconds: Delay before every completion probe.
        max_attempts: Copy attempts before giving up, None for unlimited.
        backoff_multiplier: Exponential backoff multiplier, 0 disables it.
        max_wait_seconds: Upper bound for the backoff delay.
        jitter_seconds: Upper bound for random extra delay.
    """

    wait_seconds: float = DEFAULT_WAIT_SECONDS
    max_attempts: Optional[int] = None
    backoff_multiplier: float = 0.0
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS
    jitter_seconds: float = 0.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        """Build a policy from runtime settings (0 attempts = unlimited)."""
        return cls(
            wait_seconds=float(settings.wait_seconds),
            max_attempts=settings.max_attempts or None,
            backoff_multiplier=float(settings.backoff_multiplier),
            max_wait_seconds=float(settings.max_wait_seconds),
            jitter_seconds=float(settings.jitter_seconds),
        )

    @property
    def is_unbounded(self) -> bool:
        return self.max_attempts is None

    def controller(self) -> AsyncRetrying:
        """Create a tenacity controller for one Mover.

        Only CopyError is retried; when the attempts are exhausted the
        last CopyError is re-raised.

        Example:
            async for attempt in policy.controller():
                with attempt:
                    await copy_once()
        """
        if self.max_attempts is None:
            stop = stop_never
        else:
            stop = stop_after_attempt(self.max_attempts)

        if self.backoff_multiplier > 0:
            wait = wait_exponential(
                multiplier=self.backoff_multiplier, max=self.max_wait_seconds
            )
        else:
            wait = wait_none()
        if self.jitter_seconds > 0:
            wait = wait + wait_random(0, self.jitter_seconds)

        return AsyncRetrying(
            retry=retry_if_exception_type(CopyError),
            stop=stop,
            wait=wait,
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            reraise=True,
        )
