"""
Application context shared by every watched root.

Owns the claim registry, the completion detector, the retry policy and
the worker pool that runs blocking filesystem I/O off the event loop.
Tests build isolated contexts instead of relying on module globals.
"""

from __future__ import annotations

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from folder_organizer.config.settings import Settings
from folder_organizer.core.bridge import ChangeBridge
from folder_organizer.core.completion import CompletionDetector
from folder_organizer.core.registry import ClaimRegistry
from folder_organizer.core.retry import RetryPolicy
from folder_organizer.core.titles import TitleExtractor, extract_title

T = TypeVar("T")


@dataclass
class AppContext:
    """Dependencies handed by reference to each root's watcher."""

    registry: ClaimRegistry = field(default_factory=ClaimRegistry)
    detector: CompletionDetector = field(default_factory=CompletionDetector)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    executor: Optional[ThreadPoolExecutor] = None
    title_extractor: TitleExtractor = extract_title
    bridge_factory: Callable[..., ChangeBridge] = ChangeBridge

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        """Create a context with a dedicated worker pool."""
        return cls(
            detector=CompletionDetector(settings.partial_suffix),
            retry_policy=RetryPolicy.from_settings(settings),
            executor=ThreadPoolExecutor(
                max_workers=settings.workers, thread_name_prefix="fs-worker"
            ),
        )

    async def run_blocking(self, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking callable on the worker pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, functools.partial(func, *args)
        )

    def close(self) -> None:
        """Shut down the worker pool without waiting for running copies."""
        if self.executor is not None:
            self.executor.shutdown(wait=False)
