"""Supervision of all watched roots.

Each root runs in its own task. A failing root is recorded in its
RootOutcome and does not affect the other roots. Every root has its own
cancellation token for orderly shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from folder_organizer.config.settings import WatchedRoot
from folder_organizer.core.context import AppContext
from folder_organizer.core.watchers import IRootWatcher, create_watcher

logger = logging.getLogger(__name__)


@dataclass
class RootOutcome:
    """How a root's task ended."""

    name: str
    error: Optional[BaseException] = None
    stopped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class Supervisor:
    """Run one supervised task per root.

    Attributes:
        roots: Configured roots.
        context: Shared application context.
    """

    def __init__(
        self,
        roots: Sequence[WatchedRoot],
        context: AppContext,
        watcher_factory: Callable[[WatchedRoot, AppContext], IRootWatcher] = create_watcher,
    ) -> None:
        self.roots = list(roots)
        self.context = context
        self.watcher_factory = watcher_factory
        self._tokens: Dict[str, asyncio.Event] = {}

    async def run(self) -> List[RootOutcome]:
        """Run every root until it stops or fails.

        Returns:
            One outcome per root, in configuration order.
        """
        self._tokens = {root.name: asyncio.Event() for root in self.roots}
        tasks = [
            asyncio.create_task(self._supervise(root), name=f"root:{root.name}")
            for root in self.roots
        ]
        return list(await asyncio.gather(*tasks))

    def stop(self, name: Optional[str] = None) -> None:
        """Request shutdown of one root, or of every root when name is None."""
        if name is not None:
            self._tokens[name].set()
            return
        for token in self._tokens.values():
            token.set()

    async def _supervise(self, root: WatchedRoot) -> RootOutcome:
        token = self._tokens[root.name]
        try:
            watcher = self.watcher_factory(root, self.context)
            await watcher.start(token)
        except Exception as e:
            logger.error(f"Root {root.name} failed: {e}", exc_info=True)
            return RootOutcome(root.name, error=e, stopped=token.is_set())

        logger.info(f"Root {root.name} stopped")
        return RootOutcome(root.name, stopped=token.is_set())
