"""Per-root watchers for the two watch modes.

CopyWatcher copies finished downloads and never deletes. SyncWatcher
reconciles both trees once and then mirrors creations and removals.
Both share the IRootWatcher interface and are chosen once per root by
create_watcher().
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Set

from folder_organizer.config.settings import WatchedRoot, WatchMode
from folder_organizer.core.bridge import ChangeBridge, ChangeEvent, ChangeKind
from folder_organizer.core.context import AppContext
from folder_organizer.core.mover import Mover, MoveState, PendingMove
from folder_organizer.core.reconciler import DirectoryReconciler
from folder_organizer.core.sync_handler import LiveSyncHandler

logger = logging.getLogger(__name__)


class IRootWatcher(ABC):
    """Interface for a watcher bound to one root."""

    def __init__(self, root: WatchedRoot, context: AppContext) -> None:
        self.root = root
        self.context = context

    @abstractmethod
    async def start(self, cancel: asyncio.Event) -> None:
        """Watch the root until cancel is set.

        Raises:
            OrganizerError: If the root cannot be watched any longer.
        """
        pass

    def _create_bridge(self, *kinds: ChangeKind) -> ChangeBridge:
        bridge = self.context.bridge_factory(
            self.root.source,
            kinds,
            ignore_suffixes=(self.context.detector.partial_suffix,),
        )
        bridge.start()
        return bridge

    @staticmethod
    async def _stop_when(cancel: asyncio.Event, bridge: ChangeBridge) -> None:
        await cancel.wait()
        bridge.stop()


class CopyWatcher(IRootWatcher):
    """Copy completed objects from source to destination."""

    def __init__(self, root: WatchedRoot, context: AppContext) -> None:
        super().__init__(root, context)
        self._movers: Set[asyncio.Task] = set()

    async def start(self, cancel: asyncio.Event) -> None:
        logger.info(f"Starting {self.root.name} watcher")

        bridge = self._create_bridge(ChangeKind.CREATED)
        stopper = asyncio.create_task(self._stop_when(cancel, bridge))
        try:
            async for event in bridge.events():
                self.handle_created(event)
        finally:
            stopper.cancel()
            bridge.stop()
            for task in list(self._movers):
                task.cancel()

    def handle_created(self, event: ChangeEvent) -> None:
        """Claim every new path and spawn a Mover for it."""
        for path in event.paths:
            if self.context.detector.is_partial(path):
                logger.debug(f"Ignoring partial marker {path}")
                continue
            if not self.context.registry.claim(path):
                logger.debug(f"Already detected: {path}")
                continue
            self.spawn_mover(path)

    def spawn_mover(self, path: Path) -> asyncio.Task:
        """Start an independent Mover task that the event loop does not await."""
        logger.info(f"{path} found, moving to correct folder")
        task = asyncio.create_task(self._move(path), name=f"move:{path.name}")
        self._movers.add(task)
        task.add_done_callback(self._on_mover_done)
        return task

    @property
    def active_movers(self) -> Set[asyncio.Task]:
        return set(self._movers)

    async def _move(self, path: Path) -> MoveState:
        move = await self.context.run_blocking(
            PendingMove.create,
            path,
            self.root.destination,
            self.root.place_in_subfolder,
            self.context.title_extractor,
        )
        return await Mover(move, self.context).run()

    def _on_mover_done(self, task: asyncio.Task) -> None:
        self._movers.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Mover {task.get_name()} crashed: {error}",
                exc_info=(type(error), error, error.__traceback__),
            )


class SyncWatcher(IRootWatcher):
    """Reconcile source and destination, then mirror live changes."""

    async def start(self, cancel: asyncio.Event) -> None:
        logger.info(f"Starting {self.root.name} watcher. Beginning sync")

        reconciler = DirectoryReconciler(self.root.source, self.root.destination)
        await self.context.run_blocking(reconciler.reconcile)
        if cancel.is_set():
            return

        handler = LiveSyncHandler(
            self.root.source, self.root.destination, self.context
        )
        bridge = self._create_bridge(ChangeKind.CREATED, ChangeKind.REMOVED)
        stopper = asyncio.create_task(self._stop_when(cancel, bridge))
        try:
            async for event in bridge.events():
                await handler.handle(event)
        finally:
            stopper.cancel()
            bridge.stop()


def create_watcher(root: WatchedRoot, context: AppContext) -> IRootWatcher:
    """Select the watcher implementation for a root's mode."""
    if root.mode is WatchMode.MIRROR:
        return SyncWatcher(root, context)
    return CopyWatcher(root, context)
