"""Bridge between watchdog notifications and the asyncio event loop.

This module provides the ChangeBridge class which attaches a recursive
watchdog observer to a root directory and turns its callbacks, delivered
on the observer thread, into an ordered async stream of ChangeEvent
objects. Only creations and (optionally) removals are forwarded.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, Callable, FrozenSet, Iterable, Optional, Tuple, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from folder_organizer.config.constants import PARTIAL_SUFFIX
from folder_organizer.errors import BridgeClosedError, WatchSetupError

logger = logging.getLogger(__name__)

# How often the receive loop checks that the observer thread is alive
HEALTH_CHECK_INTERVAL = 1.0

_CLOSED = object()


class ChangeKind(Enum):
    """Kinds of change forwarded by the bridge."""

    CREATED = "created"
    REMOVED = "removed"


@dataclass(frozen=True)
class ChangeEvent:
    """A filtered filesystem change below a watched root."""

    kind: ChangeKind
    paths: Tuple[Path, ...]


class _BridgeEventHandler(FileSystemEventHandler):
    """Forward watchdog callbacks to the owning bridge."""

    def __init__(self, bridge: "ChangeBridge") -> None:
        super().__init__()
        self.bridge = bridge

    def on_created(self, event: FileSystemEvent) -> None:
        self.bridge.publish(ChangeKind.CREATED, event)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self.bridge.publish(ChangeKind.REMOVED, event)


class ChangeBridge:
    """Ordered async stream of changes below one root.

    Events are queued in the order watchdog delivered them; nothing is
    reordered or coalesced. The stream is not restartable: once stopped,
    or once the observer thread dies, it ends.

    Attributes:
        root: Directory watched recursively.
        kinds: Change kinds that are forwarded, everything else is dropped.
        ignore_suffixes: Name suffixes of transient objects that are dropped.
    """

    def __init__(
        self,
        root: Union[str, Path],
        kinds: Iterable[ChangeKind],
        ignore_suffixes: Iterable[str] = (PARTIAL_SUFFIX,),
        observer_factory: Callable[[], Observer] = Observer,
    ) -> None:
        self.root = Path(root)
        self.kinds: FrozenSet[ChangeKind] = frozenset(kinds)
        self.ignore_suffixes = tuple(ignore_suffixes)
        self._observer_factory = observer_factory
        self._observer: Optional[Observer] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._stopped = False

    def start(self) -> None:
        """Attach the observer. Must be called from the event loop thread.

        Raises:
            WatchSetupError: If the root cannot be watched.
        """
        if not self.root.is_dir():
            raise WatchSetupError(f"Cannot watch {self.root}: not a directory")

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()

        observer = self._observer_factory()
        try:
            observer.schedule(_BridgeEventHandler(self), str(self.root), recursive=True)
            observer.start()
        except Exception as e:
            raise WatchSetupError(f"Cannot watch {self.root}: {e}") from e

        self._observer = observer
        logger.debug(f"Watching {self.root}")

    def stop(self) -> None:
        """Detach the observer and end the event stream."""
        if self._stopped:
            return
        self._stopped = True

        if self._observer is not None:
            self._observer.stop()
            if self._observer.is_alive():
                self._observer.join()

        if self._queue is not None:
            self._queue.put_nowait(_CLOSED)

    def publish(self, kind: ChangeKind, event: FileSystemEvent) -> None:
        """Queue a watchdog event. Called on the observer thread."""
        if kind not in self.kinds:
            return

        path = Path(os.fsdecode(event.src_path))
        if path.name.endswith(self.ignore_suffixes):
            logger.debug(f"Ignoring transient object: {path}")
            return

        change = ChangeEvent(kind, (path,))
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, change)
        except RuntimeError:
            # Event loop already closed during shutdown
            logger.debug(f"Dropping {kind.value} event for {path}: loop closed")

    async def events(self) -> AsyncIterator[ChangeEvent]:
        """Yield change events until the bridge is stopped.

        Raises:
            BridgeClosedError: If the observer thread died unexpectedly.
        """
        if self._queue is None:
            raise RuntimeError("ChangeBridge.start() must be called first")

        while True:
            try:
                item = await asyncio.wait_for(
                    self._queue.get(), timeout=HEALTH_CHECK_INTERVAL
                )
            except asyncio.TimeoutError:
                if self._stopped:
                    return
                if not self._observer.is_alive():
                    raise BridgeClosedError(f"Watcher for {self.root} stopped unexpectedly")
                continue

            if item is _CLOSED:
                return
            yield item
