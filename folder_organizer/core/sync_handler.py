"""Live propagation of changes from a source tree to its mirror.

Runs after the startup reconciliation. Each event is attempted once:
failures are logged and the event is dropped.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from folder_organizer.core.bridge import ChangeEvent, ChangeKind
from folder_organizer.core.context import AppContext
from folder_organizer.core.file_operations import (
    copy_object,
    mirror_path,
    prune_empty_parent,
    remove_path,
)

logger = logging.getLogger(__name__)


class LiveSyncHandler:
    """Mirror created and removed objects into the destination tree.

    Attributes:
        source: Watched source tree.
        destination: Mirrored destination tree.
    """

    def __init__(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        context: AppContext,
    ) -> None:
        self.source = Path(source)
        self.destination = Path(destination)
        self.context = context

    async def handle(self, event: ChangeEvent) -> None:
        """Dispatch an event by kind."""
        if event.kind is ChangeKind.CREATED:
            await self.handle_created(event)
        elif event.kind is ChangeKind.REMOVED:
            await self.handle_removed(event)

    async def handle_created(self, event: ChangeEvent) -> None:
        """Copy each created object to the same relative path in destination."""
        for path in event.paths:
            target = self._target(path)
            if target is None:
                continue

            logger.info(f"Copying {path.name} to {target}")
            try:
                await self.context.run_blocking(self._copy, path, target)
            except OSError as e:
                logger.error(f"Error while copying {path.name}: {e}")
                continue
            logger.info(f"Copied {path.name}")

    async def handle_removed(self, event: ChangeEvent) -> None:
        """Delete each removed object's mirror and prune an emptied parent."""
        for path in event.paths:
            target = self._target(path)
            if target is None:
                continue

            logger.info(f"Deleting {path.name}")
            try:
                pruned = await self.context.run_blocking(self._remove, target)
            except FileNotFoundError:
                logger.warning(f"Mirror of {path.name} already gone: {target}")
                continue
            except OSError as e:
                logger.error(f"Error deleting file {path.name}: {e}")
                continue

            if pruned:
                logger.debug(f"Removed empty folder {target.parent}")
            logger.info(f"Removed {path.name}")

    def _target(self, path: Path) -> Optional[Path]:
        try:
            target = mirror_path(path, self.source, self.destination)
        except ValueError:
            logger.error(f"{path} is not below {self.source}, ignoring")
            return None

        # The watched root itself maps onto the destination root
        if target == self.destination:
            logger.warning(f"Ignoring change to watched root {self.source}")
            return None
        return target

    @staticmethod
    def _copy(path: Path, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        copy_object(path, target)

    def _remove(self, target: Path) -> bool:
        remove_path(target)
        return prune_empty_parent(target, self.destination)
