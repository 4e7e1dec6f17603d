"""Completion-aware copy of a single detected download.

A Mover waits until the detected object is no longer being written,
copies it into the destination and records the result in the claim
registry. Failed copies are retried according to the RetryPolicy.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from folder_organizer.core.context import AppContext
from folder_organizer.core.file_operations import copy_object, ensure_directory
from folder_organizer.core.titles import TitleExtractor, extract_title
from folder_organizer.errors import CopyError

logger = logging.getLogger(__name__)


class MoveState(Enum):
    """Lifecycle of a Mover."""

    DETECTED = "detected"
    WAITING = "waiting"
    PROBING = "probing"
    COPYING = "copying"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingMove:
    """A claimed path together with where it has to go.

    Attributes:
        detected_path: Source file or directory that was detected.
        destination_root: Configured destination directory.
        place_in_subfolder: Whether to group by extracted title.
        title: Title extracted from the file name, if any.
    """

    detected_path: Path
    destination_root: Path
    place_in_subfolder: bool
    title: Optional[str] = None

    @classmethod
    def create(
        cls,
        detected_path: Union[str, Path],
        destination_root: Union[str, Path],
        place_in_subfolder: bool,
        title_extractor: TitleExtractor = extract_title,
    ) -> "PendingMove":
        """Build a PendingMove, extracting the title when it is needed."""
        detected_path = Path(detected_path)
        title = title_extractor(detected_path.name) if place_in_subfolder else None
        return cls(detected_path, Path(destination_root), place_in_subfolder, title)

    @property
    def destination_folder(self) -> Path:
        if self.place_in_subfolder and self.title:
            return self.destination_root / self.title
        return self.destination_root

    @property
    def destination(self) -> Path:
        return self.destination_folder / self.detected_path.name


class Mover:
    """Drive one PendingMove from detection to a finished copy.

    Every copy attempt is preceded by the debounce delay and as many
    completion probes as needed. Probing never gives up; only copy
    attempts count against the retry policy.

    Attributes:
        move: The move being performed.
        state: Current MoveState.
        attempts: Number of copy attempts made so far.
    """

    def __init__(self, move: PendingMove, context: AppContext) -> None:
        self.move = move
        self.context = context
        self.state = MoveState.DETECTED
        self.attempts = 0

    async def run(self) -> MoveState:
        """Wait for completion, copy and record the result.

        Returns:
            MoveState.DONE, or MoveState.FAILED if the retry policy gave up.
        """
        policy = self.context.retry_policy
        try:
            async for attempt in policy.controller():
                with attempt:
                    await self._wait_until_complete()
                    await self._copy()
        except CopyError as e:
            self.state = MoveState.FAILED
            logger.warning(
                f"Giving up on {self.move.detected_path} after "
                f"{self.attempts} attempts: {e.cause}"
            )
            self.context.registry.mark_failed(self.move.detected_path)
            return self.state

        self.state = MoveState.DONE
        logger.info(f"{self.move.detected_path} moved successfully")
        self.context.registry.mark_moved(self.move.destination)
        return self.state

    async def _wait_until_complete(self) -> None:
        while True:
            self.state = MoveState.WAITING
            await asyncio.sleep(self.context.retry_policy.wait_seconds)

            self.state = MoveState.PROBING
            try:
                in_progress = await self.context.run_blocking(
                    self.context.detector.is_in_progress, self.move.detected_path
                )
            except OSError as e:
                # Let the copy attempt surface the problem
                logger.debug(f"Probe failed for {self.move.detected_path}: {e}")
                return

            if not in_progress:
                return
            logger.debug(f"{self.move.detected_path} is still downloading")

    async def _copy(self) -> None:
        self.state = MoveState.COPYING
        self.attempts += 1
        source = self.move.detected_path
        destination = self.move.destination
        logger.info(f"Starting copy {source}")

        try:
            await self.context.run_blocking(self._copy_blocking)
        except OSError as e:
            logger.error(f"Error copying {source} to {destination}: {e}")
            raise CopyError(source, destination, e) from e

    def _copy_blocking(self) -> int:
        ensure_directory(self.move.destination_folder)
        return copy_object(self.move.detected_path, self.move.destination)
