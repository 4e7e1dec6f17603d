"""
Claim registry shared by the Copy-mode roots of one application context.

Tracks which source paths have been claimed for moving, which destinations
were copied successfully and which moves were given up. Entries are never
removed for the lifetime of the registry.
"""

import threading
from pathlib import Path
from typing import FrozenSet, Set, Union


class ClaimRegistry:
    """Thread-safe set of claimed, moved and failed paths."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._detected: Set[Path] = set()
        self._moved: Set[Path] = set()
        self._failed: Set[Path] = set()

    def claim(self, path: Union[str, Path]) -> bool:
        """Claim a detected path for moving.

        Returns:
            True if the path was not claimed before, False otherwise.
        """
        path = Path(path)
        with self._lock:
            if path in self._detected:
                return False
            self._detected.add(path)
            return True

    def mark_moved(self, destination: Union[str, Path]) -> None:
        """Record a destination whose copy fully succeeded."""
        with self._lock:
            self._moved.add(Path(destination))

    def mark_failed(self, path: Union[str, Path]) -> None:
        """Record a detected path whose move was given up."""
        with self._lock:
            self._failed.add(Path(path))

    def is_claimed(self, path: Union[str, Path]) -> bool:
        with self._lock:
            return Path(path) in self._detected

    def is_moved(self, destination: Union[str, Path]) -> bool:
        with self._lock:
            return Path(destination) in self._moved

    @property
    def detected(self) -> FrozenSet[Path]:
        with self._lock:
            return frozenset(self._detected)

    @property
    def moved(self) -> FrozenSet[Path]:
        with self._lock:
            return frozenset(self._moved)

    @property
    def failed(self) -> FrozenSet[Path]:
        with self._lock:
            return frozenset(self._failed)
