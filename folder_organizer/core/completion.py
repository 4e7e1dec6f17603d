"""Download completion detection.

Writers mark an object as in progress by placing a partial marker (a
file whose name ends with the partial suffix) inside it. A directory is
considered complete once no marker exists anywhere below it.
"""

import logging
import os
from pathlib import Path
from typing import Union

from folder_organizer.config.constants import PARTIAL_SUFFIX

logger = logging.getLogger(__name__)


class CompletionDetector:
    """Decide whether a detected path is still being written.

    The check rescans the filesystem on every call and keeps no state,
    so it can be called concurrently from any thread.

    Attributes:
        partial_suffix: Name suffix of in-progress marker files.
    """

    def __init__(self, partial_suffix: str = PARTIAL_SUFFIX) -> None:
        self.partial_suffix = partial_suffix

    def is_partial(self, path: Union[str, Path]) -> bool:
        """Check if a path is itself a partial marker."""
        return Path(path).name.endswith(self.partial_suffix)

    def is_in_progress(self, path: Union[str, Path]) -> bool:
        """Check if path, or anything nested below it, is being written.

        Plain files are never in progress; their completion is inferred
        from a successful copy.

        Args:
            path: Detected file or directory.

        Returns:
            True if a partial marker exists in the directory tree.
        """
        path = Path(path)
        if not path.is_dir():
            return False

        try:
            with os.scandir(path) as it:
                entries = list(it)
        except FileNotFoundError:
            # Vanished mid-probe, the copy attempt will report it
            logger.debug(f"Directory disappeared while probing: {path}")
            return False

        if any(entry.name.endswith(self.partial_suffix) for entry in entries):
            return True

        return any(
            self.is_in_progress(entry.path)
            for entry in entries
            if entry.is_dir(follow_symlinks=False)
        )
