"""
Size-based fingerprints for comparing two directory trees.

Content is never read: two files are considered equal when they sit at
the same relative path and have the same size.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Set, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fingerprint:
    """A (relative path, size) pair."""

    relative_path: Path
    size: int


def scan_tree(root: Union[str, Path]) -> Set[Fingerprint]:
    """Fingerprint every regular file below root.

    Directories are not fingerprinted. Entries that disappear or cannot
    be stat'ed during the walk are logged and skipped.

    Args:
        root: Directory to scan.

    Returns:
        Set of fingerprints relative to root.
    """
    root = Path(root)
    fingerprints = set()

    def _on_error(error: OSError) -> None:
        logger.error(f"Error scanning {error.filename}: {error}")

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            try:
                if not path.is_file():
                    continue
                size = path.stat().st_size
            except OSError as e:
                logger.error(f"Error scanning {path}: {e}")
                continue
            fingerprints.add(Fingerprint(path.relative_to(root), size))

    return fingerprints
