"""One-time startup reconciliation of a mirrored pair of trees.

Both trees are fingerprinted by (relative path, size). Every file that
has no identical fingerprint on the other side is deleted from the side
it was found on, so both trees converge to their common fingerprints.
Nothing is copied during this pass.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from folder_organizer.core.file_operations import remove_path
from folder_organizer.core.fingerprint import Fingerprint, scan_tree
from folder_organizer.errors import ReconcileError

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    """Relative paths removed from each side, and how many were kept."""

    removed_from_source: List[Path] = field(default_factory=list)
    removed_from_destination: List[Path] = field(default_factory=list)
    kept: int = 0


class DirectoryReconciler:
    """Delete the asymmetric remainder of two directory trees.

    Attributes:
        source: Watched source tree.
        destination: Mirrored destination tree.
    """

    def __init__(self, source: Union[str, Path], destination: Union[str, Path]):
        self.source = Path(source)
        self.destination = Path(destination)

    def reconcile(self) -> ReconcileReport:
        """Run the reconciliation pass.

        Returns:
            Report of the removed objects.

        Raises:
            ReconcileError: If a root cannot be created or an object
                cannot be deleted. The pass stops at the first failure.
        """
        for folder in (self.source, self.destination):
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ReconcileError(f"Could not create {folder}: {e}") from e

        source_set = scan_tree(self.source)
        destination_set = scan_tree(self.destination)

        report = ReconcileReport(kept=len(source_set & destination_set))
        report.removed_from_destination = self._remove_difference(
            self.destination, destination_set - source_set
        )
        report.removed_from_source = self._remove_difference(
            self.source, source_set - destination_set
        )

        logger.info(
            f"Done syncing {self.source} <-> {self.destination}: "
            f"{len(report.removed_from_destination)} removed from destination, "
            f"{len(report.removed_from_source)} removed from source, "
            f"{report.kept} kept"
        )
        return report

    def _remove_difference(
        self, root: Path, fingerprints: Iterable[Fingerprint]
    ) -> List[Path]:
        removed = []
        for fingerprint in sorted(fingerprints, key=lambda fp: fp.relative_path):
            path = root / fingerprint.relative_path
            logger.debug(f"Removing {path} ({fingerprint.size} bytes)")
            try:
                remove_path(path)
            except OSError as e:
                raise ReconcileError(f"Could not remove {path}: {e}") from e
            removed.append(fingerprint.relative_path)
        return removed
