"""
Core watch engines for Folder Organizer.
"""

from .bridge import ChangeBridge, ChangeEvent, ChangeKind
from .completion import CompletionDetector
from .context import AppContext
from .fingerprint import Fingerprint, scan_tree
from .mover import Mover, MoveState, PendingMove
from .reconciler import DirectoryReconciler, ReconcileReport
from .registry import ClaimRegistry
from .retry import RetryPolicy
from .supervisor import RootOutcome, Supervisor
from .sync_handler import LiveSyncHandler
from .watchers import CopyWatcher, IRootWatcher, SyncWatcher, create_watcher
