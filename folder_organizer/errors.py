"""
Exception hierarchy for Folder Organizer.

Every error raised on purpose by the package derives from OrganizerError,
so callers can tell our failures apart from programming errors.
"""


class OrganizerError(Exception):
    """Base exception for all Folder Organizer errors."""

    pass


class ConfigError(OrganizerError):
    """Raised when the configuration file is missing or invalid."""

    pass


class WatchSetupError(OrganizerError):
    """Raised when a filesystem watcher cannot be attached to a root."""

    pass


class BridgeClosedError(OrganizerError):
    """Raised when the notification channel of a root dies unexpectedly."""

    pass


class CopyError(OrganizerError):
    """Raised when a single copy attempt fails."""

    def __init__(self, source, destination, cause: BaseException):
        super().__init__(f"Error copying {source} to {destination}: {cause}")
        self.source = source
        self.destination = destination
        self.cause = cause


class ReconcileError(OrganizerError):
    """Raised when the startup reconciliation cannot delete an object."""

    pass
