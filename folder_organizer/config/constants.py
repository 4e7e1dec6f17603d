"""
Constants and configuration values for Folder Organizer.

This module centralizes all constants, making them easy to modify
and test. Values that can be overridden from the config file are
only defaults here.
"""

# Version Information
VERSION = "0.4.0"
AUTHOR = "Folder Organizer Contributors"


# Configuration
DEFAULT_CONFIG_FILE = "paths.toml"
CONFIG_ENV_VAR = "FOLDER_ORGANIZER_CONFIG"
LOG_LEVEL_ENV_VAR = "FOLDER_ORGANIZER_LOG_LEVEL"


# Watcher types as written in the config file
WATCHER_TYPE_SYNC = "Sync"
WATCHER_TYPE_COPY = "Copy"


# Download completion
# Writers create "<name>.partial" next to (or inside) an object still being written
PARTIAL_SUFFIX = ".partial"
DEFAULT_WAIT_SECONDS = 5.0


# Retry defaults (0 attempts = unlimited)
DEFAULT_MAX_ATTEMPTS = 0
DEFAULT_BACKOFF_MULTIPLIER = 0.0
DEFAULT_MAX_WAIT_SECONDS = 60.0
DEFAULT_JITTER_SECONDS = 0.0


# Worker pool for blocking filesystem I/O
DEFAULT_WORKERS = 4


# Logging
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# Messages
MESSAGES = {
    "CONFIG_NOT_FOUND": "Konfigurationsdatei nicht gefunden: {path}",
    "CONFIG_INVALID": "Ungültige Konfiguration: {error}",
    "NO_ROOTS": "Keine Pfade konfiguriert",
    "WATCH_STARTED": "Überwache {count} Pfad(e). Strg+C zum Beenden.",
    "WATCH_STOPPED": "Überwachung beendet",
    "OPERATION_CANCELLED": "Operation abgebrochen.",
    "ROOT_FAILED": "Pfad '{name}' fehlgeschlagen: {error}",
    "ROOT_OK": "Pfad '{name}' beendet",
    "CONFIG_OK": "Konfiguration gültig ({count} Pfad(e))",
}
