"""
Command line argument parser.

Handles parsing and validation of CLI arguments.
"""

import argparse
import os
import sys
from typing import List, Optional

from folder_organizer.config.constants import (
    AUTHOR,
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    LOG_LEVEL_ENV_VAR,
    LOG_LEVELS,
    VERSION,
)


class ArgumentParser:
    """Custom argument parser for Folder Organizer."""

    def __init__(self):
        """Initialize argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create and configure the argument parser."""
        parser = argparse.ArgumentParser(
            prog="folder-organizer",
            description="Fertige Downloads kopieren und Ordner spiegeln",
        )

        parser.add_argument(
            "-v", "--version", action="store_true", help="Version anzeigen"
        )

        parser.add_argument(
            "-c",
            "--config",
            type=str,
            metavar="DATEI",
            help=f"Konfigurationsdatei (Standard: ${CONFIG_ENV_VAR} "
            f"oder ./{DEFAULT_CONFIG_FILE})",
        )

        parser.add_argument(
            "--log-level",
            type=str.upper,
            choices=LOG_LEVELS,
            metavar="LEVEL",
            help=f"Log-Level ({', '.join(LOG_LEVELS)})",
        )

        parser.add_argument(
            "--wait",
            type=float,
            metavar="SEKUNDEN",
            help="Wartezeit vor jeder Prüfung eines Downloads",
        )

        parser.add_argument(
            "--check",
            action="store_true",
            help="Nur Konfiguration prüfen, nicht überwachen",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command line arguments.

        Missing --config and --log-level fall back to the environment.

        Args:
            args: Optional list of arguments (for testing)

        Returns:
            Parsed arguments namespace
        """
        parsed = self.parser.parse_args(args)

        if parsed.version:
            self.print_version()
            sys.exit(0)

        if parsed.wait is not None and parsed.wait < 0:
            self.parser.error("--wait darf nicht negativ sein")

        if parsed.config is None:
            parsed.config = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)

        if parsed.log_level is None:
            env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
            if env_level and env_level.upper() in LOG_LEVELS:
                parsed.log_level = env_level.upper()

        return parsed

    def print_version(self) -> None:
        """Print version information."""
        print(f"folder-organizer {VERSION}")
        print(f"Von {AUTHOR}")


def create_parser() -> ArgumentParser:
    """Create and return a configured argument parser."""
    return ArgumentParser()
