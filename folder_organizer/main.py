"""
Entry point for Folder Organizer.
"""

import sys


def main():
    """Main entry point for Folder Organizer."""
    from folder_organizer.cli.app import main as cli_main

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
