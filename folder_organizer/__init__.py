"""
Folder Organizer - copy finished downloads and mirror directory trees.
"""

from folder_organizer.config.constants import VERSION

__version__ = VERSION
