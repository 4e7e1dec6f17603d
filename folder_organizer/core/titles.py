"""
Title extraction for destination subfolder names.

Release names like ``[Group] Some Show - 01 [1080p].mkv`` carry a
descriptive title. guessit parses it so finished downloads can be
grouped into ``<destination>/<title>/``.
"""

import logging
from typing import Callable, Optional

from guessit import guessit

logger = logging.getLogger(__name__)

# Maps a filename to an optional title
TitleExtractor = Callable[[str], Optional[str]]


def extract_title(filename: str) -> Optional[str]:
    """Extract the descriptive title from a filename.

    Args:
        filename: Bare file or directory name, without parent path.

    Returns:
        The title, or None if guessit found none or failed to parse.
    """
    try:
        title = guessit(filename).get("title")
    except Exception as e:
        logger.warning(f"Could not parse title from {filename!r}: {e}")
        return None

    if not isinstance(title, str):
        return None

    title = title.strip()
    # A title is used as a single path component
    if not title or title in (".", "..") or "/" in title or "\\" in title:
        return None
    return title
