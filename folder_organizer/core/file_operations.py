"""
File operations module.

Handles the filesystem primitives used by both watcher modes: creating
directories, copying files and trees, deleting objects and pruning
directories left empty behind them. All functions are blocking and are
meant to run on the worker pool.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def ensure_directory(folder: Union[str, Path]) -> bool:
    """Create a directory (and its parents) if it does not exist.

    Failures are logged and not raised; a later copy into the folder
    will fail and report the problem.

    Args:
        folder: Directory to create.

    Returns:
        True if the directory exists afterwards, False otherwise.
    """
    folder = Path(folder)
    if folder.is_dir():
        return True

    try:
        folder.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Could not create folder {folder}: {e}")
        return False


def copy_file(source: Union[str, Path], destination: Union[str, Path]) -> int:
    """Copy a single file, overwriting the destination.

    Content and permission bits are copied.

    Returns:
        Number of bytes copied.

    Raises:
        OSError: If the copy fails.
    """
    shutil.copy(source, destination)
    return Path(destination).stat().st_size


def copy_tree(source: Union[str, Path], destination: Union[str, Path]) -> int:
    """Recursively copy a directory, depth-first.

    Files are copied as they are found; existing destination files are
    overwritten.

    Returns:
        Total number of bytes copied.

    Raises:
        OSError: On the first entry that cannot be copied.
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    copied = 0
    with os.scandir(source) as it:
        entries = list(it)

    for entry in entries:
        target = destination / entry.name
        if entry.is_dir(follow_symlinks=False):
            copied += copy_tree(entry.path, target)
        else:
            copied += copy_file(entry.path, target)
    return copied


def copy_object(source: Union[str, Path], destination: Union[str, Path]) -> int:
    """Copy a file or a directory tree to destination.

    Raises:
        OSError: If the copy fails.
    """
    if Path(source).is_dir():
        return copy_tree(source, destination)
    return copy_file(source, destination)


def remove_path(path: Union[str, Path]) -> None:
    """Delete a file, or a directory with its whole subtree.

    Raises:
        OSError: If the object cannot be removed.
    """
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def prune_empty_parent(path: Union[str, Path], root: Union[str, Path]) -> bool:
    """Remove the parent directory of path if it is now empty.

    Only a single level is pruned. The parent must lie strictly below
    root, so root and anything above it are never removed.

    Args:
        path: Object that was just deleted.
        root: Top of the tree the parent belongs to.

    Returns:
        True if the parent directory was removed.

    Raises:
        OSError: If the parent cannot be listed or removed.
    """
    parent = Path(path).parent
    if Path(root) not in parent.parents or not parent.is_dir():
        return False

    with os.scandir(parent) as it:
        if any(True for _ in it):
            return False

    parent.rmdir()
    return True


def mirror_path(
    path: Union[str, Path], source: Union[str, Path], destination: Union[str, Path]
) -> Path:
    """Map a path below source to the same relative path below destination.

    Raises:
        ValueError: If path is not below source.
    """
    return Path(destination) / Path(path).relative_to(source)
