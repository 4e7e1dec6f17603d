"""
Pytest configuration and shared fixtures
"""

from pathlib import Path
from typing import List, Optional

import pytest

from folder_organizer.config.settings import WatchedRoot, WatchMode
from folder_organizer.core.completion import CompletionDetector
from folder_organizer.core.context import AppContext
from folder_organizer.core.registry import ClaimRegistry
from folder_organizer.core.retry import RetryPolicy

# Short debounce so Mover tests finish quickly
TEST_WAIT_SECONDS = 0.01


def no_title(filename: str) -> Optional[str]:
    """Title extractor that never finds a title."""
    return None


class FakeBridge:
    """Stand-in for ChangeBridge that replays a fixed list of events."""

    def __init__(self, events: List = None):
        self.queued = list(events or [])
        self.kinds = None
        self.started = False
        self.stopped = False

    def __call__(self, root, kinds, ignore_suffixes=()):
        self.root = Path(root)
        self.kinds = frozenset(kinds)
        self.ignore_suffixes = tuple(ignore_suffixes)
        return self

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    async def events(self):
        for event in self.queued:
            yield event


@pytest.fixture
def fake_bridge_cls():
    """FakeBridge class; tests instantiate or subclass it."""
    return FakeBridge


@pytest.fixture
def untitled():
    """Title extractor that never finds a title."""
    return no_title


@pytest.fixture
def source_dir(tmp_path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def destination_dir(tmp_path) -> Path:
    path = tmp_path / "destination"
    path.mkdir()
    return path


@pytest.fixture
def context() -> AppContext:
    """Isolated application context with a short debounce and no titles."""
    ctx = AppContext(
        registry=ClaimRegistry(),
        detector=CompletionDetector(".partial"),
        retry_policy=RetryPolicy(wait_seconds=TEST_WAIT_SECONDS),
        title_extractor=no_title,
    )
    yield ctx
    ctx.close()


@pytest.fixture
def copy_root(source_dir, destination_dir) -> WatchedRoot:
    return WatchedRoot(
        source=source_dir,
        destination=destination_dir,
        place_in_subfolder=False,
        name="downloads",
        mode=WatchMode.COPY,
    )


@pytest.fixture
def mirror_root(source_dir, destination_dir) -> WatchedRoot:
    return WatchedRoot(
        source=source_dir,
        destination=destination_dir,
        place_in_subfolder=False,
        name="backup",
        mode=WatchMode.MIRROR,
    )


@pytest.fixture
def write_tree():
    """Write a {relative path: content} mapping below a root."""

    def _write(root: Path, files: dict) -> None:
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content)

    return _write
