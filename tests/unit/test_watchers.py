"""Unit tests for the Copy and Sync root watchers.

A FakeBridge replays events so the watchers can be driven without
watchdog.
"""

import asyncio
from unittest.mock import Mock, patch

import pytest

from folder_organizer.core.bridge import ChangeEvent, ChangeKind
from folder_organizer.core.watchers import CopyWatcher, SyncWatcher, create_watcher
from folder_organizer.errors import ReconcileError


def created(*paths):
    return ChangeEvent(ChangeKind.CREATED, tuple(paths))


class TestCreateWatcher:
    def test_copy_mode_selects_copy_watcher(self, copy_root, context):
        assert isinstance(create_watcher(copy_root, context), CopyWatcher)

    def test_mirror_mode_selects_sync_watcher(self, mirror_root, context):
        assert isinstance(create_watcher(mirror_root, context), SyncWatcher)


class TestCopyWatcher:
    """Tests for CopyWatcher."""

    def test_duplicate_events_spawn_one_mover(self, copy_root, context):
        watcher = CopyWatcher(copy_root, context)
        path = copy_root.source / "movie.mkv"

        with patch.object(watcher, "spawn_mover") as spawn:
            watcher.handle_created(created(path))
            watcher.handle_created(created(path))
            watcher.handle_created(created(path, path))

        spawn.assert_called_once_with(path)
        assert context.registry.is_claimed(path)

    def test_partial_markers_are_not_claimed(self, copy_root, context):
        watcher = CopyWatcher(copy_root, context)
        marker = copy_root.source / "movie.mkv.partial"

        with patch.object(watcher, "spawn_mover") as spawn:
            watcher.handle_created(created(marker))

        spawn.assert_not_called()
        assert not context.registry.is_claimed(marker)

    def test_registry_is_shared_between_roots(self, copy_root, context):
        first = CopyWatcher(copy_root, context)
        second = CopyWatcher(copy_root, context)
        path = copy_root.source / "shared.mkv"

        with patch.object(first, "spawn_mover") as spawn_first, patch.object(
            second, "spawn_mover"
        ) as spawn_second:
            first.handle_created(created(path))
            second.handle_created(created(path))

        spawn_first.assert_called_once_with(path)
        spawn_second.assert_not_called()

    def test_spawned_mover_copies_file(self, copy_root, context):
        detected = copy_root.source / "episode.mkv"
        detected.write_text("data")
        watcher = CopyWatcher(copy_root, context)

        async def scenario():
            task = watcher.spawn_mover(detected)
            assert task in watcher.active_movers
            return await asyncio.wait_for(task, timeout=5)

        asyncio.run(scenario())

        assert (copy_root.destination / "episode.mkv").read_text() == "data"
        assert watcher.active_movers == set()
        assert context.registry.is_moved(copy_root.destination / "episode.mkv")

    def test_start_uses_created_kind_only(self, copy_root, context, fake_bridge_cls):
        bridge = fake_bridge_cls([])
        context.bridge_factory = bridge

        asyncio.run(CopyWatcher(copy_root, context).start(asyncio.Event()))

        assert bridge.kinds == frozenset({ChangeKind.CREATED})
        assert bridge.ignore_suffixes == (".partial",)
        assert bridge.started and bridge.stopped

    def test_cancel_stops_bridge(self, copy_root, context, fake_bridge_cls):
        class EndlessBridge(fake_bridge_cls):
            async def events(self):
                while not self.stopped:
                    await asyncio.sleep(0.01)
                return
                yield

        bridge = EndlessBridge()
        context.bridge_factory = bridge

        async def scenario():
            cancel = asyncio.Event()
            task = asyncio.create_task(CopyWatcher(copy_root, context).start(cancel))
            await asyncio.sleep(0.05)
            cancel.set()
            await asyncio.wait_for(task, timeout=2)

        asyncio.run(scenario())
        assert bridge.stopped


class TestSyncWatcher:
    """Tests for SyncWatcher."""

    def test_reconciles_then_handles_events(
        self, mirror_root, context, write_tree, fake_bridge_cls
    ):
        write_tree(mirror_root.source, {"kept.txt": "k", "new.txt": "n"})
        write_tree(mirror_root.destination, {"kept.txt": "k", "stale.txt": "s"})

        def create_new_file_after_reconcile():
            # new.txt was removed from source by the reconciliation pass
            write_tree(mirror_root.source, {"later.txt": "l"})
            return [created(mirror_root.source / "later.txt")]

        class ReplayBridge(fake_bridge_cls):
            async def events(self):
                for event in create_new_file_after_reconcile():
                    yield event

        bridge = ReplayBridge()
        context.bridge_factory = bridge

        asyncio.run(SyncWatcher(mirror_root, context).start(asyncio.Event()))

        assert bridge.kinds == frozenset({ChangeKind.CREATED, ChangeKind.REMOVED})
        assert not (mirror_root.source / "new.txt").exists()
        assert not (mirror_root.destination / "stale.txt").exists()
        assert (mirror_root.destination / "kept.txt").exists()
        assert (mirror_root.destination / "later.txt").read_text() == "l"

    def test_reconcile_failure_propagates(self, mirror_root, context):
        context.bridge_factory = Mock()
        watcher = SyncWatcher(mirror_root, context)

        with patch(
            "folder_organizer.core.watchers.DirectoryReconciler.reconcile",
            side_effect=ReconcileError("denied"),
        ):
            with pytest.raises(ReconcileError):
                asyncio.run(watcher.start(asyncio.Event()))

        context.bridge_factory.assert_not_called()

    def test_cancel_before_attach_skips_bridge(self, mirror_root, context):
        context.bridge_factory = Mock()
        cancel = asyncio.Event()
        cancel.set()

        asyncio.run(SyncWatcher(mirror_root, context).start(cancel))

        context.bridge_factory.assert_not_called()
