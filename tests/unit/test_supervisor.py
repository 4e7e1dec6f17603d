"""
Unit tests for per-root supervision.
"""

import asyncio
from pathlib import Path

from folder_organizer.config.settings import WatchedRoot, WatchMode
from folder_organizer.core.supervisor import RootOutcome, Supervisor


def make_root(name: str) -> WatchedRoot:
    return WatchedRoot(Path(f"/src/{name}"), Path(f"/dst/{name}"), False, name, WatchMode.COPY)


class FailingWatcher:
    async def start(self, cancel):
        raise RuntimeError("watch limit reached")


class WaitingWatcher:
    def __init__(self):
        self.finished = False

    async def start(self, cancel):
        await cancel.wait()
        self.finished = True


class TestSupervisor:
    """Tests for Supervisor."""

    def test_failing_root_does_not_stop_others(self, context):
        waiting = WaitingWatcher()
        watchers = {"bad": FailingWatcher(), "good": waiting}
        supervisor = Supervisor(
            [make_root("bad"), make_root("good")],
            context,
            watcher_factory=lambda root, ctx: watchers[root.name],
        )

        async def scenario():
            task = asyncio.create_task(supervisor.run())
            await asyncio.sleep(0.05)
            assert not task.done()
            supervisor.stop()
            return await asyncio.wait_for(task, timeout=2)

        bad, good = asyncio.run(scenario())

        assert bad.name == "bad" and not bad.ok
        assert isinstance(bad.error, RuntimeError)
        assert good == RootOutcome("good", error=None, stopped=True)
        assert waiting.finished

    def test_stop_single_root(self, context):
        watchers = {"a": WaitingWatcher(), "b": WaitingWatcher()}
        supervisor = Supervisor(
            [make_root("a"), make_root("b")],
            context,
            watcher_factory=lambda root, ctx: watchers[root.name],
        )

        async def scenario():
            task = asyncio.create_task(supervisor.run())
            await asyncio.sleep(0.05)
            supervisor.stop("a")
            await asyncio.sleep(0.05)
            assert watchers["a"].finished
            assert not watchers["b"].finished
            supervisor.stop("b")
            return await asyncio.wait_for(task, timeout=2)

        outcomes = asyncio.run(scenario())
        assert all(outcome.ok and outcome.stopped for outcome in outcomes)

    def test_factory_error_is_captured(self, context):
        def broken_factory(root, ctx):
            raise ValueError("no watcher")

        supervisor = Supervisor([make_root("x")], context, watcher_factory=broken_factory)

        (outcome,) = asyncio.run(supervisor.run())
        assert isinstance(outcome.error, ValueError)
        assert outcome.stopped is False
