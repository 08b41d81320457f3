"""Tests for the watch driver.

Covers:
- TreeWatcher.apply_changes() batch handling by on-disk state
- The watchfiles filter
- TreeWatcher.run() against a live directory
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Callable
from pathlib import Path

import pytest
from watchfiles import Change

from filetrack.tracking.tracker import FileTracker
from filetrack.watch import TreeWatcher, WatchBatch

MakeTree = Callable[[list[str]], Path]


class Events:
    """Collects changed and deleted notifications."""

    def __init__(self, tracker: FileTracker) -> None:
        self.changed: list[str] = []
        self.deleted: list[str] = []
        tracker.on_changed(handler=self.changed.append)
        tracker.on_deleted(handler=self.deleted.append)


@pytest.fixture
def started(make_tree: MakeTree) -> tuple[FileTracker, Events]:
    """A started tracker over a small site, with event recording attached."""
    tracker = FileTracker(make_tree(["index.html", "posts/a.md", "posts/b.md"]))
    tracker.start()
    return tracker, Events(tracker)


def _abs(tracker: FileTracker, rel: str) -> str:
    return str(tracker.root / rel)


class TestApplyChanges:
    """apply_changes() tests."""

    def test_new_file(self, started: tuple[FileTracker, Events]) -> None:
        tracker, events = started
        (tracker.root / "about.html").write_text("about\n")

        batch = TreeWatcher(tracker).apply_changes({(Change.added, _abs(tracker, "about.html"))})

        assert events.changed == ["about.html"]
        assert batch.changed == ["about.html"]
        assert tracker.exists("about.html")

    def test_modified_file(self, started: tuple[FileTracker, Events]) -> None:
        tracker, events = started
        (tracker.root / "index.html").write_text("changed\n")
        TreeWatcher(tracker).apply_changes({(Change.modified, _abs(tracker, "index.html"))})
        assert events.changed == ["index.html"]

    def test_deleted_file(self, started: tuple[FileTracker, Events]) -> None:
        tracker, events = started
        (tracker.root / "posts" / "a.md").unlink()

        batch = TreeWatcher(tracker).apply_changes({(Change.deleted, _abs(tracker, "posts/a.md"))})

        assert events.deleted == ["posts/a.md"]
        assert batch.deleted == ["posts/a.md"]
        assert not tracker.exists("posts/a.md")

    def test_removed_directory_deletes_known_children(
        self, started: tuple[FileTracker, Events]
    ) -> None:
        tracker, events = started
        shutil.rmtree(tracker.root / "posts")

        TreeWatcher(tracker).apply_changes({(Change.deleted, _abs(tracker, "posts"))})

        assert events.deleted == ["posts/a.md", "posts/b.md"]
        assert tracker.known_paths == frozenset({"index.html"})

    def test_removed_directory_skips_ignored_known_paths(
        self, started: tuple[FileTracker, Events]
    ) -> None:
        tracker, events = started
        tracker.notify_changed("posts/a.md~")
        shutil.rmtree(tracker.root / "posts")

        TreeWatcher(tracker).apply_changes({(Change.deleted, _abs(tracker, "posts"))})

        assert events.deleted == ["posts/a.md", "posts/b.md"]

    def test_new_directory_is_scanned_once(self, started: tuple[FileTracker, Events]) -> None:
        tracker, events = started
        (tracker.root / "drafts").mkdir()
        (tracker.root / "drafts" / "c.md").write_text("c\n")

        batch = TreeWatcher(tracker).apply_changes(
            {
                (Change.added, _abs(tracker, "drafts")),
                (Change.added, _abs(tracker, "drafts/c.md")),
            }
        )

        assert events.changed == ["drafts/c.md"]
        assert batch.reconciled == ["drafts"]

    def test_delete_notification_for_recreated_file(
        self, started: tuple[FileTracker, Events]
    ) -> None:
        tracker, events = started
        TreeWatcher(tracker).apply_changes(
            {
                (Change.deleted, _abs(tracker, "index.html")),
                (Change.added, _abs(tracker, "index.html")),
            }
        )
        assert events.deleted == []
        assert events.changed == ["index.html"]
        assert tracker.exists("index.html")

    def test_ignored_and_foreign_paths_dropped(
        self, started: tuple[FileTracker, Events], tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        tracker, events = started
        (tracker.root / ".git").mkdir()
        (tracker.root / ".git" / "HEAD").write_text("ref\n")
        (tracker.root / "build").mkdir()
        (tracker.root / "build" / "index.html").write_text("out\n")
        elsewhere = tmp_path_factory.mktemp("elsewhere") / "x.md"

        batch = TreeWatcher(tracker).apply_changes(
            {
                (Change.added, _abs(tracker, ".git/HEAD")),
                (Change.added, _abs(tracker, "build/index.html")),
                (Change.added, str(elsewhere)),
                (Change.modified, str(tracker.root)),
            }
        )

        assert batch.is_empty
        assert events.changed == events.deleted == []

    def test_unknown_missing_path_is_noop(self, started: tuple[FileTracker, Events]) -> None:
        tracker, events = started
        batch = TreeWatcher(tracker).apply_changes({(Change.deleted, _abs(tracker, "ghost.md"))})
        assert batch == WatchBatch()
        assert events.deleted == []

    def test_handler_error_propagates(self, started: tuple[FileTracker, Events]) -> None:
        tracker, _events = started

        def boom(path: str) -> None:
            raise RuntimeError(path)

        tracker.on_changed(handler=boom)
        with pytest.raises(RuntimeError, match="index.html"):
            TreeWatcher(tracker).apply_changes({(Change.modified, _abs(tracker, "index.html"))})


class TestWatchFilter:
    """The watchfiles filter drops ignored paths."""

    def test_accepts(self, started: tuple[FileTracker, Events]) -> None:
        tracker, _events = started
        watcher = TreeWatcher(tracker)
        assert watcher._accepts(Change.added, _abs(tracker, "posts/c.md"))
        assert not watcher._accepts(Change.added, _abs(tracker, ".git/index"))
        assert not watcher._accepts(Change.added, _abs(tracker, "notes.md~"))


class TestRun:
    """TreeWatcher.run() against the real filesystem."""

    @pytest.mark.asyncio
    async def test_detects_new_file_and_stops(
        self, started: tuple[FileTracker, Events]
    ) -> None:
        tracker, events = started
        watcher = TreeWatcher(tracker, debounce_ms=50, step_ms=10, force_polling=True)
        task = asyncio.create_task(watcher.run())
        try:
            await asyncio.sleep(0.3)
            assert watcher.is_running
            (tracker.root / "fresh.md").write_text("fresh\n")

            for _ in range(100):
                if "fresh.md" in events.changed:
                    break
                await asyncio.sleep(0.05)
        finally:
            watcher.stop()
            await asyncio.wait_for(task, timeout=5)

        assert "fresh.md" in events.changed
        assert not watcher.is_running
