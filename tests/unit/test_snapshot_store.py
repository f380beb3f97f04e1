"""Tests for SnapshotStore and the process-wide default store."""

import gc
import logging

import pytest
from pydantic import ValidationError

from build_lens.snapshot_schema import Snapshot
from build_lens.snapshot_store import SnapshotStore, get_default_store, reset_default_store


class TestSnapshotStore:
    """Tests for load/current/clear and subscriptions."""

    def test_starts_empty(self):
        store = SnapshotStore()

        assert store.current() is None
        assert store.loading is False

    def test_load_validates_raw_mapping(self, snapshot_data):
        """Raw export data is turned into a Snapshot."""
        store = SnapshotStore()

        installed = store.load(snapshot_data)

        assert isinstance(installed, Snapshot)
        assert store.current() is installed
        assert len(installed.modules) == 3

    def test_load_keeps_snapshot_instance(self, snapshot):
        """A Snapshot is installed as-is."""
        store = SnapshotStore()
        store.load(snapshot)

        assert store.current() is snapshot

    def test_load_replaces_previous(self, snapshot, snapshot_data):
        store = SnapshotStore(snapshot)

        store.load(snapshot_data)

        assert store.current() is not snapshot

    def test_subscribers_see_every_replacement(self, snapshot, snapshot_data):
        """Listeners receive each new reference, including None on clear."""
        store = SnapshotStore()
        seen = []
        store.subscribe(seen.append)

        store.load(snapshot)
        store.load(snapshot_data)
        store.clear()

        assert seen[0] is snapshot
        assert isinstance(seen[1], Snapshot) and seen[1] is not snapshot
        assert seen[2] is None

    def test_unsubscribe(self, snapshot):
        store = SnapshotStore()
        seen = []
        unsubscribe = store.subscribe(seen.append)

        unsubscribe()
        unsubscribe()
        store.load(snapshot)

        assert seen == []

    def test_bound_methods_are_held_weakly(self, snapshot):
        """A subscriber object that goes away drops out of the store."""
        class Listener:
            def __init__(self):
                self.seen = []

            def on_snapshot(self, snapshot):
                self.seen.append(snapshot)

        store = SnapshotStore()
        listener = Listener()
        store.subscribe(listener.on_snapshot)

        store.load(snapshot)
        assert listener.seen == [snapshot]
        assert store.subscriber_count == 1

        del listener
        gc.collect()

        assert store.subscriber_count == 0
        store.clear()

    def test_plain_callables_are_held_strongly(self):
        store = SnapshotStore()
        seen = []
        store.subscribe(lambda snapshot: seen.append(snapshot))
        gc.collect()

        store.load({})

        assert store.subscriber_count == 1
        assert len(seen) == 1

    def test_loading_flag_is_set_externally(self):
        store = SnapshotStore()

        store.set_loading(True)
        assert store.loading is True

        store.set_loading(False)
        assert store.loading is False

    def test_snapshot_is_frozen(self, snapshot):
        """Installed snapshots cannot be reassigned field by field."""
        with pytest.raises(ValidationError):
            snapshot.build_duration = 0


class TestDefaultStore:
    """Tests for get_default_store()."""

    def test_missing_data_file_leaves_store_empty(self, tmp_path, monkeypatch, caplog):
        """No snapshot file is "no data", not a crash."""
        monkeypatch.chdir(tmp_path)

        with caplog.at_level(logging.WARNING, logger="build_lens.snapshot_store"):
            store = get_default_store()

        assert store.current() is None
        assert "No snapshot at" in caplog.text

    def test_loads_configured_data_file(self, tmp_path, monkeypatch, snapshot_file):
        """The default data path is .data/sample.json under the cwd."""
        monkeypatch.chdir(tmp_path)

        store = get_default_store()

        assert store.current() is not None
        assert store.current().build_duration == 1234.5
        assert store.loading is False

    def test_environment_override(self, tmp_path, monkeypatch, snapshot_file):
        monkeypatch.setenv("BUILD_LENS_DATA", str(snapshot_file))

        assert get_default_store().current() is not None

    def test_invalid_data_file_leaves_store_empty(self, tmp_path, monkeypatch, caplog):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        monkeypatch.setenv("BUILD_LENS_DATA", str(bad))

        with caplog.at_level(logging.WARNING, logger="build_lens.snapshot_store"):
            store = get_default_store()

        assert store.current() is None
        assert "Failed to load snapshot" in caplog.text

    def test_singleton_until_reset(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        store = get_default_store()
        assert get_default_store() is store

        reset_default_store()
        assert get_default_store() is not store
