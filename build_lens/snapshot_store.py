"""SnapshotStore - holder of the one build snapshot currently loaded."""

from __future__ import annotations

import inspect
import logging
import weakref
from collections.abc import Callable
from typing import Any

from .snapshot_schema import Snapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[["Snapshot | None"], None]


class NoDataError(LookupError):
    """No snapshot is loaded."""


class SnapshotStore:
    """
    Holds the current snapshot, or None.

    The snapshot is replaced wholesale on load. Subscribers are told
    about every new reference so they can drop anything derived from
    the previous one. The loading flag belongs to the external loader;
    the store only exposes it.
    """

    def __init__(self, snapshot: "Snapshot | dict[str, Any] | None" = None):
        self._snapshot: Snapshot | None = Snapshot.from_data(snapshot) if snapshot is not None else None
        self._loading = False
        self._listeners: list[Callable[[], SnapshotListener | None]] = []

    @property
    def loading(self) -> bool:
        return self._loading

    def set_loading(self, loading: bool) -> None:
        self._loading = loading

    def current(self) -> Snapshot | None:
        """Return the active snapshot, or None if nothing is loaded."""
        return self._snapshot

    def load(self, snapshot: "Snapshot | dict[str, Any]") -> Snapshot:
        """
        Install a new snapshot, replacing any previous one.

        Args:
            snapshot: A Snapshot, or a raw export mapping to validate

        Returns:
            The installed Snapshot
        """
        self._snapshot = Snapshot.from_data(snapshot)
        logger.info(
            f"Loaded snapshot: {len(self._snapshot.modules)} modules, "
            f"{len(self._snapshot.chunks)} chunks, {len(self._snapshot.assets)} assets"
        )
        self._notify()
        return self._snapshot

    def clear(self) -> None:
        """Discard the current snapshot."""
        self._snapshot = None
        self._notify()

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a callback for snapshot replacement.

        Bound methods are held weakly, so an object that subscribed one of
        its methods drops out once it is garbage collected.

        Returns:
            A function that removes the callback
        """
        if inspect.ismethod(listener):
            ref = weakref.WeakMethod(listener, self._discard)
        else:
            def ref() -> SnapshotListener:
                return listener
        self._listeners.append(ref)

        def unsubscribe() -> None:
            self._discard(ref)

        return unsubscribe

    def _discard(self, ref: Callable[[], "SnapshotListener | None"]) -> None:
        self._listeners = [r for r in self._listeners if r is not ref]

    def _notify(self) -> None:
        for ref in list(self._listeners):
            listener = ref()
            if listener is not None:
                listener(self._snapshot)


_default_store: SnapshotStore | None = None


def get_default_store() -> SnapshotStore:
    """
    Get the process-wide store.

    Created on first use and seeded from the configured snapshot file.
    A missing or unreadable file leaves the store empty.
    """
    global _default_store
    if _default_store is None:
        from .config import LensConfig
        from .loader import SnapshotLoadError, load_into

        _default_store = SnapshotStore()
        data_path = LensConfig.load().resolved_data_path
        if data_path.exists():
            try:
                load_into(_default_store, data_path)
            except SnapshotLoadError as e:
                logger.warning(f"Failed to load snapshot: {e}")
        else:
            logger.warning(f"No snapshot at {data_path}")
    return _default_store


def reset_default_store() -> None:
    """Forget the process-wide store."""
    global _default_store
    _default_store = None


__all__ = [
    "NoDataError",
    "SnapshotListener",
    "SnapshotStore",
    "get_default_store",
    "reset_default_store",
]
