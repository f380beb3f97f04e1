"""Session summary derived from the loaded snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .file_types import get_file_type_from_name
from .snapshot_store import NoDataError

if TYPE_CHECKING:
    from .snapshot_schema import ModuleBuildMetrics, ModuleImport, SessionMeta, Snapshot
    from .snapshot_store import SnapshotStore


@dataclass(frozen=True)
class ModuleListItem:
    """A row of the module list."""

    id: str
    file_type: str
    imports: list["ModuleImport"]
    importers: list[str]
    build_metrics: "ModuleBuildMetrics | None"


@dataclass(frozen=True)
class SessionContext:
    """Top-level view of a build session."""

    meta: "SessionMeta"
    modules_list: list[ModuleListItem]
    build_duration: int | float


def summarize(snapshot: "Snapshot | None") -> SessionContext:
    """
    Summarize a snapshot for the session overview.

    Raises:
        NoDataError: no snapshot is loaded
    """
    if snapshot is None:
        raise NoDataError("No data available")

    return SessionContext(
        meta=snapshot.meta,
        modules_list=[
            ModuleListItem(
                id=mod.id,
                file_type=get_file_type_from_name(mod.id).name,
                imports=list(mod.imports),
                importers=list(mod.importers),
                build_metrics=mod.build_metrics,
            )
            for mod in snapshot.modules
        ],
        build_duration=snapshot.build_duration,
    )


class SessionView:
    """
    Memoized session summary over a store.

    The summary is recomputed only when the store holds a different
    snapshot reference than the one it was computed from.
    """

    def __init__(self, store: "SnapshotStore"):
        self._store = store
        self._source: Snapshot | None = None
        self._context: SessionContext | None = None

    def summarize(self) -> SessionContext:
        """Summary of the store's current snapshot. Raises NoDataError if empty."""
        snapshot = self._store.current()
        if self._context is None or snapshot is not self._source:
            self._context = summarize(snapshot)
            self._source = snapshot
        return self._context
