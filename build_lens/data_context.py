"""DataContext - one entry point to the loaded snapshot and its derived views."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .relationships import RelationshipResolver
from .session_view import SessionView
from .snapshot_store import NoDataError, get_default_store

if TYPE_CHECKING:
    from .relationships import AssetDetail, ChunkDetail, ModuleDetail, PluginDetail
    from .session_view import SessionContext
    from .snapshot_schema import AssetInfo, ChunkInfo, PackageInfo, Snapshot, TransformCall
    from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class DataContext:
    """
    Read-only views over a store's current snapshot.

    Derived state is rebuilt when the store installs a new snapshot and
    reused for as long as the same snapshot stays loaded.
    """

    def __init__(self, store: "SnapshotStore"):
        self.store = store
        self._session_view = SessionView(store)
        self._resolver = RelationshipResolver(store.current())
        self._unsubscribe = store.subscribe(self._on_snapshot)

    def _on_snapshot(self, snapshot: "Snapshot | None") -> None:
        logger.debug("Snapshot replaced, rebuilding resolver")
        self._resolver = RelationshipResolver(snapshot)

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()

    def __enter__(self) -> "DataContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def data(self) -> "Snapshot | None":
        return self.store.current()

    @property
    def loading(self) -> bool:
        return self.store.loading

    @property
    def session(self) -> "SessionContext | None":
        """Session summary, or None while no snapshot is loaded."""
        try:
            return self._session_view.summarize()
        except NoDataError:
            return None

    @property
    def assets(self) -> list["AssetInfo"]:
        return self._resolver.assets

    @property
    def chunks(self) -> list["ChunkInfo"]:
        return self._resolver.chunks

    @property
    def packages(self) -> list["PackageInfo"]:
        return self._resolver.packages

    def get_module_info(self, module_id: str) -> "ModuleDetail | None":
        return self._resolver.module_detail(module_id)

    def get_module_transforms(self, module_id: str) -> list["TransformCall"]:
        return self._resolver.module_transforms(module_id)

    def get_asset_details(self, asset_id: str) -> "AssetDetail | None":
        return self._resolver.asset_detail(asset_id)

    def get_chunk_info(self, chunk_id: int) -> "ChunkDetail | None":
        return self._resolver.chunk_info(chunk_id)

    def get_package_details(self, package_id: str) -> "PackageInfo | None":
        return self._resolver.package_detail(package_id)

    def get_plugin_details(self, plugin_id: int) -> "PluginDetail | None":
        return self._resolver.plugin_detail(plugin_id)


def use_data(store: "SnapshotStore | None" = None) -> DataContext:
    """Get a DataContext over the given store, or the process-wide one."""
    return DataContext(store if store is not None else get_default_store())
