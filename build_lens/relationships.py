"""
RelationshipResolver - cross-references between snapshot entities.

The snapshot stores flat collections: chunks list the modules they
contain and the chunks they import, assets point back at the chunk that
produced them. Everything else (which chunks hold a module, which
assets import an asset) is derived here on demand by scanning those
collections. At bundler scale (hundreds to low thousands of entities)
a linear scan per lookup is instant.

Lookups never raise for a missing snapshot or an unknown id; they
return None or an empty list so callers can render "not found" states
directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .plugin_metrics import split_calls
from .snapshot_schema import ModuleBuildMetrics

if TYPE_CHECKING:
    from .snapshot_schema import (
        AssetInfo,
        ChunkInfo,
        LoadCall,
        ModuleImport,
        PackageInfo,
        PluginBuildMetrics,
        PluginCall,
        ResolveIdCall,
        Snapshot,
        TransformCall,
    )

logger = logging.getLogger(__name__)


@dataclass
class ModuleDetail:
    """A module with the chunks and assets it ended up in."""

    id: str
    imports: list["ModuleImport"]
    importers: list[str]
    chunks: list["ChunkInfo"]
    assets: list["AssetInfo"]
    build_metrics: ModuleBuildMetrics
    loads: list["LoadCall"]              # sorted by plugin_id
    resolve_ids: list["ResolveIdCall"]   # sorted by plugin_id


@dataclass
class AssetDetail:
    """An asset with its chunk and the assets it imports / is imported by."""

    asset: "AssetInfo"
    chunks: list["ChunkInfo"] = field(default_factory=list)
    importers: list["AssetInfo"] = field(default_factory=list)
    imports: list["AssetInfo"] = field(default_factory=list)


@dataclass
class ChunkDetail:
    """A chunk with the asset it produced, if any."""

    chunk: "ChunkInfo"
    asset: "AssetInfo | None" = None


@dataclass
class PluginDetail:
    """A plugin's recorded calls, also grouped by hook kind."""

    plugin_id: int
    plugin_name: str
    calls: list["PluginCall"] = field(default_factory=list)
    resolve_id_metrics: list["PluginCall"] = field(default_factory=list)
    load_metrics: list["PluginCall"] = field(default_factory=list)
    transform_metrics: list["PluginCall"] = field(default_factory=list)
    metrics: "PluginBuildMetrics | None" = None  # raw record, None if no calls were tracked


def _by_plugin_id(calls: list) -> list:
    # sorted() is stable: calls from the same plugin keep their order
    return sorted(calls, key=lambda c: c.plugin_id)


class RelationshipResolver:
    """
    Resolve related entities for one snapshot.

    The snapshot is passed in explicitly; a new snapshot needs a new
    resolver. The only cached state is the reverse chunk-import index,
    built the first time an asset's importers are requested.
    """

    def __init__(self, snapshot: "Snapshot | None"):
        self.snapshot = snapshot
        self._importers_by_chunk: dict[int, list["ChunkInfo"]] | None = None

    # -- collections ---------------------------------------------------------

    @property
    def assets(self) -> list["AssetInfo"]:
        return self.snapshot.assets if self.snapshot else []

    @property
    def chunks(self) -> list["ChunkInfo"]:
        return self.snapshot.chunks if self.snapshot else []

    @property
    def packages(self) -> list["PackageInfo"]:
        return self.snapshot.packages if self.snapshot else []

    # -- modules -------------------------------------------------------------

    def module_detail(self, module_id: str) -> ModuleDetail | None:
        """
        Get a module with its chunks, assets and sorted build metrics.

        Returns:
            ModuleDetail, or None if there is no snapshot or no such module
        """
        if self.snapshot is None:
            return None
        mod = next((m for m in self.snapshot.modules if m.id == module_id), None)
        if mod is None:
            return None

        module_chunks = [c for c in self.snapshot.chunks if module_id in c.modules]
        chunk_ids = {c.chunk_id for c in module_chunks}
        module_assets = [
            a for a in self.snapshot.assets
            if a.chunk_id is not None and a.chunk_id in chunk_ids
        ]
        build_metrics = mod.build_metrics or ModuleBuildMetrics()

        return ModuleDetail(
            id=module_id,
            imports=list(mod.imports),
            importers=list(mod.importers),
            chunks=module_chunks,
            assets=module_assets,
            build_metrics=build_metrics,
            loads=_by_plugin_id(build_metrics.loads),
            resolve_ids=_by_plugin_id(build_metrics.resolve_ids),
        )

    def module_transforms(self, module_id: str) -> list["TransformCall"]:
        """Get a module's transform calls sorted by plugin_id (empty if none)."""
        if self.snapshot is None:
            return []
        mod = next((m for m in self.snapshot.modules if m.id == module_id), None)
        if mod is None or mod.build_metrics is None:
            return []
        return _by_plugin_id(mod.build_metrics.transforms)

    # -- assets and chunks ---------------------------------------------------

    def asset_detail(self, asset_id: str) -> AssetDetail | None:
        """
        Get an asset with its chunk and its importer / imported assets.

        Importers are the assets of chunks that import this asset's chunk;
        imports are the assets of the chunks it imports. Chunks that did
        not produce an asset are left out of both lists.

        Args:
            asset_id: The asset's filename

        Returns:
            AssetDetail, or None if there is no snapshot or no such asset
        """
        if self.snapshot is None:
            return None
        asset = next((a for a in self.snapshot.assets if a.filename == asset_id), None)
        if asset is None:
            return None

        if asset.chunk_id is None:
            return AssetDetail(asset=asset)

        chunk = self._find_chunk(asset.chunk_id)
        importer_chunks = self._importer_chunks(asset.chunk_id)
        import_ids = [i.chunk_id for i in chunk.imports] if chunk else []

        return AssetDetail(
            asset=asset,
            chunks=[chunk] if chunk else [],
            importers=self._assets_of([c.chunk_id for c in importer_chunks]),
            imports=self._assets_of(import_ids),
        )

    def chunk_info(self, chunk_id: int) -> ChunkDetail | None:
        """
        Get a chunk with its asset.

        When several assets name the same chunk, only the first one is
        attached.
        """
        if self.snapshot is None:
            return None
        chunk = self._find_chunk(chunk_id)
        if chunk is None:
            return None
        return ChunkDetail(chunk=chunk, asset=self._primary_asset(chunk_id))

    # -- packages and plugins ------------------------------------------------

    def package_detail(self, package_id: str) -> "PackageInfo | None":
        """Get a package by its `name@version` key."""
        if self.snapshot is None:
            return None
        return next((p for p in self.snapshot.packages if p.key == package_id), None)

    def plugin_detail(self, plugin_id: int) -> PluginDetail | None:
        """
        Get a plugin's calls, grouped by kind.

        A plugin that was registered but has no tracked calls resolves to
        an empty record named after its declaration.

        Returns:
            PluginDetail, or None if there is no snapshot
        """
        if self.snapshot is None:
            return None

        metrics = (self.snapshot.plugin_build_metrics or {}).get(str(plugin_id))
        if metrics is None:
            declared = next(
                (p for p in self.snapshot.meta.plugins if p.plugin_id == plugin_id),
                None,
            )
            return PluginDetail(
                plugin_id=plugin_id,
                plugin_name=declared.name if declared else "",
            )

        partition = split_calls(metrics.calls)
        return PluginDetail(
            plugin_id=metrics.plugin_id,
            plugin_name=metrics.plugin_name,
            calls=metrics.calls,
            resolve_id_metrics=partition.resolve_id_metrics,
            load_metrics=partition.load_metrics,
            transform_metrics=partition.transform_metrics,
            metrics=metrics,
        )

    # -- helpers -------------------------------------------------------------

    def _find_chunk(self, chunk_id: int) -> "ChunkInfo | None":
        return next((c for c in self.snapshot.chunks if c.chunk_id == chunk_id), None)

    def _primary_asset(self, chunk_id: int) -> "AssetInfo | None":
        """First asset produced by a chunk."""
        return next((a for a in self.snapshot.assets if a.chunk_id == chunk_id), None)

    def _assets_of(self, chunk_ids: list[int]) -> list["AssetInfo"]:
        assets = []
        for chunk_id in chunk_ids:
            asset = self._primary_asset(chunk_id)
            if asset is not None:
                assets.append(asset)
        return assets

    def _importer_chunks(self, chunk_id: int) -> list["ChunkInfo"]:
        """Chunks that import the given chunk, in snapshot order."""
        if self._importers_by_chunk is None:
            self._importers_by_chunk = self._build_importer_index()
        return self._importers_by_chunk.get(chunk_id, [])

    def _build_importer_index(self) -> dict[int, list["ChunkInfo"]]:
        index: dict[int, list["ChunkInfo"]] = {}
        for chunk in self.snapshot.chunks:
            for target in {i.chunk_id for i in chunk.imports}:
                index.setdefault(target, []).append(chunk)
        logger.debug(f"Built chunk importer index: {len(index)} imported chunks")
        return index


__all__ = [
    "AssetDetail",
    "ChunkDetail",
    "ModuleDetail",
    "PluginDetail",
    "RelationshipResolver",
]
