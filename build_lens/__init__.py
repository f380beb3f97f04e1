"""build-lens: introspection views over a bundler build snapshot.

A build snapshot (modules, chunks, assets, packages and plugin call
metrics) is loaded once into a SnapshotStore; session summaries and
entity relationships are derived from it on demand.
"""

__version__ = "0.1.0"

# Data model
from .snapshot_schema import (
    AssetInfo,
    ChunkImport,
    ChunkInfo,
    LoadCall,
    ModuleBuildMetrics,
    ModuleImport,
    ModuleRecord,
    PackageInfo,
    PluginBuildMetrics,
    PluginCall,
    PluginDeclaration,
    ResolveIdCall,
    SessionMeta,
    Snapshot,
    TransformCall,
)

# Store and views
from .snapshot_store import NoDataError, SnapshotStore, get_default_store, reset_default_store
from .session_view import ModuleListItem, SessionContext, SessionView, summarize
from .relationships import AssetDetail, ChunkDetail, ModuleDetail, PluginDetail, RelationshipResolver
from .plugin_metrics import PluginCallPartition, split_calls
from .file_types import FileType, get_file_type_from_name
from .data_context import DataContext, use_data

# Loading & Config
from .loader import SnapshotLoadError, load_into, load_snapshot_file, render_data_script
from .config import LensConfig

__all__ = [
    # Data model
    "AssetInfo",
    "ChunkImport",
    "ChunkInfo",
    "LoadCall",
    "ModuleBuildMetrics",
    "ModuleImport",
    "ModuleRecord",
    "PackageInfo",
    "PluginBuildMetrics",
    "PluginCall",
    "PluginDeclaration",
    "ResolveIdCall",
    "SessionMeta",
    "Snapshot",
    "TransformCall",
    # Store and views
    "NoDataError",
    "SnapshotStore",
    "get_default_store",
    "reset_default_store",
    "ModuleListItem",
    "SessionContext",
    "SessionView",
    "summarize",
    "AssetDetail",
    "ChunkDetail",
    "ModuleDetail",
    "PluginDetail",
    "RelationshipResolver",
    "PluginCallPartition",
    "split_calls",
    "FileType",
    "get_file_type_from_name",
    "DataContext",
    "use_data",
    # Loading & Config
    "SnapshotLoadError",
    "load_into",
    "load_snapshot_file",
    "render_data_script",
    "LensConfig",
]
