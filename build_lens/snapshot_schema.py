"""
Snapshot schema models for build-lens.

Pydantic models for the serialized build snapshot consumed from the
bundler's data export. Unknown keys are preserved so the export shape is
accepted verbatim; every optional field gets its zero-value default here
and nowhere else.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field

_RECORD_CONFIG = {
    "extra": "allow",
    "frozen": True,
}

# The exporter writes null for some absent values
_EMPTY_IF_NULL = BeforeValidator(lambda v: [] if v is None else v)
_ZERO_IF_NULL = BeforeValidator(lambda v: 0 if v is None else v)


class PluginDeclaration(BaseModel):
    """A plugin registered with the bundler for this session."""

    plugin_id: int
    name: str = ""

    model_config = _RECORD_CONFIG


class SessionMeta(BaseModel):
    """Session metadata (cwd, inputs, declared plugins, ...)."""

    plugins: Annotated[list[PluginDeclaration], _EMPTY_IF_NULL] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


class ModuleImport(BaseModel):
    """An import statement of a module."""

    id: str | None = None
    kind: str | None = None
    module_request: str | None = None

    model_config = _RECORD_CONFIG


class PluginHookCall(BaseModel):
    """One recorded plugin hook invocation against a module."""

    plugin_id: int
    plugin_name: str = ""
    duration: float | None = None

    model_config = _RECORD_CONFIG


class ResolveIdCall(PluginHookCall):
    """A `resolveId` hook call."""


class LoadCall(PluginHookCall):
    """A `load` hook call."""


class TransformCall(PluginHookCall):
    """
    A `transform` hook call.

    Diff counters are omitted by the exporter when the transform left the
    code unchanged.
    """

    diff_added: Annotated[int, _ZERO_IF_NULL] = 0
    diff_removed: Annotated[int, _ZERO_IF_NULL] = 0


class ModuleBuildMetrics(BaseModel):
    """Per-module plugin calls, in the order they were recorded."""

    resolve_ids: Annotated[list[ResolveIdCall], _EMPTY_IF_NULL] = Field(default_factory=list)
    loads: Annotated[list[LoadCall], _EMPTY_IF_NULL] = Field(default_factory=list)
    transforms: Annotated[list[TransformCall], _EMPTY_IF_NULL] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


class ModuleRecord(BaseModel):
    """A source module participating in the import graph."""

    id: str
    imports: Annotated[list[ModuleImport], _EMPTY_IF_NULL] = Field(default_factory=list)
    importers: Annotated[list[str], _EMPTY_IF_NULL] = Field(default_factory=list)
    build_metrics: ModuleBuildMetrics | None = None

    model_config = _RECORD_CONFIG


class ChunkImport(BaseModel):
    """Reference from a chunk to a chunk it imports."""

    chunk_id: int

    model_config = _RECORD_CONFIG


class ChunkInfo(BaseModel):
    """A group of modules emitted together."""

    chunk_id: int
    modules: Annotated[list[str], _EMPTY_IF_NULL] = Field(default_factory=list)
    imports: Annotated[list[ChunkImport], _EMPTY_IF_NULL] = Field(default_factory=list)
    type: Literal["chunk"] = "chunk"

    model_config = _RECORD_CONFIG


class AssetInfo(BaseModel):
    """An emitted output file, optionally produced by a chunk."""

    filename: str
    chunk_id: int | None = None
    type: Literal["asset"] = "asset"

    model_config = _RECORD_CONFIG


class PackageInfo(BaseModel):
    """A resolved dependency."""

    name: str
    version: str

    model_config = _RECORD_CONFIG

    @property
    def key(self) -> str:
        """Composite lookup key, `name@version`."""
        return f"{self.name}@{self.version}"


class PluginCall(BaseModel):
    """
    A call recorded in a plugin's metrics.

    `type` is one of "resolve", "load" or "transform" for calls the
    presentation layer knows about; anything else is carried through.
    """

    type: str = ""

    model_config = _RECORD_CONFIG


class PluginBuildMetrics(BaseModel):
    """All calls recorded for one plugin."""

    plugin_id: int
    plugin_name: str = ""
    calls: Annotated[list[PluginCall], _EMPTY_IF_NULL] = Field(default_factory=list)

    model_config = _RECORD_CONFIG


class Snapshot(BaseModel):
    """
    One immutable capture of a completed build session.

    This is the root of the data export. It is replaced wholesale when a
    new build is loaded, never patched.
    """

    meta: SessionMeta = Field(default_factory=SessionMeta)
    modules: Annotated[list[ModuleRecord], _EMPTY_IF_NULL] = Field(default_factory=list)
    build_duration: Annotated[int | float, _ZERO_IF_NULL] = 0
    assets: Annotated[list[AssetInfo], _EMPTY_IF_NULL] = Field(default_factory=list)
    chunks: Annotated[list[ChunkInfo], _EMPTY_IF_NULL] = Field(default_factory=list)
    packages: Annotated[list[PackageInfo], _EMPTY_IF_NULL] = Field(default_factory=list)
    plugin_build_metrics: dict[str, PluginBuildMetrics] | None = None

    model_config = _RECORD_CONFIG

    @classmethod
    def from_data(cls, data: "Snapshot | dict[str, Any]") -> "Snapshot":
        """Validate a raw export mapping, passing snapshots through."""
        if isinstance(data, cls):
            return data
        return cls.model_validate(data)


__all__ = [
    "PluginDeclaration",
    "SessionMeta",
    "ModuleImport",
    "PluginHookCall",
    "ResolveIdCall",
    "LoadCall",
    "TransformCall",
    "ModuleBuildMetrics",
    "ModuleRecord",
    "ChunkImport",
    "ChunkInfo",
    "AssetInfo",
    "PackageInfo",
    "PluginCall",
    "PluginBuildMetrics",
    "Snapshot",
]
