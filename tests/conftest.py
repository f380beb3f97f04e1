"""
Shared fixtures: a small build snapshot as exported by the bundler.

Chunk graph:
    chunk 0 (index.js, index.js.map) imports chunks 1 and 2
    chunk 1 (lazy.js) imports chunk 3, which does not exist
    chunk 2 produced no asset
    chunk 4 (shared.js) imports chunk 1
Assets without a chunk: index.css. Asset with a dangling chunk: orphan.js.
"""

import json
from pathlib import Path
from typing import Any

import pytest

from build_lens.snapshot_schema import Snapshot
from build_lens.snapshot_store import reset_default_store


def make_snapshot_data() -> dict[str, Any]:
    """Helper to build the raw export mapping."""
    return {
        "meta": {
            "cwd": "/repo",
            "plugins": [
                {"plugin_id": 0, "name": "builtin:resolve"},
                {"plugin_id": 1, "name": "vite:vue"},
                {"plugin_id": 5, "name": "unused-plugin"},
            ],
        },
        "modules": [
            {
                "id": "src/main.ts",
                "imports": [
                    {"id": "src/util.ts", "kind": "import-statement", "module_request": "./util"},
                ],
                "importers": [],
                "build_metrics": {
                    "resolve_ids": [
                        {"plugin_id": 2, "plugin_name": "alias"},
                        {"plugin_id": 1, "plugin_name": "vite:vue", "duration": 5},
                        {"plugin_id": 1, "plugin_name": "vite:vue", "duration": 7},
                    ],
                    "loads": [
                        {"plugin_id": 3, "plugin_name": "fs"},
                        {"plugin_id": 0, "plugin_name": "builtin:resolve"},
                    ],
                    "transforms": [
                        {"plugin_id": 2, "plugin_name": "alias", "diff_added": 3, "diff_removed": 1},
                        {"plugin_id": 1, "plugin_name": "vite:vue"},
                    ],
                },
            },
            {"id": "src/util.ts", "importers": ["src/main.ts"]},
            {"id": "src/lazy.vue"},
        ],
        "build_duration": 1234.5,
        "chunks": [
            {"chunk_id": 0, "modules": ["src/main.ts", "src/util.ts"], "imports": [{"chunk_id": 1}, {"chunk_id": 2}]},
            {"chunk_id": 1, "modules": ["src/lazy.vue"], "imports": [{"chunk_id": 3}]},
            {"chunk_id": 2, "modules": ["src/util.ts"], "imports": []},
            {"chunk_id": 4, "modules": [], "imports": [{"chunk_id": 1}]},
        ],
        "assets": [
            {"filename": "index.js", "chunk_id": 0, "size": 120},
            {"filename": "lazy.js", "chunk_id": 1},
            {"filename": "index.css"},
            {"filename": "shared.js", "chunk_id": 4},
            {"filename": "index.js.map", "chunk_id": 0},
            {"filename": "orphan.js", "chunk_id": 99},
        ],
        "packages": [
            {"name": "left-pad", "version": "1.3.0", "dir": "node_modules/left-pad"},
            {"name": "vue", "version": "3.4.0"},
        ],
        "plugin_build_metrics": {
            "1": {
                "plugin_id": 1,
                "plugin_name": "vite:vue",
                "calls": [
                    {"type": "resolve", "module": "src/main.ts"},
                    {"type": "transform", "module": "src/lazy.vue"},
                    {"type": "load", "module": "src/lazy.vue"},
                    {"type": "resolve", "module": "src/lazy.vue"},
                    {"type": "render", "module": "src/main.ts"},
                ],
            },
        },
    }


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    return make_snapshot_data()


@pytest.fixture
def snapshot(snapshot_data) -> Snapshot:
    return Snapshot.model_validate(snapshot_data)


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data) -> Path:
    path = tmp_path / ".data" / "sample.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(snapshot_data))
    return path


@pytest.fixture(autouse=True)
def isolated_default_store(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep the process-wide store and user config out of every test."""
    monkeypatch.setattr("build_lens.config.CONFIG_PATH", tmp_path / "no-config.json")
    monkeypatch.delenv("BUILD_LENS_DATA", raising=False)
    reset_default_store()
    yield
    reset_default_store()
