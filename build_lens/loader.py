"""Snapshot loading and delivery for the presentation layer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .config import LensConfig
from .snapshot_schema import Snapshot

if TYPE_CHECKING:
    from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class SnapshotLoadError(Exception):
    """A snapshot file could not be read or did not match the export shape."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


def load_snapshot_file(path: Path | str) -> Snapshot:
    """
    Read a JSON snapshot written by the data export.

    Raises:
        SnapshotLoadError: unreadable file, invalid JSON or unexpected shape
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SnapshotLoadError(path, f"cannot read file ({e.strerror or e})") from e
    except json.JSONDecodeError as e:
        raise SnapshotLoadError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    except UnicodeDecodeError as e:
        raise SnapshotLoadError(path, f"not UTF-8 (byte {e.start})") from e

    try:
        snapshot = Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(path, f"unexpected snapshot shape ({e.error_count()} errors)") from e

    logger.debug(f"Read snapshot from {path}")
    return snapshot


def load_into(store: "SnapshotStore", path: Path | str) -> Snapshot:
    """Load a snapshot file into a store, flagging the store while loading."""
    store.set_loading(True)
    try:
        return store.load(load_snapshot_file(path))
    finally:
        store.set_loading(False)


def render_data_script(source: Snapshot | Path | str, global_name: str | None = None) -> str:
    """
    Render the script that hands the snapshot to the presentation layer.

    The page includes it before the UI boots, e.g.
    `window.__data = {...};`

    Args:
        source: A Snapshot, or the path of a snapshot file
        global_name: Name of the window global to assign (default: from LensConfig)
    """
    if global_name is None:
        global_name = LensConfig.load().global_name
    snapshot = source if isinstance(source, Snapshot) else load_snapshot_file(source)
    payload = snapshot.model_dump_json(exclude_unset=True)
    return f"window.{global_name} = {payload};"


__all__ = [
    "SnapshotLoadError",
    "load_snapshot_file",
    "load_into",
    "render_data_script",
]
