#!/usr/bin/env python3
"""Inspect a build snapshot from the command line.

Usage:
    python scripts/inspect_snapshot.py summary
    python scripts/inspect_snapshot.py module src/main.ts
    python scripts/inspect_snapshot.py asset assets/index.js --data .data/sample.json
    python scripts/inspect_snapshot.py plugin 3

Prints the requested view as JSON. Exits 1 when the snapshot cannot be
loaded or the id is unknown.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic_core import to_jsonable_python

# Add project root to path for build_lens imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from build_lens.config import LensConfig
from build_lens.loader import SnapshotLoadError, load_snapshot_file
from build_lens.relationships import RelationshipResolver
from build_lens.session_view import summarize

COMMANDS = ["summary", "module", "transforms", "asset", "chunk", "package", "plugin"]
NUMERIC_ID_COMMANDS = {"chunk", "plugin"}


def lookup(resolver: RelationshipResolver, command: str, entity_id: str | int | None) -> Any:
    """Run one lookup. Returns None for an unknown id.

    chunk and plugin ids are expected as ints, everything else as str.
    """
    if command == "summary":
        return summarize(resolver.snapshot)
    if command == "module":
        return resolver.module_detail(entity_id)
    if command == "transforms":
        if resolver.module_detail(entity_id) is None:
            return None
        return resolver.module_transforms(entity_id)
    if command == "asset":
        return resolver.asset_detail(entity_id)
    if command == "chunk":
        return resolver.chunk_info(entity_id)
    if command == "package":
        return resolver.package_detail(entity_id)
    if command == "plugin":
        return resolver.plugin_detail(entity_id)
    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Inspect a bundler build snapshot")
    parser.add_argument("command", choices=COMMANDS, help="View to print")
    parser.add_argument("id", nargs="?", help="Module id, asset filename, chunk id, name@version or plugin id")
    parser.add_argument(
        "--data",
        type=Path,
        help="Snapshot file (default: BUILD_LENS_DATA or data_path from ~/.build-lens/config.json)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    config = LensConfig.load()

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or config.verbose) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command != "summary" and args.id is None:
        parser.error(f"{args.command} requires an id")

    entity_id = args.id
    if args.command in NUMERIC_ID_COMMANDS:
        try:
            entity_id = int(args.id)
        except ValueError:
            print(f"Error: {args.command} id must be a number, got {args.id!r}", file=sys.stderr)
            return 1

    try:
        snapshot = load_snapshot_file(args.data or config.resolved_data_path)
    except SnapshotLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = lookup(RelationshipResolver(snapshot), args.command, entity_id)

    if result is None:
        print(f"Not found: {args.command} {args.id}", file=sys.stderr)
        return 1

    print(json.dumps(to_jsonable_python(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
