#!/usr/bin/env python3
"""
Tool schema snapshots: check for drift or regenerate.

    python scripts/update_toolsnaps.py           # rewrite all snapshots
    python scripts/update_toolsnaps.py --check   # fail on drift, write nothing
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from projects_mcp.toolsnaps import DEFAULT_SNAP_DIR, check_snapshot, snap_path, write_snapshot
from projects_mcp.tools import all_tools
from projects_mcp.translations import null_translation_helper


def _no_client():
    raise RuntimeError("snapshot generation never calls GitHub")


def main() -> None:
    parser = argparse.ArgumentParser(description="Regenerate or check tool schema snapshots")
    parser.add_argument(
        "--snap-dir",
        type=Path,
        default=DEFAULT_SNAP_DIR,
        help="Directory holding <tool>.snap files",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only compare against the committed snapshots",
    )
    args = parser.parse_args()

    tools = all_tools(_no_client, null_translation_helper)
    errors = []
    for tool in tools:
        if args.check:
            if not snap_path(args.snap_dir, tool.name).exists():
                errors.append(f"missing snapshot for '{tool.name}'")
                continue
            ok, message = check_snapshot(tool.spec, args.snap_dir)
            if not ok:
                errors.append(message)
        else:
            path = write_snapshot(tool.spec, args.snap_dir)
            print(f"✓ {path}")

    if errors:
        print("✗ Tool snapshot check failed:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)

    print(f"\n✓ {len(tools)} tool snapshots {'match' if args.check else 'written'}")


if __name__ == "__main__":
    main()
