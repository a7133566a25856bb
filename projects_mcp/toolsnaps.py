"""
Tool schema snapshots.

Each tool's ``ToolSpec.snapshot()`` is committed as JSON under
``tests/__toolsnaps__/<name>.snap``. A changed name, description, annotation
or parameter shows up as drift against that baseline.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .toolspec import ToolSpec

DEFAULT_SNAP_DIR = Path(__file__).resolve().parent.parent / "tests" / "__toolsnaps__"


def update_requested(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get("UPDATE_TOOLSNAPS", "").strip().lower() == "true"


def snap_path(snap_dir: Path, tool_name: str) -> Path:
    return snap_dir / f"{tool_name}.snap"


def render_snapshot(spec: ToolSpec) -> str:
    return json.dumps(spec.snapshot(), indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_snapshot(spec: ToolSpec, snap_dir: Path) -> Path:
    path = snap_path(snap_dir, spec.name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_snapshot(spec), encoding="utf-8")
    return path


def load_snapshot(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def check_snapshot(spec: ToolSpec, snap_dir: Path, update: bool = False) -> Tuple[bool, str]:
    """
    Compare ``spec`` with its committed snapshot.

    Returns:
        (ok, message). A missing snapshot, or ``update=True``, writes the
        current shape and counts as ok.
    """
    path = snap_path(snap_dir, spec.name)
    if update or not path.exists():
        write_snapshot(spec, snap_dir)
        return True, f"wrote {path.name}"

    expected = load_snapshot(path)
    actual = spec.snapshot()
    if expected == actual:
        return True, "unchanged"

    changed = sorted(k for k in set(expected) | set(actual) if expected.get(k) != actual.get(k))
    return False, (
        f"tool schema for '{spec.name}' drifted from {path.name} (changed: {', '.join(changed)}); "
        "rerun with UPDATE_TOOLSNAPS=true if the change is intended"
    )
