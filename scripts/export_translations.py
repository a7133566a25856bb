#!/usr/bin/env python3
"""
Dump every translatable tool string as YAML.

The output can be pasted under ``translations:`` in config/server.yaml, or
turned into PROJECTS_MCP_<KEY> environment variables.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml

from projects_mcp.config import config_path, load_config
from projects_mcp.tools import all_tools
from projects_mcp.translations import TranslationHelper


def _no_client():
    raise RuntimeError("exporting translations never calls GitHub")


def main() -> None:
    parser = argparse.ArgumentParser(description="Export tool titles and descriptions as YAML")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="server.yaml whose translations are applied (default: PROJECTS_MCP_CONFIG or config/server.yaml)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write to this file instead of stdout",
    )
    args = parser.parse_args()

    config = load_config(args.config or config_path())
    helper = TranslationHelper(config.get("translations", {}) or {})
    all_tools(_no_client, helper)

    text = yaml.safe_dump(helper.dump(), sort_keys=True, allow_unicode=True, default_flow_style=False)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"✓ Wrote {len(helper.dump())} keys to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)


if __name__ == "__main__":
    main()
