from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .graphql_client import DEFAULT_GRAPHQL_URL

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "server.yaml"

TRANSPORTS = ("stdio", "http")


def load_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"MCP server config not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    return Path(env.get("PROJECTS_MCP_CONFIG", str(DEFAULT_CONFIG_PATH)))


def is_production_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True if ENVIRONMENT, APP_ENV or NODE_ENV is "production" (case-insensitive)."""
    env = os.environ if environ is None else environ
    for name in ("ENVIRONMENT", "APP_ENV", "NODE_ENV"):
        if env.get(name, "").strip().lower() == "production":
            return True
    return False


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    name: str = "github-projects-mcp"
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    read_only: bool = False
    graphql_url: str = DEFAULT_GRAPHQL_URL
    token: str = ""
    http_limits: Dict[str, Any] = field(default_factory=dict)
    audit_log: Optional[str] = "logs/audit.log"
    server_token: str = ""
    translations: Dict[str, str] = field(default_factory=dict)


def load_settings(config: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Merge the YAML config with environment overrides (env wins)."""
    env = os.environ if environ is None else environ
    server_cfg = config.get("server", {}) or {}
    github_cfg = config.get("github", {}) or {}
    observability_cfg = config.get("observability", {}) or {}

    transport = str(env.get("PROJECTS_MCP_TRANSPORT", server_cfg.get("transport", "stdio"))).strip().lower()
    if transport not in TRANSPORTS:
        raise ValueError(f"Unsupported transport {transport!r} (expected one of {', '.join(TRANSPORTS)})")

    read_only = server_cfg.get("read_only", False)
    if "PROJECTS_MCP_READ_ONLY" in env:
        read_only = env["PROJECTS_MCP_READ_ONLY"]

    audit_log = env.get("PROJECTS_MCP_AUDIT_LOG", observability_cfg.get("audit_log", "logs/audit.log"))

    return Settings(
        name=str(server_cfg.get("name", "github-projects-mcp")),
        transport=transport,
        host=str(env.get("MCP_SERVER_HOST", server_cfg.get("host", "127.0.0.1"))),
        port=int(env.get("MCP_SERVER_PORT", server_cfg.get("port", 9000))),
        log_level=str(env.get("PROJECTS_MCP_LOG_LEVEL", server_cfg.get("log_level", "INFO"))).upper(),
        read_only=_flag(read_only),
        graphql_url=str(env.get("GITHUB_GRAPHQL_URL", github_cfg.get("graphql_url", DEFAULT_GRAPHQL_URL))),
        token=(env.get("GITHUB_PERSONAL_ACCESS_TOKEN") or env.get("GITHUB_TOKEN") or "").strip(),
        http_limits=dict(github_cfg.get("http_limits", {}) or {}),
        audit_log=audit_log or None,
        server_token=env.get("MCP_SERVER_TOKEN", "").strip(),
        translations={str(k): str(v) for k, v in (config.get("translations", {}) or {}).items()},
    )
