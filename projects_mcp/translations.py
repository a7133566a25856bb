from __future__ import annotations

import os
import threading
from typing import Dict, Mapping, Optional

ENV_PREFIX = "PROJECTS_MCP_"


class TranslationHelper:
    """
    Looks up human-readable tool strings by key.

    Resolution order: ``PROJECTS_MCP_<KEY>`` environment variable, then the
    ``translations`` mapping from the config file, then the built-in default.
    Every key requested is remembered so the full table can be exported.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._overrides = {str(k).upper(): str(v) for k, v in (overrides or {}).items()}
        self._environ = environ if environ is not None else os.environ
        self._lock = threading.Lock()
        self._seen: Dict[str, str] = {}

    def __call__(self, key: str, default: str) -> str:
        key = key.upper()
        value = self._environ.get(ENV_PREFIX + key)
        if not value:
            value = self._overrides.get(key, default)
        with self._lock:
            self._seen[key] = value
        return value

    def dump(self) -> Dict[str, str]:
        """Every key looked up so far with the value that was returned."""
        with self._lock:
            return dict(sorted(self._seen.items()))


def null_translation_helper(key: str, default: str) -> str:
    return default
