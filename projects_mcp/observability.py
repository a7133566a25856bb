from __future__ import annotations

import json
import os
import threading
import time
from collections import Counter
from typing import Any, Dict, Iterable, Optional


class AuditLogger:
    """Appends one JSON line per tool call. Argument values are never written."""

    def __init__(self, path: str = "logs/audit.log") -> None:
        self._path = path
        directory = os.path.dirname(path) or "."
        os.makedirs(directory, exist_ok=True)
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    def log_call(
        self,
        *,
        tool: str,
        status: str,
        duration_ms: float,
        error_kind: Optional[str] = None,
        correlation_id: Optional[str] = None,
        argument_keys: Optional[Iterable[str]] = None,
    ) -> None:
        entry: Dict[str, Any] = {
            "ts": time.time(),
            "tool": tool,
            "status": status,
            "duration_ms": float(duration_ms),
            "error_kind": error_kind,
            "correlation_id": correlation_id,
            "argument_keys": sorted(argument_keys or []),
        }
        line = json.dumps(entry, ensure_ascii=False, separators=(",", ":"))
        with self._lock:
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write(line + "\n")


class InMemoryMetrics:
    """Per-tool call and error counters plus summed latency, rendered on /metrics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Counter[str] = Counter()
        self._errors: Counter[str] = Counter()
        self._latency_ms: Counter[str] = Counter()

    def record(self, tool: str, duration_ms: float, error: bool) -> None:
        with self._lock:
            self._calls[tool] += 1
            self._latency_ms[tool] += float(duration_ms)
            if error:
                self._errors[tool] += 1

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                tool: {
                    "calls": calls,
                    "errors": self._errors[tool],
                    "avg_latency_ms": self._latency_ms[tool] / calls,
                }
                for tool, calls in sorted(self._calls.items())
            }
