"""
Parameter extraction for tool invocations.

Tool calls arrive as an untyped mapping of argument name to JSON value. The
helpers here coerce single entries into Python values and raise
``ValidationError`` for anything missing or of the wrong type, before any
network call is made.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from .errors import ValidationError

_JSON_TYPE_NAMES = {
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
    type(None): "null",
}


def _type_name(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


class Arguments:
    """Read-only view over one invocation's parameter bag."""

    def __init__(self, raw: Optional[Mapping[str, Any]] = None) -> None:
        self._raw: Dict[str, Any] = dict(raw or {})

    def __contains__(self, name: object) -> bool:
        return name in self._raw

    def has(self, name: str) -> bool:
        """True if the caller supplied the key, whatever its value."""
        return name in self._raw

    def keys(self) -> Iterable[str]:
        return self._raw.keys()

    def _typed(self, name: str, expected: Any, type_label: str) -> Any:
        value = self._raw[name]
        # bool is a subclass of int; never accept it where a number is expected
        if expected is not bool and isinstance(value, bool):
            raise ValidationError(f"parameter {name} is not of type {type_label}, is boolean")
        if not isinstance(value, expected):
            raise ValidationError(f"parameter {name} is not of type {type_label}, is {_type_name(value)}")
        return value

    def required_str(self, name: str) -> str:
        if name not in self._raw:
            raise ValidationError(f"missing required parameter: {name}")
        value = self._typed(name, str, "string")
        if value == "":
            raise ValidationError(f"missing required parameter: {name}")
        return value

    def optional_str(self, name: str, default: str = "") -> str:
        if name not in self._raw:
            return default
        return self._typed(name, str, "string")

    def optional_bool(self, name: str, default: bool = False) -> bool:
        if name not in self._raw:
            return default
        return self._typed(name, bool, "boolean")

    def optional_flag(self, name: str) -> Optional[bool]:
        """
        Tri-state boolean: ``None`` when the key is absent, otherwise the
        supplied value (``False`` included).
        """
        if name not in self._raw:
            return None
        return self._typed(name, bool, "boolean")

    def required_int(self, name: str) -> int:
        if name not in self._raw:
            raise ValidationError(f"missing required parameter: {name}")
        value = self._typed(name, (int, float), "number")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValidationError(f"parameter {name} must be an integer, got {value}")
            value = int(value)
        if value == 0:
            raise ValidationError(f"missing required parameter: {name}")
        return value

    def optional_enum(self, name: str, choices: Iterable[str], default: str) -> str:
        """Optional string restricted to ``choices``; empty string means default."""
        value = self.optional_str(name)
        if value == "":
            return default
        allowed = list(choices)
        if value not in allowed:
            raise ValidationError(
                f"parameter {name} must be one of {', '.join(allowed)}, got {value!r}"
            )
        return value
