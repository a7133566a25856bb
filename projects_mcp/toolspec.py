"""
Tool descriptors.

A ``ToolSpec`` is the declared shape of one tool: its name, description,
annotations and ordered parameters. It is the single source for the MCP
``Tool`` listing and for the committed schema snapshots.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from mcp import types

STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"


@dataclass(frozen=True)
class ParamSpec:
    name: str
    type: str
    description: str
    required: bool = False
    enum: Optional[Tuple[str, ...]] = None

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        return schema


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    title: str
    read_only: bool
    params: Tuple[ParamSpec, ...] = field(default_factory=tuple)

    def input_schema(self) -> Dict[str, Any]:
        properties = {p.name: p.json_schema() for p in self.params}
        required: List[str] = [p.name for p in self.params if p.required]
        return {"type": "object", "properties": properties, "required": required}

    def annotations(self) -> Dict[str, Any]:
        return {"title": self.title, "readOnlyHint": self.read_only}

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
            annotations=types.ToolAnnotations(title=self.title, readOnlyHint=self.read_only),
        )

    def snapshot(self) -> Dict[str, Any]:
        """Plain-JSON rendering compared against ``tests/__toolsnaps__``."""
        return {
            "name": self.name,
            "description": self.description,
            "annotations": self.annotations(),
            "inputSchema": self.input_schema(),
        }


def string_param(name: str, description: str, required: bool = False, enum: Optional[Tuple[str, ...]] = None) -> ParamSpec:
    return ParamSpec(name=name, type=STRING, description=description, required=required, enum=enum)


def number_param(name: str, description: str, required: bool = False) -> ParamSpec:
    return ParamSpec(name=name, type=NUMBER, description=description, required=required)


def bool_param(name: str, description: str, required: bool = False) -> ParamSpec:
    return ParamSpec(name=name, type=BOOLEAN, description=description, required=required)
