from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Mapping, Optional, TypeVar

from ..errors import ProjectsMCPError, error_kind
from ..graphql_client import GraphQLClient
from ..params import Arguments
from ..toolspec import ToolSpec

P = TypeVar("P")

GetClientFn = Callable[[], GraphQLClient]
TranslationHelperFunc = Callable[[str, str], str]

# Listing queries fetch one page and never follow cursors
PAGE_SIZE = 100


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False
    error_kind: Optional[str] = None

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        return cls(text=json.dumps(data, ensure_ascii=False, separators=(",", ":")))

    @classmethod
    def failure(cls, exc: BaseException) -> "ToolResult":
        return cls(text=str(exc), is_error=True, error_kind=error_kind(exc))

    def json(self) -> Any:
        return json.loads(self.text)


@dataclass(frozen=True)
class ProjectTool(Generic[P]):
    """
    One tool: its descriptor plus the parse and execute steps.

    ``parse`` turns the raw parameter bag into the operation's parameter
    record and may raise ``ValidationError``. ``execute`` performs the
    lookup/mutation round trips and returns the data to serialize. Taxonomy
    errors from either step become a failure result; anything else propagates
    to the dispatcher.
    """

    spec: ToolSpec
    get_client: GetClientFn
    parse: Callable[[Arguments], P]
    execute: Callable[[GraphQLClient, P], Awaitable[Dict[str, Any]]]

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def read_only(self) -> bool:
        return self.spec.read_only

    async def __call__(self, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        try:
            params = self.parse(Arguments(arguments))
            data = await self.execute(self.get_client(), params)
        except ProjectsMCPError as exc:
            return ToolResult.failure(exc)
        return ToolResult.success(data)


def with_truncation_flag(data: Dict[str, Any], nodes: Any) -> Dict[str, Any]:
    """Mark a single-page listing that may have more records upstream."""
    count = len(nodes) if isinstance(nodes, list) else 0
    return {**data, "possiblyTruncated": count >= PAGE_SIZE}
