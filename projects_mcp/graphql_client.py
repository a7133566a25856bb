from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .errors import RemoteOperationError

logger = logging.getLogger("projects_mcp.graphql")

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def input_variables(record: Any) -> Any:
    """
    Convert an input record into GraphQL wire variables.

    Dataclass fields become camelCase keys; ``None`` fields are dropped so an
    unset optional never reaches the remote side. Nested records and lists
    are converted recursively.
    """
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(record):
            value = getattr(record, f.name)
            if value is None:
                continue
            out[_camel(f.name)] = input_variables(value)
        return out
    if isinstance(record, Mapping):
        return {k: input_variables(v) for k, v in record.items() if v is not None}
    if isinstance(record, (list, tuple)):
        return [input_variables(v) for v in record]
    return record


def create_http_client(http_limits: Optional[Mapping[str, Any]] = None) -> httpx.AsyncClient:
    limits = http_limits or {}
    # Redirects are not expected from the GraphQL endpoint
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=int(limits.get("max_connections", 100)),
            max_keepalive_connections=int(limits.get("max_keepalive_connections", 20)),
        ),
        timeout=httpx.Timeout(
            connect=float(limits.get("connect_timeout", 5.0)),
            read=float(limits.get("read_timeout", 30.0)),
            write=float(limits.get("write_timeout", 10.0)),
            pool=float(limits.get("pool_timeout", 5.0)),
        ),
        follow_redirects=False,
    )


def _error_messages(errors: List[Any]) -> str:
    messages = []
    for err in errors:
        if isinstance(err, Mapping):
            messages.append(str(err.get("message", "Unknown error")))
        else:
            messages.append(str(err))
    return "; ".join(messages)


class GraphQLClient:
    """Executes single GraphQL documents against one endpoint. No retries."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str = DEFAULT_GRAPHQL_URL,
        token: str = "",
        user_agent: str = "projects-mcp",
    ) -> None:
        self.http_client = http_client
        self.url = url
        self.token = token.strip()
        self.user_agent = user_agent

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def execute(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        allow_partial: bool = False,
    ) -> Dict[str, Any]:
        """
        Post one document and return its ``data`` mapping.

        With ``allow_partial`` a response carrying both ``data`` and ``errors``
        is accepted; the caller decides whether the fields it needs are usable.
        """
        payload: Dict[str, Any] = {"query": document, "variables": variables or {}}
        try:
            response = await self.http_client.post(self.url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            raise RemoteOperationError(str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            raise RemoteOperationError(
                f"non-200 OK status code: {response.status_code} {response.reason_phrase} "
                f"body: {response.text!r}",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteOperationError(f"failed to decode GraphQL response: {exc}") from exc
        if not isinstance(body, dict):
            raise RemoteOperationError("GraphQL response root must be an object")

        data = body.get("data")
        errors = body.get("errors") or []
        if errors:
            message = _error_messages(errors)
            if not (allow_partial and data):
                raise RemoteOperationError(message)
            logger.debug("Accepting partial GraphQL response: %s", message)
        if not isinstance(data, dict):
            raise RemoteOperationError("GraphQL response contained no data")
        return data

    async def query(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        allow_partial: bool = False,
    ) -> Dict[str, Any]:
        return await self.execute(document, variables, allow_partial=allow_partial)

    async def mutate(self, document: str, input_record: Any) -> Dict[str, Any]:
        """Run a mutation whose only variable is ``$input``."""
        return await self.execute(document, {"input": input_variables(input_record)})
