from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest

repo_root = Path(__file__).parent.parent.resolve()
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from projects_mcp.graphql_client import GraphQLClient  # noqa: E402

GRAPHQL_URL = "https://api.github.test/graphql"

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class GraphQLStub:
    """
    Scripted GraphQL endpoint.

    Responses are served in the order they were queued; every request body is
    recorded so tests can assert the exact document and variables sent.
    """

    def __init__(self) -> None:
        self._queue: List[Responder] = []
        self.requests: List[httpx.Request] = []

    def respond(self, data: Any = None, errors: Optional[List[Dict[str, Any]]] = None) -> "GraphQLStub":
        body: Dict[str, Any] = {}
        if data is not None:
            body["data"] = data
        if errors is not None:
            body["errors"] = errors
        self._queue.append(httpx.Response(200, json=body))
        return self

    def respond_raw(self, responder: Responder) -> "GraphQLStub":
        self._queue.append(responder)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            return httpx.Response(500, text="unexpected GraphQL request")
        responder = self._queue.pop(0)
        if callable(responder):
            return responder(request)
        return responder

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def variables(self) -> List[Dict[str, Any]]:
        return [p["variables"] for p in self.payloads]

    @property
    def documents(self) -> List[str]:
        return [p["query"] for p in self.payloads]


@pytest.fixture
def graphql() -> GraphQLStub:
    return GraphQLStub()


@pytest.fixture
def http_client(graphql: GraphQLStub) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(graphql.handler))


@pytest.fixture
def client(http_client: httpx.AsyncClient) -> GraphQLClient:
    return GraphQLClient(http_client=http_client, url=GRAPHQL_URL, token="ghp_test", user_agent="projects-mcp/test")


@pytest.fixture
def get_client(client: GraphQLClient) -> Callable[[], GraphQLClient]:
    return lambda: client
