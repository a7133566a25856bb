from __future__ import annotations

from typing import Any, Mapping, Optional

from .errors import ResolutionError
from .graphql_client import GraphQLClient

OWNER_USER = "user"
OWNER_ORGANIZATION = "organization"
OWNER_TYPES = (OWNER_USER, OWNER_ORGANIZATION)
DEFAULT_OWNER_TYPE = OWNER_ORGANIZATION

OWNER_ID_QUERY = """
query($login: String!) {
  user(login: $login) { id }
  organization(login: $login) { id }
}
"""

REPOSITORY_ID_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) { id }
}
"""


def _node_id(data: Mapping[str, Any], key: str) -> str:
    node: Optional[Mapping[str, Any]] = data.get(key)
    if not node:
        return ""
    return str(node.get("id") or "")


async def resolve_owner_id(client: GraphQLClient, login: str, owner_type: str = DEFAULT_OWNER_TYPE) -> str:
    """
    Resolve a user or organization login to its node ID in one round trip.

    Both halves are requested together; only the half matching ``owner_type``
    is used. GitHub reports an error for the half that does not exist, so
    partial responses are accepted here.
    """
    data = await client.query(OWNER_ID_QUERY, {"login": login}, allow_partial=True)
    key = OWNER_USER if owner_type == OWNER_USER else OWNER_ORGANIZATION
    owner_id = _node_id(data, key)
    if not owner_id:
        raise ResolutionError("failed to resolve owner ID")
    return owner_id


async def resolve_repository_id(client: GraphQLClient, owner: str, name: str) -> str:
    data = await client.query(REPOSITORY_ID_QUERY, {"owner": owner, "name": name}, allow_partial=True)
    repo_id = _node_id(data, "repository")
    if not repo_id:
        raise ResolutionError(f"failed to resolve repository ID for {owner}/{name}")
    return repo_id
