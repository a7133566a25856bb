"""
Board-level tools: list, introspect, create, update and delete Projects (v2).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..graphql_client import GraphQLClient
from ..inputs import CreateProjectV2Input, DeleteProjectV2Input, UpdateProjectV2Input
from ..owners import DEFAULT_OWNER_TYPE, OWNER_TYPES, OWNER_USER, OWNER_ORGANIZATION, resolve_owner_id
from ..params import Arguments
from ..toolspec import ToolSpec, bool_param, number_param, string_param
from .base import PAGE_SIZE, GetClientFn, ProjectTool, TranslationHelperFunc, with_truncation_flag


@dataclass(frozen=True)
class OwnerParams:
    owner: str
    owner_type: str


@dataclass(frozen=True)
class ProjectNumberParams:
    owner: str
    owner_type: str
    number: int


@dataclass(frozen=True)
class CreateProjectParams:
    owner: str
    owner_type: str
    title: str


@dataclass(frozen=True)
class UpdateProjectParams:
    project_id: str
    title: str = ""
    short_description: str = ""
    public: Optional[bool] = None


@dataclass(frozen=True)
class ProjectIdParams:
    project_id: str


OWNER_TYPE_PARAM = string_param("owner_type", "Owner type", enum=OWNER_TYPES)


def _owner_field(owner_type: str) -> str:
    return OWNER_USER if owner_type == OWNER_USER else OWNER_ORGANIZATION


def _owner_document(owner_type: str, variables: str, selection: str) -> str:
    return (
        f"query({variables}) {{\n"
        f"  {_owner_field(owner_type)}(login: $login) {{\n"
        f"    {selection}\n"
        "  }\n"
        "}\n"
    )


def _nodes(data: Dict[str, Any], *path: str) -> List[Any]:
    current: Any = data
    for key in path:
        if not isinstance(current, dict):
            return []
        current = current.get(key)
    return current if isinstance(current, list) else []


def parse_owner(args: Arguments) -> OwnerParams:
    return OwnerParams(
        owner=args.required_str("owner"),
        owner_type=args.optional_enum("owner_type", OWNER_TYPES, DEFAULT_OWNER_TYPE),
    )


def parse_project_number(args: Arguments) -> ProjectNumberParams:
    owner = args.required_str("owner")
    number = args.required_int("number")
    return ProjectNumberParams(
        owner=owner,
        owner_type=args.optional_enum("owner_type", OWNER_TYPES, DEFAULT_OWNER_TYPE),
        number=number,
    )


def list_projects(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[OwnerParams]:
    spec = ToolSpec(
        name="list_projects",
        description=t("TOOL_LIST_PROJECTS_DESCRIPTION", "List Projects for a user or organization"),
        title=t("TOOL_LIST_PROJECTS_USER_TITLE", "List projects"),
        read_only=True,
        params=(
            string_param("owner", "Owner login (user or organization)", required=True),
            OWNER_TYPE_PARAM,
        ),
    )

    async def execute(client: GraphQLClient, params: OwnerParams) -> Dict[str, Any]:
        document = _owner_document(
            params.owner_type,
            "$login: String!",
            f"projectsV2(first: {PAGE_SIZE}) {{ nodes {{ id title number }} }}",
        )
        data = await client.query(document, {"login": params.owner})
        nodes = _nodes(data, _owner_field(params.owner_type), "projectsV2", "nodes")
        return with_truncation_flag(data, nodes)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_owner, execute=execute)


def get_project_fields(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ProjectNumberParams]:
    spec = ToolSpec(
        name="get_project_fields",
        description=t("TOOL_GET_PROJECT_FIELDS_DESCRIPTION", "Get fields for a project"),
        title=t("TOOL_GET_PROJECT_FIELDS_USER_TITLE", "Get project fields"),
        read_only=True,
        params=(
            string_param("owner", "Owner login", required=True),
            OWNER_TYPE_PARAM,
            number_param("number", "Project number", required=True),
        ),
    )

    async def execute(client: GraphQLClient, params: ProjectNumberParams) -> Dict[str, Any]:
        document = _owner_document(
            params.owner_type,
            "$login: String!, $number: Int!",
            "projectV2(number: $number) { "
            f"fields(first: {PAGE_SIZE}) {{ nodes {{ ... on ProjectV2FieldCommon {{ id name dataType }} }} }} "
            "}",
        )
        data = await client.query(document, {"login": params.owner, "number": params.number})
        nodes = _nodes(data, _owner_field(params.owner_type), "projectV2", "fields", "nodes")
        return with_truncation_flag(data, nodes)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_project_number, execute=execute)


def get_project_items(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ProjectNumberParams]:
    spec = ToolSpec(
        name="get_project_items",
        description=t("TOOL_GET_PROJECT_ITEMS_DESCRIPTION", "Get items for a project"),
        title=t("TOOL_GET_PROJECT_ITEMS_USER_TITLE", "Get project items"),
        read_only=True,
        params=(
            string_param("owner", "Owner login", required=True),
            OWNER_TYPE_PARAM,
            number_param("number", "Project number", required=True),
        ),
    )

    async def execute(client: GraphQLClient, params: ProjectNumberParams) -> Dict[str, Any]:
        document = _owner_document(
            params.owner_type,
            "$login: String!, $number: Int!",
            f"projectV2(number: $number) {{ items(first: {PAGE_SIZE}) {{ nodes {{ id }} }} }}",
        )
        data = await client.query(document, {"login": params.owner, "number": params.number})
        nodes = _nodes(data, _owner_field(params.owner_type), "projectV2", "items", "nodes")
        return with_truncation_flag(data, nodes)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_project_number, execute=execute)


CREATE_PROJECT_MUTATION = """
mutation($input: CreateProjectV2Input!) {
  createProjectV2(input: $input) {
    projectV2 { id url title }
  }
}
"""


def parse_create_project(args: Arguments) -> CreateProjectParams:
    # public and short_description are declared in the schema but never read
    owner = args.required_str("owner")
    title = args.required_str("title")
    return CreateProjectParams(
        owner=owner,
        owner_type=args.optional_enum("owner_type", OWNER_TYPES, DEFAULT_OWNER_TYPE),
        title=title,
    )


def create_project(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[CreateProjectParams]:
    spec = ToolSpec(
        name="create_project",
        description=t("TOOL_CREATE_PROJECT_DESCRIPTION", "Create a new Project V2 board"),
        title=t("TOOL_CREATE_PROJECT_USER_TITLE", "Create project"),
        read_only=False,
        params=(
            string_param("owner", "Owner login (user or organization)", required=True),
            OWNER_TYPE_PARAM,
            string_param("title", "Project title", required=True),
            bool_param("public", "Whether the project should be public. Defaults to private (false)"),
            string_param("short_description", "Short description for the project"),
        ),
    )

    async def execute(client: GraphQLClient, params: CreateProjectParams) -> Dict[str, Any]:
        owner_id = await resolve_owner_id(client, params.owner, params.owner_type)
        # createProjectV2 only takes owner and title; visibility and
        # description have to be set with update_project afterwards
        record = CreateProjectV2Input(owner_id=owner_id, title=params.title)
        return await client.mutate(CREATE_PROJECT_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_create_project, execute=execute)


UPDATE_PROJECT_MUTATION = """
mutation($input: UpdateProjectV2Input!) {
  updateProjectV2(input: $input) {
    projectV2 { id url title }
  }
}
"""


def parse_update_project(args: Arguments) -> UpdateProjectParams:
    return UpdateProjectParams(
        project_id=args.required_str("project_id"),
        title=args.optional_str("title"),
        short_description=args.optional_str("short_description"),
        public=args.optional_flag("public"),
    )


def build_update_project_input(params: UpdateProjectParams) -> UpdateProjectV2Input:
    """Empty strings mean "leave unchanged"; ``public`` goes through whenever supplied."""
    return UpdateProjectV2Input(
        project_id=params.project_id,
        title=params.title or None,
        short_description=params.short_description or None,
        public=params.public,
    )


def update_project(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[UpdateProjectParams]:
    spec = ToolSpec(
        name="update_project",
        description=t("TOOL_UPDATE_PROJECT_DESCRIPTION", "Update an existing Project V2 board"),
        title=t("TOOL_UPDATE_PROJECT_USER_TITLE", "Update project"),
        read_only=False,
        params=(
            string_param("project_id", "Project ID", required=True),
            string_param("title", "New title"),
            string_param("short_description", "New short description"),
            bool_param("public", "Set project visibility to public (true) or private (false)"),
        ),
    )

    async def execute(client: GraphQLClient, params: UpdateProjectParams) -> Dict[str, Any]:
        return await client.mutate(UPDATE_PROJECT_MUTATION, build_update_project_input(params))

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_update_project, execute=execute)


DELETE_PROJECT_MUTATION = """
mutation($input: DeleteProjectV2Input!) {
  deleteProjectV2(input: $input) {
    __typename
  }
}
"""


def parse_project_id(args: Arguments) -> ProjectIdParams:
    return ProjectIdParams(project_id=args.required_str("project_id"))


def delete_project(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ProjectIdParams]:
    spec = ToolSpec(
        name="delete_project",
        description=t("TOOL_DELETE_PROJECT_DESCRIPTION", "Delete a Project V2 board"),
        title=t("TOOL_DELETE_PROJECT_USER_TITLE", "Delete project"),
        read_only=False,
        params=(string_param("project_id", "Project ID", required=True),),
    )

    async def execute(client: GraphQLClient, params: ProjectIdParams) -> Dict[str, Any]:
        return await client.mutate(DELETE_PROJECT_MUTATION, DeleteProjectV2Input(project_id=params.project_id))

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_project_id, execute=execute)
