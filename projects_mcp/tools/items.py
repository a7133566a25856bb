"""
Item-level tools: add, update, move, convert and delete project items, plus
the repository issue helper used to create content for a board.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..graphql_client import GraphQLClient
from ..inputs import (
    AddProjectV2DraftIssueInput,
    AddProjectV2ItemByIdInput,
    ConvertProjectV2ItemToIssueInput,
    CreateIssueInput,
    DeleteProjectV2ItemInput,
    ProjectV2FieldValue,
    UpdateProjectV2ItemFieldValueInput,
    UpdateProjectV2ItemInput,
    UpdateProjectV2ItemPositionInput,
)
from ..owners import resolve_repository_id
from ..params import Arguments
from ..toolspec import ToolSpec, bool_param, string_param
from .base import GetClientFn, ProjectTool, TranslationHelperFunc

PROJECT_ID_PARAM = string_param("project_id", "Project ID", required=True)
ITEM_ID_PARAM = string_param("item_id", "Item ID", required=True)


@dataclass(frozen=True)
class ItemParams:
    project_id: str
    item_id: str


@dataclass(frozen=True)
class AddIssueParams:
    project_id: str
    issue_id: str


@dataclass(frozen=True)
class DraftIssueParams:
    project_id: str
    title: str
    body: str = ""


@dataclass(frozen=True)
class ItemFieldParams:
    project_id: str
    item_id: str
    field_id: str
    text_value: str = ""


@dataclass(frozen=True)
class ItemArchiveParams:
    project_id: str
    item_id: str
    archived: Optional[bool] = None


@dataclass(frozen=True)
class ItemPositionParams:
    project_id: str
    item_id: str
    previous_item_id: str = ""


@dataclass(frozen=True)
class CreateIssueParams:
    owner: str
    repo: str
    title: str
    body: str = ""


def parse_item(args: Arguments) -> ItemParams:
    return ItemParams(project_id=args.required_str("project_id"), item_id=args.required_str("item_id"))


CREATE_ISSUE_MUTATION = """
mutation($input: CreateIssueInput!) {
  createIssue(input: $input) {
    issue { id }
  }
}
"""


def parse_create_issue(args: Arguments) -> CreateIssueParams:
    return CreateIssueParams(
        owner=args.required_str("owner"),
        repo=args.required_str("repo"),
        title=args.required_str("title"),
        body=args.optional_str("body"),
    )


def create_project_issue(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[CreateIssueParams]:
    spec = ToolSpec(
        name="create_project_issue",
        description=t("TOOL_CREATE_PROJECT_ISSUE_DESCRIPTION", "Create a new issue"),
        title=t("TOOL_CREATE_PROJECT_ISSUE_USER_TITLE", "Create issue"),
        read_only=False,
        params=(
            string_param("owner", "Repository owner", required=True),
            string_param("repo", "Repository name", required=True),
            string_param("title", "Issue title", required=True),
            string_param("body", "Issue body"),
        ),
    )

    async def execute(client: GraphQLClient, params: CreateIssueParams) -> Dict[str, Any]:
        repository_id = await resolve_repository_id(client, params.owner, params.repo)
        record = CreateIssueInput(repository_id=repository_id, title=params.title, body=params.body or None)
        return await client.mutate(CREATE_ISSUE_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_create_issue, execute=execute)


ADD_ISSUE_MUTATION = """
mutation($input: AddProjectV2ItemByIdInput!) {
  addProjectV2ItemById(input: $input) {
    item { id }
  }
}
"""


def parse_add_issue(args: Arguments) -> AddIssueParams:
    return AddIssueParams(project_id=args.required_str("project_id"), issue_id=args.required_str("issue_id"))


def add_issue_to_project(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[AddIssueParams]:
    spec = ToolSpec(
        name="add_issue_to_project",
        description=t("TOOL_ADD_ISSUE_TO_PROJECT_DESCRIPTION", "Add an issue to a project"),
        title=t("TOOL_ADD_ISSUE_TO_PROJECT_USER_TITLE", "Add issue to project"),
        read_only=False,
        params=(
            PROJECT_ID_PARAM,
            string_param("issue_id", "Issue node ID", required=True),
        ),
    )

    async def execute(client: GraphQLClient, params: AddIssueParams) -> Dict[str, Any]:
        record = AddProjectV2ItemByIdInput(project_id=params.project_id, content_id=params.issue_id)
        return await client.mutate(ADD_ISSUE_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_add_issue, execute=execute)


UPDATE_ITEM_FIELD_MUTATION = """
mutation($input: UpdateProjectV2ItemFieldValueInput!) {
  updateProjectV2ItemFieldValue(input: $input) {
    __typename
  }
}
"""


def parse_item_field(args: Arguments) -> ItemFieldParams:
    return ItemFieldParams(
        project_id=args.required_str("project_id"),
        item_id=args.required_str("item_id"),
        field_id=args.required_str("field_id"),
        text_value=args.optional_str("text_value"),
    )


def update_project_item_field(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ItemFieldParams]:
    spec = ToolSpec(
        name="update_project_item_field",
        description=t("TOOL_UPDATE_PROJECT_ITEM_FIELD_DESCRIPTION", "Update a project item field"),
        title=t("TOOL_UPDATE_PROJECT_ITEM_FIELD_USER_TITLE", "Update project item field"),
        read_only=False,
        params=(
            PROJECT_ID_PARAM,
            ITEM_ID_PARAM,
            string_param("field_id", "Field ID", required=True),
            string_param("text_value", "Text value"),
        ),
    )

    async def execute(client: GraphQLClient, params: ItemFieldParams) -> Dict[str, Any]:
        # Without text_value the value object goes out empty, unvalidated
        record = UpdateProjectV2ItemFieldValueInput(
            project_id=params.project_id,
            item_id=params.item_id,
            field_id=params.field_id,
            value=ProjectV2FieldValue(text=params.text_value or None),
        )
        return await client.mutate(UPDATE_ITEM_FIELD_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_item_field, execute=execute)


ADD_DRAFT_ISSUE_MUTATION = """
mutation($input: AddProjectV2DraftIssueInput!) {
  addProjectV2DraftIssue(input: $input) {
    projectItem { id }
  }
}
"""


def parse_draft_issue(args: Arguments) -> DraftIssueParams:
    return DraftIssueParams(
        project_id=args.required_str("project_id"),
        title=args.required_str("title"),
        body=args.optional_str("body"),
    )


def create_draft_issue(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[DraftIssueParams]:
    spec = ToolSpec(
        name="create_draft_issue",
        description=t("TOOL_CREATE_DRAFT_ISSUE_DESCRIPTION", "Create a draft issue in a project"),
        title=t("TOOL_CREATE_DRAFT_ISSUE_USER_TITLE", "Create draft issue"),
        read_only=False,
        params=(
            PROJECT_ID_PARAM,
            string_param("title", "Issue title", required=True),
            string_param("body", "Issue body"),
        ),
    )

    async def execute(client: GraphQLClient, params: DraftIssueParams) -> Dict[str, Any]:
        record = AddProjectV2DraftIssueInput(
            project_id=params.project_id,
            title=params.title,
            body=params.body or None,
        )
        return await client.mutate(ADD_DRAFT_ISSUE_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_draft_issue, execute=execute)


DELETE_ITEM_MUTATION = """
mutation($input: DeleteProjectV2ItemInput!) {
  deleteProjectV2Item(input: $input) {
    __typename
  }
}
"""


def delete_project_item(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ItemParams]:
    spec = ToolSpec(
        name="delete_project_item",
        description=t("TOOL_DELETE_PROJECT_ITEM_DESCRIPTION", "Delete a project item"),
        title=t("TOOL_DELETE_PROJECT_ITEM_USER_TITLE", "Delete project item"),
        read_only=False,
        params=(PROJECT_ID_PARAM, ITEM_ID_PARAM),
    )

    async def execute(client: GraphQLClient, params: ItemParams) -> Dict[str, Any]:
        record = DeleteProjectV2ItemInput(project_id=params.project_id, item_id=params.item_id)
        return await client.mutate(DELETE_ITEM_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_item, execute=execute)


UPDATE_ITEM_MUTATION = """
mutation($input: UpdateProjectV2ItemInput!) {
  updateProjectV2Item(input: $input) {
    item { id }
  }
}
"""


def parse_item_archive(args: Arguments) -> ItemArchiveParams:
    return ItemArchiveParams(
        project_id=args.required_str("project_id"),
        item_id=args.required_str("item_id"),
        archived=args.optional_flag("archived"),
    )


def update_project_item(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ItemArchiveParams]:
    spec = ToolSpec(
        name="update_project_item",
        description=t("TOOL_UPDATE_PROJECT_ITEM_DESCRIPTION", "Archive / unarchive a project item"),
        title=t("TOOL_UPDATE_PROJECT_ITEM_USER_TITLE", "Update project item"),
        read_only=False,
        params=(
            PROJECT_ID_PARAM,
            ITEM_ID_PARAM,
            bool_param("archived", "Whether the item should be archived (true) or unarchived (false)"),
        ),
    )

    async def execute(client: GraphQLClient, params: ItemArchiveParams) -> Dict[str, Any]:
        # archived is None unless the caller sent the key
        record = UpdateProjectV2ItemInput(
            project_id=params.project_id,
            item_id=params.item_id,
            archived=params.archived,
        )
        return await client.mutate(UPDATE_ITEM_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_item_archive, execute=execute)


UPDATE_ITEM_POSITION_MUTATION = """
mutation($input: UpdateProjectV2ItemPositionInput!) {
  updateProjectV2ItemPosition(input: $input) {
    item { id }
  }
}
"""


def parse_item_position(args: Arguments) -> ItemPositionParams:
    return ItemPositionParams(
        project_id=args.required_str("project_id"),
        item_id=args.required_str("item_id"),
        previous_item_id=args.optional_str("previous_item_id"),
    )


def update_project_item_position(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ItemPositionParams]:
    spec = ToolSpec(
        name="update_project_item_position",
        description=t("TOOL_UPDATE_PROJECT_ITEM_POSITION_DESCRIPTION", "Move a project item to a new position"),
        title=t("TOOL_UPDATE_PROJECT_ITEM_POSITION_USER_TITLE", "Move project item"),
        read_only=False,
        params=(
            PROJECT_ID_PARAM,
            string_param("item_id", "Item ID to move", required=True),
            string_param(
                "previous_item_id",
                "Item ID that should come directly before the moved item (optional)",
            ),
        ),
    )

    async def execute(client: GraphQLClient, params: ItemPositionParams) -> Dict[str, Any]:
        # No previous item moves the item to the top; ordering is decided remotely
        record = UpdateProjectV2ItemPositionInput(
            project_id=params.project_id,
            item_id=params.item_id,
            previous_item_id=params.previous_item_id or None,
        )
        return await client.mutate(UPDATE_ITEM_POSITION_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_item_position, execute=execute)


CONVERT_ITEM_MUTATION = """
mutation($input: ConvertProjectV2ItemToIssueInput!) {
  convertProjectV2ItemToIssue(input: $input) {
    issue { id url title }
  }
}
"""


def convert_project_item_to_issue(get_client: GetClientFn, t: TranslationHelperFunc) -> ProjectTool[ItemParams]:
    spec = ToolSpec(
        name="convert_project_item_to_issue",
        description=t(
            "TOOL_CONVERT_PROJECT_ITEM_TO_ISSUE_DESCRIPTION",
            "Convert a draft item to a repository issue",
        ),
        title=t("TOOL_CONVERT_PROJECT_ITEM_TO_ISSUE_USER_TITLE", "Convert item to issue"),
        read_only=False,
        params=(
            PROJECT_ID_PARAM,
            string_param("item_id", "Item ID to convert", required=True),
        ),
    )

    async def execute(client: GraphQLClient, params: ItemParams) -> Dict[str, Any]:
        record = ConvertProjectV2ItemToIssueInput(project_id=params.project_id, item_id=params.item_id)
        return await client.mutate(CONVERT_ITEM_MUTATION, record)

    return ProjectTool(spec=spec, get_client=get_client, parse=parse_item, execute=execute)
