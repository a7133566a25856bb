from __future__ import annotations

"""
Projects (v2) tool set.

Board-level tools live in ``projects``, item-level tools in ``items``. Every
factory takes the client accessor and the translation helper and returns a
``ProjectTool``.
"""

from typing import Dict, List

from .base import GetClientFn, ProjectTool, ToolResult, TranslationHelperFunc
from .items import (
    add_issue_to_project,
    convert_project_item_to_issue,
    create_draft_issue,
    create_project_issue,
    delete_project_item,
    update_project_item,
    update_project_item_field,
    update_project_item_position,
)
from .projects import (
    create_project,
    delete_project,
    get_project_fields,
    get_project_items,
    list_projects,
    update_project,
)

TOOL_FACTORIES = (
    list_projects,
    get_project_fields,
    get_project_items,
    create_project_issue,
    add_issue_to_project,
    update_project_item_field,
    create_draft_issue,
    delete_project_item,
    create_project,
    update_project,
    delete_project,
    update_project_item,
    update_project_item_position,
    convert_project_item_to_issue,
)


def all_tools(get_client: GetClientFn, t: TranslationHelperFunc) -> List[ProjectTool]:
    return [factory(get_client, t) for factory in TOOL_FACTORIES]


def build_tools(get_client: GetClientFn, t: TranslationHelperFunc, read_only: bool = False) -> Dict[str, ProjectTool]:
    """Name -> tool. In read-only mode only tools annotated read-only are kept."""
    tools: Dict[str, ProjectTool] = {}
    for tool in all_tools(get_client, t):
        if read_only and not tool.read_only:
            continue
        if tool.name in tools:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        tools[tool.name] = tool
    return tools


__all__ = [
    "GetClientFn",
    "ProjectTool",
    "ToolResult",
    "TranslationHelperFunc",
    "TOOL_FACTORIES",
    "all_tools",
    "build_tools",
]
