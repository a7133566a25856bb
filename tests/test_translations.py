from __future__ import annotations

from projects_mcp.tools import all_tools
from projects_mcp.translations import TranslationHelper, null_translation_helper


def _no_client():
    raise AssertionError("not called")


def test_default_is_returned():
    t = TranslationHelper(environ={})
    assert t("TOOL_LIST_PROJECTS_DESCRIPTION", "List Projects") == "List Projects"


def test_config_override_beats_default():
    t = TranslationHelper({"tool_list_projects_description": "List boards"}, environ={})
    assert t("TOOL_LIST_PROJECTS_DESCRIPTION", "List Projects") == "List boards"


def test_environment_beats_config():
    t = TranslationHelper(
        {"TOOL_LIST_PROJECTS_DESCRIPTION": "List boards"},
        environ={"PROJECTS_MCP_TOOL_LIST_PROJECTS_DESCRIPTION": "Boards, please"},
    )
    assert t("TOOL_LIST_PROJECTS_DESCRIPTION", "List Projects") == "Boards, please"


def test_empty_environment_value_is_ignored():
    t = TranslationHelper(environ={"PROJECTS_MCP_TOOL_X": ""})
    assert t("TOOL_X", "default") == "default"


def test_dump_lists_every_tool_string():
    t = TranslationHelper(environ={})
    all_tools(_no_client, t)

    table = t.dump()

    assert list(table) == sorted(table)
    assert table["TOOL_LIST_PROJECTS_DESCRIPTION"] == "List Projects for a user or organization"
    assert table["TOOL_CONVERT_PROJECT_ITEM_TO_ISSUE_USER_TITLE"] == "Convert item to issue"
    # one description and one title per tool
    assert len(table) == 2 * 14


def test_override_reaches_tool_listing():
    t = TranslationHelper({"TOOL_DELETE_PROJECT_USER_TITLE": "Remove board"}, environ={})
    tools = {tool.name: tool for tool in all_tools(_no_client, t)}

    assert tools["delete_project"].spec.to_mcp_tool().annotations.title == "Remove board"


def test_null_helper():
    assert null_translation_helper("ANY", "value") == "value"
