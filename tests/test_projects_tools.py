"""
Board-level tools against a scripted GraphQL endpoint.
"""
from __future__ import annotations

import pytest

from projects_mcp.tools.projects import (
    create_project,
    delete_project,
    get_project_fields,
    get_project_items,
    list_projects,
    update_project,
)
from projects_mcp.translations import null_translation_helper as t


class TestListProjects:
    @pytest.mark.asyncio
    async def test_organization_by_default(self, get_client, graphql):
        nodes = [{"id": "PVT_1", "title": "Roadmap", "number": 1}]
        graphql.respond(data={"organization": {"projectsV2": {"nodes": nodes}}})

        result = await list_projects(get_client, t)({"owner": "acme"})

        assert not result.is_error
        assert result.json() == {
            "organization": {"projectsV2": {"nodes": nodes}},
            "possiblyTruncated": False,
        }
        assert "organization(login: $login)" in graphql.documents[0]
        assert "projectsV2(first: 100)" in graphql.documents[0]
        assert graphql.variables[0] == {"login": "acme"}

    @pytest.mark.asyncio
    async def test_user_owner(self, get_client, graphql):
        graphql.respond(data={"user": {"projectsV2": {"nodes": []}}})

        result = await list_projects(get_client, t)({"owner": "octocat", "owner_type": "user"})

        assert not result.is_error
        assert "user(login: $login)" in graphql.documents[0]
        assert "organization" not in graphql.documents[0]

    @pytest.mark.asyncio
    async def test_full_page_is_flagged(self, get_client, graphql):
        nodes = [{"id": f"PVT_{i}", "title": f"Board {i}", "number": i} for i in range(100)]
        graphql.respond(data={"organization": {"projectsV2": {"nodes": nodes}}})

        result = await list_projects(get_client, t)({"owner": "acme"})

        assert result.json()["possiblyTruncated"] is True

    @pytest.mark.asyncio
    async def test_missing_owner_sends_nothing(self, get_client, graphql):
        result = await list_projects(get_client, t)({})

        assert result.is_error
        assert result.text == "missing required parameter: owner"
        assert result.error_kind == "validation_error"
        assert graphql.requests == []

    @pytest.mark.asyncio
    async def test_invalid_owner_type(self, get_client, graphql):
        result = await list_projects(get_client, t)({"owner": "acme", "owner_type": "team"})

        assert result.is_error
        assert "owner_type" in result.text
        assert graphql.requests == []

    @pytest.mark.asyncio
    async def test_remote_error_is_relayed(self, get_client, graphql):
        graphql.respond(errors=[{"message": "Could not resolve to an Organization with the login of 'acme'."}])

        result = await list_projects(get_client, t)({"owner": "acme"})

        assert result.is_error
        assert result.error_kind == "remote_error"
        assert result.text == "Could not resolve to an Organization with the login of 'acme'."


class TestProjectFieldsAndItems:
    @pytest.mark.asyncio
    async def test_fields(self, get_client, graphql):
        nodes = [{"id": "F_1", "name": "Status", "dataType": "SINGLE_SELECT"}]
        graphql.respond(data={"user": {"projectV2": {"fields": {"nodes": nodes}}}})

        result = await get_project_fields(get_client, t)({"owner": "octocat", "owner_type": "user", "number": 3})

        assert result.json()["user"]["projectV2"]["fields"]["nodes"] == nodes
        assert result.json()["possiblyTruncated"] is False
        assert "... on ProjectV2FieldCommon { id name dataType }" in graphql.documents[0]
        assert graphql.variables[0] == {"login": "octocat", "number": 3}

    @pytest.mark.asyncio
    async def test_items(self, get_client, graphql):
        nodes = [{"id": "I_1"}, {"id": "I_2"}]
        graphql.respond(data={"organization": {"projectV2": {"items": {"nodes": nodes}}}})

        result = await get_project_items(get_client, t)({"owner": "acme", "number": 1})

        assert result.json()["organization"]["projectV2"]["items"]["nodes"] == nodes
        assert "items(first: 100)" in graphql.documents[0]
        assert graphql.variables[0] == {"login": "acme", "number": 1}

    @pytest.mark.asyncio
    async def test_number_is_required(self, get_client, graphql):
        result = await get_project_items(get_client, t)({"owner": "acme"})

        assert result.is_error
        assert result.text == "missing required parameter: number"
        assert graphql.requests == []

    @pytest.mark.asyncio
    async def test_number_must_be_numeric(self, get_client, graphql):
        result = await get_project_fields(get_client, t)({"owner": "acme", "number": "1"})

        assert result.is_error
        assert result.text == "parameter number is not of type number, is string"
        assert graphql.requests == []

    @pytest.mark.asyncio
    async def test_missing_project_is_not_an_error(self, get_client, graphql):
        graphql.respond(data={"organization": {"projectV2": None}})

        result = await get_project_items(get_client, t)({"owner": "acme", "number": 99})

        assert not result.is_error
        assert result.json() == {"organization": {"projectV2": None}, "possiblyTruncated": False}


class TestCreateProject:
    @pytest.mark.asyncio
    async def test_demo_board_for_user(self, get_client, graphql):
        graphql.respond(data={"user": {"id": "U_123"}, "organization": None})
        created = {"createProjectV2": {"projectV2": {"id": "PVT_9", "url": "https://github.com/users/octo/projects/9", "title": "Demo Board"}}}
        graphql.respond(data=created)

        result = await create_project(get_client, t)(
            {"owner": "acme", "owner_type": "user", "title": "Demo Board"}
        )

        assert not result.is_error
        assert result.json() == created
        assert graphql.variables == [
            {"login": "acme"},
            {"input": {"ownerId": "U_123", "title": "Demo Board"}},
        ]
        assert "createProjectV2(input: $input)" in graphql.documents[1]

    @pytest.mark.asyncio
    async def test_visibility_and_description_are_not_forwarded(self, get_client, graphql):
        graphql.respond(data={"user": None, "organization": {"id": "O_1"}})
        graphql.respond(data={"createProjectV2": {"projectV2": {"id": "PVT_1", "url": "u", "title": "Board"}}})

        result = await create_project(get_client, t)(
            {"owner": "acme", "title": "Board", "public": True, "short_description": "Planning"}
        )

        assert not result.is_error
        assert graphql.variables[1] == {"input": {"ownerId": "O_1", "title": "Board"}}

    @pytest.mark.asyncio
    async def test_wrongly_typed_visibility_and_description_are_ignored(self, get_client, graphql):
        graphql.respond(data={"user": None, "organization": {"id": "O_1"}})
        graphql.respond(data={"createProjectV2": {"projectV2": {"id": "PVT_1", "url": "u", "title": "B"}}})

        result = await create_project(get_client, t)(
            {"owner": "acme", "title": "B", "public": "yes", "short_description": 5}
        )

        assert not result.is_error
        assert graphql.variables == [
            {"login": "acme"},
            {"input": {"ownerId": "O_1", "title": "B"}},
        ]

    @pytest.mark.asyncio
    async def test_unresolved_owner_stops_before_mutation(self, get_client, graphql):
        graphql.respond(data={"user": {"id": "U_123"}, "organization": None})

        result = await create_project(get_client, t)({"owner": "octocat", "title": "Board"})

        assert result.is_error
        assert result.text == "failed to resolve owner ID"
        assert result.error_kind == "resolution_error"
        assert len(graphql.requests) == 1

    @pytest.mark.asyncio
    async def test_title_is_required(self, get_client, graphql):
        result = await create_project(get_client, t)({"owner": "acme"})

        assert result.text == "missing required parameter: title"
        assert graphql.requests == []


class TestUpdateProject:
    @pytest.mark.asyncio
    async def test_only_supplied_fields_are_sent(self, get_client, graphql):
        graphql.respond(data={"updateProjectV2": {"projectV2": {"id": "P_1", "url": "u", "title": "Renamed"}}})

        result = await update_project(get_client, t)({"project_id": "P_1", "title": "Renamed"})

        assert not result.is_error
        assert graphql.variables[0] == {"input": {"projectId": "P_1", "title": "Renamed"}}

    @pytest.mark.asyncio
    async def test_public_false_is_sent(self, get_client, graphql):
        graphql.respond(data={"updateProjectV2": {"projectV2": {"id": "P_1", "url": "u", "title": "T"}}})

        await update_project(get_client, t)({"project_id": "P_1", "public": False})

        assert graphql.variables[0] == {"input": {"projectId": "P_1", "public": False}}

    @pytest.mark.asyncio
    async def test_empty_strings_are_omitted(self, get_client, graphql):
        graphql.respond(data={"updateProjectV2": {"projectV2": {"id": "P_1", "url": "u", "title": "T"}}})

        await update_project(get_client, t)({"project_id": "P_1", "title": "", "short_description": ""})

        assert graphql.variables[0] == {"input": {"projectId": "P_1"}}

    @pytest.mark.asyncio
    async def test_all_fields(self, get_client, graphql):
        graphql.respond(data={"updateProjectV2": {"projectV2": {"id": "P_1", "url": "u", "title": "T"}}})

        await update_project(get_client, t)(
            {"project_id": "P_1", "title": "T", "short_description": "Q3 plan", "public": True}
        )

        assert graphql.variables[0] == {
            "input": {"projectId": "P_1", "title": "T", "shortDescription": "Q3 plan", "public": True}
        }


class TestDeleteProject:
    @pytest.mark.asyncio
    async def test_delete(self, get_client, graphql):
        graphql.respond(data={"deleteProjectV2": {"__typename": "DeleteProjectV2Payload"}})

        result = await delete_project(get_client, t)({"project_id": "P_1"})

        assert result.json() == {"deleteProjectV2": {"__typename": "DeleteProjectV2Payload"}}
        assert graphql.variables[0] == {"input": {"projectId": "P_1"}}

    @pytest.mark.asyncio
    async def test_project_id_is_required(self, get_client, graphql):
        result = await delete_project(get_client, t)({"project_id": ""})

        assert result.text == "missing required parameter: project_id"
        assert graphql.requests == []
