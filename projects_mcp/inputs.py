"""
Input records for the Projects (v2) mutations.

Each record mirrors the remote input object; ``None`` marks a field the caller
did not set and is dropped from the wire variables.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CreateProjectV2Input:
    owner_id: str
    title: str


@dataclass(frozen=True)
class UpdateProjectV2Input:
    project_id: str
    title: Optional[str] = None
    short_description: Optional[str] = None
    public: Optional[bool] = None


@dataclass(frozen=True)
class DeleteProjectV2Input:
    project_id: str


@dataclass(frozen=True)
class AddProjectV2ItemByIdInput:
    project_id: str
    content_id: str


@dataclass(frozen=True)
class AddProjectV2DraftIssueInput:
    project_id: str
    title: str
    body: Optional[str] = None


@dataclass(frozen=True)
class ProjectV2FieldValue:
    # only text values are supported; an empty record is sent as {}
    text: Optional[str] = None


@dataclass(frozen=True)
class UpdateProjectV2ItemFieldValueInput:
    project_id: str
    item_id: str
    field_id: str
    value: ProjectV2FieldValue = field(default_factory=ProjectV2FieldValue)


@dataclass(frozen=True)
class UpdateProjectV2ItemInput:
    project_id: str
    item_id: str
    archived: Optional[bool] = None


@dataclass(frozen=True)
class UpdateProjectV2ItemPositionInput:
    project_id: str
    item_id: str
    previous_item_id: Optional[str] = None


@dataclass(frozen=True)
class ConvertProjectV2ItemToIssueInput:
    project_id: str
    item_id: str


@dataclass(frozen=True)
class DeleteProjectV2ItemInput:
    project_id: str
    item_id: str


@dataclass(frozen=True)
class CreateIssueInput:
    repository_id: str
    title: str
    body: Optional[str] = None
