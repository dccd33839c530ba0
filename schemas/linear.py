"""
Pydantic schemas for the Linear GraphQL issues response.

Nested objects that Linear returns as ``null`` (no assignee, no cycle,
no project) are modelled as optional sub-structures; the mapper supplies
the defaults.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LinearModel(BaseModel):
    """Base for wire models: camelCase aliases, construction by field name allowed"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NamedNode(LinearModel):
    """Any ``{ name }`` object (state, project, label)"""
    name: Optional[str] = None


class UserRef(LinearModel):
    """``{ displayName }`` of a creator or assignee"""
    display_name: Optional[str] = Field(None, alias="displayName")


class CycleRef(LinearModel):
    number: Optional[int] = None


class LabelConnection(LinearModel):
    nodes: List[NamedNode] = Field(default_factory=list)


class IssueNode(LinearModel):
    """
    One issue as returned inside ``data.issues.nodes``.

    Timestamps are ``None`` when Linear reports them as unset.
    """

    id: str = Field(..., min_length=1)
    number: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None

    created_at: Optional[datetime] = Field(None, alias="createdAt")
    started_at: Optional[datetime] = Field(None, alias="startedAt")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")
    canceled_at: Optional[datetime] = Field(None, alias="canceledAt")

    estimate: Optional[int] = None

    state: Optional[NamedNode] = None
    project: Optional[NamedNode] = None
    cycle: Optional[CycleRef] = None
    creator: Optional[UserRef] = None
    assignee: Optional[UserRef] = None
    labels: Optional[LabelConnection] = None


class PageInfo(LinearModel):
    has_next_page: bool = Field(..., alias="hasNextPage")
    end_cursor: Optional[str] = Field(None, alias="endCursor")


class IssuePage(LinearModel):
    """One page of issues plus its pagination metadata"""
    nodes: List[IssueNode] = Field(default_factory=list)
    page_info: PageInfo = Field(..., alias="pageInfo")


class IssuesData(LinearModel):
    issues: IssuePage


class IssuesResponse(LinearModel):
    """Top-level GraphQL response envelope"""
    data: Optional[IssuesData] = None
    errors: Optional[List[Dict[str, Any]]] = None
