"""
Pydantic schema for the flat row written to the issues table
"""

from pydantic import BaseModel


class IssueRow(BaseModel):
    """
    Flat, destination-schema representation of one issue.

    Ensures:
    - No nulls: missing text is "", missing numbers are 0
    - Field names match the column keys of models.issue.Issue
    """

    id: str
    title: str = ""
    created_at: str = ""
    completed_at: str = ""
    started_at: str = ""
    state: str = ""
    creator: str = ""
    assignee: str = ""
    description: str = ""
    url: str = ""
    canceled_at: str = ""
    number: int = 0
    estimate: int = 0
    labels: str = ""
    project: str = ""
    cycle: int = 0
