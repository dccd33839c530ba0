"""
Pydantic schemas for data validation and serialization.

Schemas:
    linear: Wire shapes of the Linear GraphQL issues response
    issue_row: Flat row written to the destination table
    export: Result of an export run

Usage:
    from schemas.linear import IssueNode, IssuePage
    from schemas.issue_row import IssueRow
    from schemas.export import ExportResult

Example:
    page = IssuesResponse.model_validate(response.json()).data.issues
    for node in page.nodes:
        ...
"""

__all__ = [
    "IssueNode",
    "IssuePage",
    "IssuesResponse",
    "PageInfo",
    "IssueRow",
    "ExportResult",
]
