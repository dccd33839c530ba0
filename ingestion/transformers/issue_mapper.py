"""
Transform Linear issue nodes into flat issue rows
"""

from datetime import datetime
from typing import Iterable, Optional
from schemas.linear import IssueNode, NamedNode, UserRef
from schemas.issue_row import IssueRow
import logging

logger = logging.getLogger(__name__)

LABEL_SEPARATOR = ", "


def flatten_labels(names: Iterable[str], separator: str = LABEL_SEPARATOR) -> str:
    """
    Join label names in source order.

    No trailing separator: ["a", "b", "c"] -> "a, b, c", [] -> "".
    """
    return separator.join(names)


class IssueMapper:
    """
    Map issue nodes onto the issues table shape.

    Handles:
    - Flattening nested objects (state, project, cycle, creator, assignee)
    - Label flattening
    - Defaults for absent values ("" for text and timestamps, 0 for numbers)
    """

    def __init__(self, label_separator: str = LABEL_SEPARATOR):
        self.label_separator = label_separator

    def to_row(self, issue: IssueNode) -> IssueRow:
        """Map one issue node to one row"""
        label_names = [label.name or "" for label in issue.labels.nodes] if issue.labels else []

        return IssueRow(
            id=issue.id,
            title=issue.title or "",
            created_at=self._format_datetime(issue.created_at),
            completed_at=self._format_datetime(issue.completed_at),
            started_at=self._format_datetime(issue.started_at),
            state=self._name(issue.state),
            creator=self._display_name(issue.creator),
            assignee=self._display_name(issue.assignee),
            description=issue.description or "",
            url=issue.url or "",
            canceled_at=self._format_datetime(issue.canceled_at),
            number=issue.number or 0,
            estimate=issue.estimate or 0,
            labels=flatten_labels(label_names, self.label_separator),
            project=self._name(issue.project),
            cycle=(issue.cycle.number or 0) if issue.cycle else 0,
        )

    @staticmethod
    def _name(node: Optional[NamedNode]) -> str:
        return (node.name or "") if node else ""

    @staticmethod
    def _display_name(user: Optional[UserRef]) -> str:
        return (user.display_name or "") if user else ""

    @staticmethod
    def _format_datetime(value: Optional[datetime]) -> str:
        """ISO-8601 text, empty string when unset"""
        if value is None:
            return ""
        return value.isoformat()
