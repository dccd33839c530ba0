from sqlalchemy import Column, Integer, Text
from models.base import Base


class Issue(Base):
    """
    One exported Linear issue.

    Column names keep the camelCase spelling of the API fields so existing
    queries against issues.db keep working; the Python attribute (and column
    key) is snake_case.

    Field Mapping Strategy:
    - id -> id (primary key)
    - createdAt / startedAt / completedAt / canceledAt -> ISO text, "" when unset
    - state.name -> state
    - project.name -> project
    - cycle.number -> cycle
    - creator.displayName -> creator
    - assignee.displayName -> assignee
    - labels.nodes[].name -> labels (", " joined)
    """
    __tablename__ = "issues"

    id = Column(Text, primary_key=True)
    title = Column(Text)
    created_at = Column("createdAt", Text, key="created_at")
    completed_at = Column("completedAt", Text, key="completed_at")
    started_at = Column("startedAt", Text, key="started_at")
    state = Column(Text)
    creator = Column(Text)
    assignee = Column(Text)
    description = Column(Text)
    url = Column(Text)
    canceled_at = Column("canceledAt", Text, key="canceled_at")
    number = Column(Integer)
    estimate = Column(Integer)
    labels = Column(Text)
    project = Column(Text)
    cycle = Column(Integer)
