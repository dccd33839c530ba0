"""
Pytest configuration and fixtures
"""

import json
from typing import Any, Dict, List, Optional, Union

import httpx
import pytest
from sqlalchemy import select

from core.database import create_engine_for_path, create_session_maker
from models.issue import Issue

TEST_API_KEY = "lin_api_test_key"


def make_issue(issue_id: str, title: str = "Issue", labels: Optional[List[str]] = None, **overrides) -> Dict[str, Any]:
    """API-shaped issue node"""
    node = {
        "id": issue_id,
        "title": title,
        "createdAt": "2024-01-15T10:00:00.000Z",
        "completedAt": None,
        "startedAt": None,
        "number": 1,
        "estimate": None,
        "canceledAt": None,
        "state": {"name": "Todo"},
        "labels": {"nodes": [{"name": name} for name in (labels or [])]},
        "project": None,
        "creator": {"displayName": "alice"},
        "assignee": None,
        "description": None,
        "url": f"https://linear.app/acme/issue/{issue_id}",
        "cycle": None,
    }
    node.update(overrides)
    return node


def make_page(nodes: List[Dict[str, Any]], has_next: bool = False, end_cursor: Optional[str] = "") -> Dict[str, Any]:
    """API-shaped response body for one page"""
    return {
        "data": {
            "issues": {
                "nodes": nodes,
                "pageInfo": {"hasNextPage": has_next, "endCursor": end_cursor},
            }
        }
    }


class MockLinearAPI:
    """
    Serve canned responses in order and record every request.

    Each entry is a response body (dict), an httpx.Response, or an exception
    to raise from the transport.
    """

    def __init__(self, responses: List[Union[Dict[str, Any], httpx.Response, Exception]]):
        self.responses = responses
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = len(self.requests) - 1

        if index >= len(self.responses):
            return httpx.Response(500, json={"errors": [{"message": "unexpected extra request"}]})

        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    @property
    def cursors(self) -> List[Optional[str]]:
        return [body["variables"]["after"] for body in self.bodies]


async def read_issues(db_path) -> List[Issue]:
    """Committed rows of the issues table, ordered by id"""
    engine = create_engine_for_path(db_path)
    try:
        async with create_session_maker(engine)() as session:
            result = await session.execute(select(Issue).order_by(Issue.id))
            return list(result.scalars().all())
    finally:
        await engine.dispose()


@pytest.fixture
def db_path(tmp_path):
    """Destination store location for one test"""
    return tmp_path / "issues.db"


@pytest.fixture
def two_page_api():
    """Page 1 = issue A (no labels), page 2 (after c1) = issue B labelled x"""
    return MockLinearAPI([
        make_page([make_issue("A", title="t1", labels=[])], has_next=True, end_cursor="c1"),
        make_page([make_issue("B", title="t2", labels=["x"])], has_next=False, end_cursor=""),
    ])
