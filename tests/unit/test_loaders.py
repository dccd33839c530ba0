"""
Unit tests for the SQLite loader
"""

import pytest
from sqlalchemy import text

from core.database import create_engine_for_path
from core.exceptions import DatabaseError, IntegrityViolationError, StoreInitializationError
from ingestion.loaders.sqlite_loader import SQLiteLoader
from models.base import DuplicateIdPolicy
from schemas.issue_row import IssueRow
from tests.conftest import read_issues


def row(issue_id: str, **fields) -> IssueRow:
    return IssueRow(id=issue_id, **fields)


class TestSQLiteLoader:
    """Test store recreation, staging and commit"""

    @pytest.mark.asyncio
    async def test_load_and_commit(self, db_path):
        """Staged rows are visible after commit"""
        loader = SQLiteLoader(db_path)
        await loader.prepare()

        for i in range(1, 6):
            await loader.append(row(f"issue-{i}", title=f"Issue {i}", labels="a, b"))

        loaded = await loader.commit()
        await loader.close()

        assert loaded == 5
        assert loader.staged_count == 5

        issues = await read_issues(db_path)
        assert [issue.id for issue in issues] == [f"issue-{i}" for i in range(1, 6)]
        assert issues[0].labels == "a, b"

    @pytest.mark.asyncio
    async def test_schema_uses_original_column_names(self, db_path):
        """The issues table keeps camelCase column names and id as primary key"""
        loader = SQLiteLoader(db_path)
        await loader.prepare()
        await loader.close()

        engine = create_engine_for_path(db_path)
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text("PRAGMA table_info(issues)"))
                columns = {r[1]: r for r in result.fetchall()}
        finally:
            await engine.dispose()

        assert set(columns) == {
            "id", "title", "createdAt", "completedAt", "startedAt", "state",
            "creator", "assignee", "description", "url", "canceledAt",
            "number", "estimate", "labels", "project", "cycle",
        }
        assert columns["id"][5] == 1  # pk flag

    @pytest.mark.asyncio
    async def test_prepare_replaces_existing_store(self, db_path):
        """An existing file at the target path is discarded"""
        first = SQLiteLoader(db_path)
        await first.prepare()
        await first.append(row("old"))
        await first.commit()
        await first.close()

        second = SQLiteLoader(db_path)
        await second.prepare()
        await second.append(row("new"))
        await second.commit()
        await second.close()

        assert [issue.id for issue in await read_issues(db_path)] == ["new"]

    @pytest.mark.asyncio
    async def test_prepare_replaces_non_database_file(self, db_path):
        db_path.write_text("not a database")

        loader = SQLiteLoader(db_path)
        await loader.prepare()
        await loader.commit()
        await loader.close()

        assert await read_issues(db_path) == []

    @pytest.mark.asyncio
    async def test_prepare_fails_when_location_unusable(self, tmp_path):
        """A path below a regular file cannot hold the store"""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        loader = SQLiteLoader(blocker / "issues.db")

        with pytest.raises(StoreInitializationError):
            await loader.prepare()

        await loader.close()

    @pytest.mark.asyncio
    async def test_abort_leaves_no_rows(self, db_path):
        """Rolled back rows never become visible"""
        loader = SQLiteLoader(db_path)
        await loader.prepare()
        await loader.append(row("A"))
        await loader.append(row("B"))

        await loader.abort()
        await loader.close()

        assert await read_issues(db_path) == []

    @pytest.mark.asyncio
    async def test_duplicate_id_fails_by_default(self, db_path):
        """Primary key collision is fatal under the fail policy"""
        loader = SQLiteLoader(db_path)
        await loader.prepare()
        await loader.append(row("dup", title="first"))

        with pytest.raises(IntegrityViolationError) as exc_info:
            await loader.append(row("dup", title="second"))

        assert exc_info.value.context["record_id"] == "dup"

        await loader.abort()
        await loader.close()
        assert await read_issues(db_path) == []

    @pytest.mark.asyncio
    async def test_duplicate_id_replace_keeps_last(self, db_path):
        """Under the replace policy the last staged copy wins"""
        loader = SQLiteLoader(db_path, duplicate_id_policy=DuplicateIdPolicy.REPLACE)
        await loader.prepare()
        await loader.append(row("dup", title="first", number=1))
        await loader.append(row("dup", title="second", number=2))

        loaded = await loader.commit()
        await loader.close()

        assert loaded == 1
        issues = await read_issues(db_path)
        assert len(issues) == 1
        assert issues[0].title == "second"
        assert issues[0].number == 2

    def test_policy_accepts_string(self, db_path):
        loader = SQLiteLoader(db_path, duplicate_id_policy="replace")

        assert loader.duplicate_id_policy == DuplicateIdPolicy.REPLACE

    @pytest.mark.asyncio
    async def test_append_before_prepare(self, db_path):
        loader = SQLiteLoader(db_path)

        with pytest.raises(DatabaseError):
            await loader.append(row("A"))
