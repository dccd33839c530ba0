"""
Load issue rows into a freshly created SQLite store inside one transaction
"""

from pathlib import Path
from typing import Optional, Union
from sqlalchemy import func, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from core.database import create_engine_for_path, create_session_maker
from core.exceptions import DatabaseError, IntegrityViolationError, StoreInitializationError
from models.base import Base, DuplicateIdPolicy
from models.issue import Issue
from schemas.issue_row import IssueRow
import logging

logger = logging.getLogger(__name__)


class SQLiteLoader:
    """
    Own the destination store for the lifetime of one export.

    Ensures:
    - The store is recreated from scratch on every run
    - Every row is staged in a single transaction
    - Rows become visible only on commit, all at once
    """

    def __init__(
        self,
        database_path: Union[str, Path],
        duplicate_id_policy: Union[DuplicateIdPolicy, str] = DuplicateIdPolicy.FAIL
    ):
        self.database_path = Path(database_path)
        self.duplicate_id_policy = DuplicateIdPolicy(duplicate_id_policy)
        self.engine: Optional[AsyncEngine] = None
        self.session: Optional[AsyncSession] = None
        self.staged_count = 0

    async def prepare(self):
        """
        Discard any existing store, create the schema and open the run's session.

        Raises:
            StoreInitializationError: If the file cannot be removed or the schema created
        """
        try:
            # Leftover journals from an interrupted run would be replayed into the new file
            for suffix in ("", "-journal", "-wal", "-shm"):
                Path(f"{self.database_path}{suffix}").unlink(missing_ok=True)
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreInitializationError(
                "Could not recreate destination store",
                context={"database_path": str(self.database_path), "operation": "remove"},
                original_exception=e
            )

        try:
            self.engine = create_engine_for_path(self.database_path)
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreInitializationError(
                "Could not create destination schema",
                context={"database_path": str(self.database_path), "operation": "create_schema"},
                original_exception=e
            )

        self.session = create_session_maker(self.engine)()
        self.staged_count = 0
        logger.info(f"Created destination store at {self.database_path}")

    def _insert_statement(self, values):
        table = Issue.__table__

        if self.duplicate_id_policy == DuplicateIdPolicy.REPLACE:
            stmt = sqlite_insert(table).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[table.c.id],
                set_={
                    column: stmt.excluded[column.key]
                    for column in table.columns
                    if not column.primary_key
                }
            )

        return insert(table).values(**values)

    async def append(self, row: IssueRow):
        """
        Stage one row in the open transaction.

        Raises:
            IntegrityViolationError: Duplicate id under the "fail" policy
            DatabaseError: Any other insert failure
        """
        if self.session is None:
            raise DatabaseError(
                "Loader used before prepare()",
                context={"operation": "INSERT", "table_name": Issue.__tablename__}
            )

        try:
            await self.session.execute(self._insert_statement(row.model_dump()))
        except IntegrityError as e:
            raise IntegrityViolationError(
                f"Issue {row.id} violates the destination schema",
                context={
                    "record_id": row.id,
                    "constraint_name": f"{Issue.__tablename__}.id",
                    "table_name": Issue.__tablename__
                },
                original_exception=e
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to stage issue {row.id}",
                context={"operation": "INSERT", "table_name": Issue.__tablename__, "record_id": row.id},
                original_exception=e
            )

        self.staged_count += 1

    async def commit(self) -> int:
        """
        Commit every staged row atomically.

        Returns:
            Number of rows in the issues table after commit
        """
        if self.session is None:
            raise DatabaseError(
                "Loader used before prepare()",
                context={"operation": "COMMIT", "table_name": Issue.__tablename__}
            )

        try:
            await self.session.commit()
            loaded = await self.session.scalar(select(func.count()).select_from(Issue))
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to commit issues",
                context={
                    "operation": "COMMIT",
                    "table_name": Issue.__tablename__,
                    "records_staged": self.staged_count
                },
                original_exception=e
            )

        logger.info(f"Committed {loaded} issues to {self.database_path}")
        return loaded

    async def abort(self):
        """Roll back everything staged; nothing becomes visible"""
        if self.session is not None:
            await self.session.rollback()
            logger.warning(f"Rolled back {self.staged_count} staged issues")

    async def close(self):
        """Release the session and engine"""
        if self.session is not None:
            await self.session.close()
            self.session = None
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
