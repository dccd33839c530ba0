# ============================================================================
# File: ingestion/runner.py
# Description: Export orchestrator with all-or-nothing commit
# ============================================================================
"""
Export Runner - Orchestrates Extract, Transform, Load for one export.

This module drives a single run:
- Recreate the destination store
- Walk every page of issues in order
- Map each issue to a row and stage it
- Commit once, after the last page, or roll back on the first error

The outcome is returned as an ExportResult rather than raised, so the entry
point decides how to report it. A failed result never has committed rows.
"""

from contextlib import aclosing
from typing import Optional
import logging

from ingestion.base import DataSource
from ingestion.transformers.issue_mapper import IssueMapper
from ingestion.loaders.sqlite_loader import SQLiteLoader
from models.base import ETLStatus
from schemas.export import ExportResult
from core.exceptions import ETLException

logger = logging.getLogger(__name__)


class ExportRunner:
    """
    Export orchestrator

    Responsibilities:
    - Orchestrate Extract → Transform → Load page by page
    - Commit only after the source reports its last page
    - Skip the commit on any error
    - Record run metrics in the result
    """

    def __init__(
        self,
        extractor: DataSource,
        loader: SQLiteLoader,
        mapper: Optional[IssueMapper] = None
    ):
        self.extractor = extractor
        self.loader = loader
        self.mapper = mapper or IssueMapper()

    async def run(self) -> ExportResult:
        """
        Run the export to completion or first failure.

        Pipeline phases:
        1. Prepare - Recreate the store and open the transaction
        2. Extract/Transform/Load - One page at a time, rows staged in order
        3. Commit - Only when every page has been staged

        Returns:
            ExportResult with status SUCCESS or FAILED
        """
        result = ExportResult(database_path=str(self.loader.database_path))

        try:
            # --------------------------------------------------
            # PHASE 1: PREPARE STORE
            # --------------------------------------------------
            await self.loader.prepare()

            # --------------------------------------------------
            # PHASE 2: EXTRACT → TRANSFORM → LOAD, PAGE BY PAGE
            # --------------------------------------------------
            async with aclosing(self.extractor.iter_pages()) as pages:
                async for page in pages:
                    for issue in page.nodes:
                        await self.loader.append(self.mapper.to_row(issue))

                    result.pages_fetched += 1
                    result.records_extracted += len(page.nodes)
                    result.last_cursor = page.page_info.end_cursor

                    logger.debug(
                        f"Page {result.pages_fetched}: staged {len(page.nodes)} issues "
                        f"(total: {result.records_extracted})"
                    )

            # --------------------------------------------------
            # PHASE 3: COMMIT
            # --------------------------------------------------
            result.records_loaded = await self.loader.commit()

        except ETLException as e:
            logger.error(f"Export failed: {e}")
            return await self._fail(result, e)

        except Exception as e:
            logger.exception("Unexpected error in export pipeline")
            return await self._fail(
                result,
                ETLException(
                    "Unexpected error in export pipeline",
                    context={
                        "pages_fetched": result.pages_fetched,
                        "records_extracted": result.records_extracted
                    },
                    original_exception=e
                )
            )

        finally:
            await self.loader.close()

        result.status = ETLStatus.SUCCESS
        logger.info(
            f"Export completed: {result.pages_fetched} pages, "
            f"{result.records_extracted} extracted, {result.records_loaded} loaded"
        )
        return result

    async def _fail(self, result: ExportResult, error: ETLException) -> ExportResult:
        await self.loader.abort()
        result.status = ETLStatus.FAILED
        result.records_loaded = 0
        result.error = error.to_dict()
        return result
