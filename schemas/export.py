"""
Result of one export run, returned from the runner to the entry point
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from models.base import ETLStatus


class ExportResult(BaseModel):
    """
    Outcome of ExportRunner.run().

    A failed result carries the error as ETLException.to_dict() and
    guarantees nothing was committed to the destination store.
    """

    status: ETLStatus = ETLStatus.RUNNING
    database_path: str
    pages_fetched: int = 0
    records_extracted: int = 0
    records_loaded: int = 0
    last_cursor: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def succeeded(self) -> bool:
        return self.status == ETLStatus.SUCCESS
