"""
Abstract base class for paginated data sources
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional

import httpx

from schemas.linear import IssuePage


class DataSource(ABC):
    """
    Abstract base class for cursor-paginated sources.

    Responsibilities:
    - Fetch one page for a given cursor (fetch_page)
    - Walk every page in order until the source reports exhaustion (iter_pages)
    """

    def __init__(self, source_name: str):
        self.source_name = source_name

    @abstractmethod
    async def fetch_page(
        self,
        client: httpx.AsyncClient,
        after: Optional[str] = None
    ) -> IssuePage:
        """
        Fetch a single page.

        Args:
            client: Open HTTP client shared across the run
            after: Cursor returned by the previous page, None for the first page

        Returns:
            Decoded page of records
        """
        pass

    @abstractmethod
    def iter_pages(self) -> AsyncIterator[IssuePage]:
        """Yield every page in the order returned by the source"""
        pass
