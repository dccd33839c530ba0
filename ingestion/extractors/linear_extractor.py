"""
Linear GraphQL issues extractor.

This module provides the two extraction halves of an export:
- fetch_page: one authenticated GraphQL POST for a single page of issues
- iter_pages: the cursor loop that walks every page in order

Requests are never retried; every error is raised to the runner.
"""

import httpx
from typing import AsyncIterator, Optional
from pydantic import ValidationError
from ingestion.base import DataSource
from schemas.linear import IssuePage, IssuesResponse
from core.exceptions import (
    APIExtractionError,
    AuthenticationError,
    ConfigurationError,
    GraphQLResponseError,
    NetworkError,
    ResponseDecodeError
)
import logging

logger = logging.getLogger(__name__)


LINEAR_API_URL = "https://api.linear.app/graphql"
DEFAULT_PAGE_SIZE = 150

ISSUES_QUERY = """
query Issues($first: Int!, $after: String) {
  issues(first: $first, after: $after) {
    nodes {
      id
      title
      createdAt
      completedAt
      startedAt
      number
      estimate
      canceledAt
      state {
        name
      }
      labels {
        nodes {
          name
        }
      }
      project {
        name
      }
      creator {
        displayName
      }
      assignee {
        displayName
      }
      description
      url
      cycle {
        number
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""


class LinearExtractor(DataSource):
    """
    Extract every issue from the Linear GraphQL API.

    Features:
    - Raw API key authentication (Linear personal keys are not Bearer tokens)
    - Cursor pagination with a fixed page size
    - Response validation against the IssuesResponse schema

    Attributes:
        api_url: GraphQL endpoint
        page_size: Issues requested per page (default: 150)
        timeout: Request timeout in seconds (default: 30.0)
        transport: Optional httpx transport, used to mock the API in tests
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = LINEAR_API_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        source_name: str = "linear_issues"
    ):
        super().__init__(source_name=source_name)

        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "A Linear API key is required",
                context={"setting": "LINEAR_API_KEY"}
            )

        self.api_key = api_key.strip()
        self.api_url = api_url
        self.page_size = page_size
        self.timeout = timeout
        self.transport = transport

    def _headers(self):
        return {
            "Authorization": self.api_key,
            "Content-Type": "application/json"
        }

    def build_request_body(self, after: Optional[str] = None):
        """GraphQL request document for one page"""
        return {
            "query": ISSUES_QUERY,
            "variables": {
                "first": self.page_size,
                "after": after
            }
        }

    async def fetch_page(
        self,
        client: httpx.AsyncClient,
        after: Optional[str] = None
    ) -> IssuePage:
        """
        Request one page of issues.

        Args:
            client: Open HTTP client
            after: Cursor of the previous page, None for the first page

        Returns:
            Decoded IssuePage

        Raises:
            NetworkError: Transport failure or timeout
            AuthenticationError: HTTP 401/403
            APIExtractionError: Any other HTTP error status
            ResponseDecodeError: Body is not JSON or not an issues page
            GraphQLResponseError: The API reported GraphQL errors
        """
        context = {"api_url": self.api_url, "after": after}

        try:
            response = await client.post(
                self.api_url,
                json=self.build_request_body(after),
                headers=self._headers(),
                timeout=self.timeout
            )
        except httpx.TransportError as e:
            raise NetworkError(
                f"Request to {self.api_url} failed",
                context=context,
                original_exception=e
            )

        if response.status_code in (401, 403):
            raise AuthenticationError(
                "Linear rejected the API key",
                context={**context, "status_code": response.status_code}
            )

        if response.status_code >= 400:
            raise APIExtractionError(
                f"Linear returned HTTP {response.status_code}",
                context={
                    **context,
                    "status_code": response.status_code,
                    "response_body": response.text[:500]  # Truncate
                }
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                "Failed to parse JSON response",
                context={**context, "response_body": response.text[:500]},
                original_exception=e
            )

        try:
            envelope = IssuesResponse.model_validate(body)
        except ValidationError as e:
            raise ResponseDecodeError(
                "Response does not match the issues page shape",
                context=context,
                original_exception=e
            )

        if envelope.errors:
            raise GraphQLResponseError(
                "Linear reported GraphQL errors",
                context={
                    **context,
                    "errors": [err.get("message", str(err)) for err in envelope.errors]
                }
            )

        if envelope.data is None:
            raise ResponseDecodeError("Response has no data", context=context)

        page = envelope.data.issues

        # A page that claims more results must tell us where to resume
        if page.page_info.has_next_page and not page.page_info.end_cursor:
            raise ResponseDecodeError(
                "hasNextPage is true but endCursor is missing",
                context=context
            )

        logger.debug(f"Fetched {len(page.nodes)} issues (after={after})")
        return page

    async def iter_pages(self) -> AsyncIterator[IssuePage]:
        """
        Walk all pages, requesting the next one only after the caller has
        consumed the current one.

        The first request carries after=None; every later request carries the
        endCursor of the page before it. Iteration stops on the first page
        with hasNextPage = false.
        """
        after: Optional[str] = None
        page_number = 0

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                page_number += 1
                logger.debug(f"Fetching page {page_number} from {self.api_url}")

                page = await self.fetch_page(client, after)
                logger.info(f"Cursor: {page.page_info.end_cursor or ''}")

                yield page

                if not page.page_info.has_next_page:
                    break

                after = page.page_info.end_cursor

        logger.info(f"Fetched {page_number} pages from {self.source_name}")
