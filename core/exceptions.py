"""
Custom exceptions for the issue export pipeline with structured error context.

Every error in the export is fatal: there is no retry path, so the hierarchy
only distinguishes where a failure happened, not whether it may be retried.

Exception Hierarchy:
    ETLException (base)
    ├── ConfigurationError
    ├── ExtractionError
    │   └── APIExtractionError
    │       ├── NetworkError
    │       ├── AuthenticationError
    │       ├── ResponseDecodeError
    │       └── GraphQLResponseError
    └── LoadError
        ├── StoreInitializationError
        └── DatabaseError
            └── IntegrityViolationError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ETLException(Exception):
    """
    Base exception for all export errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (endpoint, cursor, table, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(ETLException):
    """
    Raised before any network or store activity when settings are unusable.

    Context should include:
        - setting: Name of the offending setting (e.g. LINEAR_API_KEY)
    """
    pass


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(ETLException):
    """Base exception for data extraction failures."""
    pass


class APIExtractionError(ExtractionError):
    """
    Exception raised when a page request against the API fails.

    Context should include:
        - api_url: The API endpoint that failed
        - after: Cursor the failing page was requested with
        - status_code: HTTP status code (if applicable)
        - response_body: Response body (truncated if large)
    """
    pass


class NetworkError(APIExtractionError):
    """Transport-level failure (connection, timeout, protocol)."""
    pass


class AuthenticationError(APIExtractionError):
    """Authentication failures (HTTP 401, 403)."""
    pass


class ResponseDecodeError(APIExtractionError):
    """Response body is not JSON or does not have the expected page shape."""
    pass


class GraphQLResponseError(APIExtractionError):
    """
    The API answered with a GraphQL ``errors`` array.

    Context should include:
        - errors: Messages reported by the API
    """
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(ETLException):
    """Base exception for data loading failures."""
    pass


class StoreInitializationError(LoadError):
    """
    Exception raised when the destination store cannot be recreated.

    Context should include:
        - database_path: Location of the store
        - operation: Step that failed (remove, create_engine, create_schema)
    """
    pass


class DatabaseError(LoadError):
    """
    Exception raised when database operations fail.

    Context should include:
        - operation: Type of database operation (INSERT, COMMIT)
        - table_name: Name of the table
    """
    pass


class IntegrityViolationError(DatabaseError):
    """
    A staged row violates the destination schema.

    Context should include:
        - record_id: ID of the offending record
        - constraint_name: Violated constraint (primary key)
    """
    pass
