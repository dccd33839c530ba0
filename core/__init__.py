"""
Core utilities and configuration for the Linear issue export.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Settings loaded from environment variables and .env
    database: SQLite engine and session factory helpers
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration

Usage:
    from core.config import load_settings
    from core.database import create_engine_for_path
    from core.exceptions import APIExtractionError, NetworkError
    from core.logging import setup_logging

Example:
    settings = load_settings(LINEAR_API_KEY="lin_api_...")
    setup_logging(settings.LOG_LEVEL)
"""

__all__ = [
    "Settings",
    "load_settings",
    "setup_logging",
    "create_engine_for_path",
    "create_session_maker",
    # Exceptions
    "ETLException",
    "ConfigurationError",
    "ExtractionError",
    "APIExtractionError",
    "NetworkError",
    "AuthenticationError",
    "ResponseDecodeError",
    "GraphQLResponseError",
    "LoadError",
    "StoreInitializationError",
    "DatabaseError",
    "IntegrityViolationError",
]
