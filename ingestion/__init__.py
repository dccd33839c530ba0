"""
ETL pipeline components for the Linear issue export.

This package contains all components for the Extract-Transform-Load pipeline:

Modules:
    base: Abstract base class for cursor-paginated sources
    runner: Export orchestrator that stages every page and commits once

Subpackages:
    extractors: Linear GraphQL extractor (page fetch and cursor loop)
    transformers: Issue node to flat row mapping
    loaders: SQLite loader with a single run-wide transaction

Architecture:
    The export follows a three-phase approach per page:

    1. Extract - Fetch one page of issues for the current cursor
    2. Transform - Map each issue to a flat row
    3. Load - Stage the row in the open transaction

    The transaction is committed only after the last page; any error skips
    the commit, so the store never holds a partial export.

Usage:
    from ingestion.extractors.linear_extractor import LinearExtractor
    from ingestion.loaders.sqlite_loader import SQLiteLoader
    from ingestion.runner import ExportRunner

Example:
    extractor = LinearExtractor(api_key="lin_api_...")
    loader = SQLiteLoader("./issues.db")

    result = await ExportRunner(extractor, loader).run()

    print(f"Loaded {result.records_loaded} issues")
"""

__all__ = [
    "DataSource",
    "ExportRunner",
    "LinearExtractor",
    "IssueMapper",
    "SQLiteLoader",
]
