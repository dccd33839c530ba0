"""
Export every Linear issue into a fresh SQLite file
"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from core.config import load_settings
from core.exceptions import ConfigurationError
from core.logging import setup_logging
from ingestion.extractors.linear_extractor import LinearExtractor
from ingestion.loaders.sqlite_loader import SQLiteLoader
from ingestion.runner import ExportRunner
from schemas.export import ExportResult

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export all Linear issues into a SQLite database"
    )
    parser.add_argument(
        "api_key",
        nargs="?",
        help="Linear API key (default: LINEAR_API_KEY from the environment or .env)",
    )
    parser.add_argument("--database", help="Destination SQLite file (default: ./issues.db)")
    parser.add_argument("--page-size", type=int, help="Issues per request (1-250, default: 150)")
    parser.add_argument(
        "--duplicate-ids",
        choices=["fail", "replace"],
        help="Abort on a repeated issue id, or keep the last copy (default: fail)",
    )
    parser.add_argument(
        "--log-level",
        help=(
            "DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO). "
            "Cursor and success lines are logged at INFO, so WARNING and above hide them"
        ),
    )
    return parser


async def run_export(extractor: LinearExtractor, loader: SQLiteLoader) -> ExportResult:
    """Run one export"""
    logger.info("Getting all data from Linear...")
    result = await ExportRunner(extractor, loader).run()

    if result.succeeded:
        logger.info("Data loaded successfully!")
    return result


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            LINEAR_API_KEY=args.api_key,
            DATABASE_PATH=args.database,
            PAGE_SIZE=args.page_size,
            DUPLICATE_ID_POLICY=args.duplicate_ids,
            LOG_LEVEL=args.log_level,
        )
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field_path = ".".join(str(x) for x in error["loc"])
            print(f"  {field_path}: {error['msg']}", file=sys.stderr)
        return 1

    setup_logging(settings.LOG_LEVEL)

    # Credential check happens before any store or network activity
    try:
        extractor = LinearExtractor(
            api_key=settings.LINEAR_API_KEY,
            api_url=settings.LINEAR_API_URL,
            page_size=settings.PAGE_SIZE,
            timeout=settings.REQUEST_TIMEOUT,
        )
    except ConfigurationError as e:
        print(f"{e.message}. Pass it as the first argument or set LINEAR_API_KEY.", file=sys.stderr)
        return 1

    loader = SQLiteLoader(
        settings.DATABASE_PATH,
        duplicate_id_policy=settings.DUPLICATE_ID_POLICY,
    )

    result = asyncio.run(run_export(extractor, loader))

    if not result.succeeded:
        error = result.error or {}
        print(
            f"Export failed: {error.get('error_type')}: {error.get('message')}",
            file=sys.stderr,
        )
        if error.get("original_error"):
            print(f"Caused by: {error['original_error']}", file=sys.stderr)
        return 1

    logger.info("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
