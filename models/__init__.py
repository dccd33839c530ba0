"""
SQLAlchemy ORM models for the destination store.

Models:
    base: Base declarative class and shared enums (ETLStatus, DuplicateIdPolicy)
    issue: The single ``issues`` table, one row per exported issue

Usage:
    from models.issue import Issue
    from models.base import Base, ETLStatus

Example:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
"""

__all__ = [
    "Base",
    "ETLStatus",
    "DuplicateIdPolicy",
    "Issue",
]
