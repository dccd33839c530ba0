from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class ETLStatus(str, enum.Enum):
    """Export run status"""
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class DuplicateIdPolicy(str, enum.Enum):
    """What the loader does when an issue id is staged twice"""
    FAIL = "fail"
    REPLACE = "replace"
