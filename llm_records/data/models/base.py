"""
Declarative base shared by all table models.
"""

import time

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)
