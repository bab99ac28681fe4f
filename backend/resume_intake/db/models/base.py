"""
SQLAlchemy declarative base and shared utilities for all models.

Convention:
    - Each table lives in its own file under `resume_intake/db/models/`
    - Every model file imports `Base` from here
    - The `__init__.py` re-exports all models so `Base.metadata` sees them
    - Column types stay portable (no dialect-specific types), the same
      metadata is created on PostgreSQL and on SQLite in tests
"""

from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ─── Shared helpers ───────────────────────────
def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def applicant_fk() -> Mapped[int]:
    """`id_aspirante` column shared by every child table."""
    return mapped_column(
        Integer,
        ForeignKey("hv_aspirante.id_aspirante", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
