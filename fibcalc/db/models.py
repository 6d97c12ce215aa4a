# =============================================================================
# Database Models: SQLAlchemy ORM
# =============================================================================
#
# ┌──────────────────────────┐
# │  values                  │
# ├──────────────────────────┤
# │ id (PK, serial)          │  insertion order
# │ number (int)             │  the submitted index
# │ created_at (timestamptz) │
# └──────────────────────────┘
#
# Append-only: rows are inserted by the Submission Gateway and never
# updated or deleted. Duplicate numbers are expected.
# =============================================================================

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class SubmittedValue(Base):
    """One accepted index submission."""

    __tablename__ = "values"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    number: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SubmittedValue(id={self.id}, number={self.number})>"
