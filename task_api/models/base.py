from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite stores datetimes without an offset."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def timestamp_field():
    # Plain DateTime column: naive UTC in, naive UTC out, on every SQLModel release
    return Field(default_factory=utcnow, nullable=False, sa_type=DateTime(timezone=False))
