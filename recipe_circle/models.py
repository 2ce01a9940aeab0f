import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, DateTime, Integer, LargeBinary, String, Text,
)

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (sqlite drops tzinfo on reload)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(String(36), primary_key=True, index=True, default=new_id)
    title = Column(String(200), nullable=True, index=True)
    ingredients = Column(Text, nullable=True)  # newline-delimited
    instructions = Column(Text, nullable=True)  # newline-delimited
    category = Column(String(100), nullable=True, index=True)
    difficulty = Column(String(50), nullable=True)
    cooking_time = Column(Integer, nullable=False, default=0)
    prep_time = Column(Integer, nullable=False, default=0)
    # written on create/update only, never computed on read
    total_time = Column(Integer, nullable=False, default=0)
    servings = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)
    tags = Column(Text, nullable=True)  # comma-separated, untrimmed
    image_data = Column(LargeBinary, nullable=True)
    is_favorite = Column(Boolean, nullable=False, default=False)
    date_created = Column(DateTime(timezone=True), nullable=True)
    date_modified = Column(DateTime(timezone=True), nullable=True)

    def recompute_total_time(self):
        self.total_time = (self.cooking_time or 0) + (self.prep_time or 0)

    def __repr__(self):
        return f"<Recipe {self.id} {self.title!r}>"
