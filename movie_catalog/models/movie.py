"""Database model for catalog entries."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.db.base import Base, utcnow
from movie_catalog.models.user import User


class Movie(Base):
    """Movie record owned by the user who created it."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    genres: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    # Read-only link used to show the creator's name; users keep no list of movies.
    owner: Mapped[User] = relationship("User", viewonly=True)

    def to_form_data(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "year": self.year,
            "genres": list(self.genres or []),
            "rating": self.rating,
        }
