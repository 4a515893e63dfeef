from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from ninja_api.db.base import Base, IntegerPkMixin


DEFAULT_STATUS = "Active"


class Ninja(IntegerPkMixin, Base):
    """Ninja registry record."""
    __tablename__ = "ninja"
    # AUTOINCREMENT keeps SQLite from reusing the ids of deleted rows.
    __table_args__ = {"sqlite_autoincrement": True}

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    village: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    clan: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    rank: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # Genin/Chunin/Jounin/Kage
    chakra_type: Mapped[str] = mapped_column(String(30), nullable=False)
    specialty: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    bloodline_trait: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[Optional[str]] = mapped_column(
        String(20), nullable=True, default=DEFAULT_STATUS, server_default=DEFAULT_STATUS
    )  # Active/Missing/Rogue
    strength_level: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    registration_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, default=date.today, server_default=text("CURRENT_DATE")
    )

    def __repr__(self) -> str:
        return f"Ninja(id={self.id!r}, name={self.name!r}, village={self.village!r}, rank={self.rank!r})"
