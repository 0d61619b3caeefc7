"""Tariff page singleton."""
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, JSONType


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class TariffPage(Base):
    """The single tariff page document.

    ``companies`` holds ``[{name, tables: [{title, columns, rows}]}]``.
    ``version`` is bumped on every write so clients can detect concurrent edits.
    """

    __tablename__ = "tariff_pages"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    exchange_rate: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    exchange_date: Mapped[str] = mapped_column(String(10), nullable=False, default=_today)
    # Lets non-admin users query effective historical rates
    allow_user_historical_rates: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    companies: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
