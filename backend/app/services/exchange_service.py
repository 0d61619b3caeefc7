"""Exchange rate history and effective-date resolution."""
import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.exchange_rate import ExchangeRate
from app.models.tariff_page import TariffPage
from app.schemas.exchange_rate import EffectiveRate

_YMD = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_LIST_LIMIT = 30


def is_ymd(value: str | None) -> bool:
    return bool(value) and bool(_YMD.match(value))


def require_ymd(value: str | None, message: str = "date must be YYYY-MM-DD") -> str:
    if not is_ymd(value):
        raise ValidationError(message)
    return value


async def get_rate_for_date(db: AsyncSession, date: str) -> ExchangeRate:
    require_ymd(date)
    result = await db.execute(select(ExchangeRate).where(ExchangeRate.date == date))
    rate = result.scalar_one_or_none()
    if not rate:
        raise NotFoundError("No exchange rate found for date")
    return rate


async def list_rates(db: AsyncSession, date_from: str | None = None, date_to: str | None = None) -> list[ExchangeRate]:
    """Without bounds: the latest 30 records, newest first. With bounds: inclusive range, oldest first."""
    if not date_from and not date_to:
        result = await db.execute(
            select(ExchangeRate).order_by(ExchangeRate.date.desc()).limit(DEFAULT_LIST_LIMIT)
        )
        return list(result.scalars().all())
    if (date_from and not is_ymd(date_from)) or (date_to and not is_ymd(date_to)):
        raise ValidationError("from/to must be YYYY-MM-DD")
    q = select(ExchangeRate)
    if date_from:
        q = q.where(ExchangeRate.date >= date_from)
    if date_to:
        q = q.where(ExchangeRate.date <= date_to)
    result = await db.execute(q.order_by(ExchangeRate.date.asc()))
    return list(result.scalars().all())


async def get_effective_rate(db: AsyncSession, date: str) -> EffectiveRate:
    """Latest saved rate on or before ``date``.

    The fixed-width YYYY-MM-DD format orders lexicographically the same as
    chronologically, so a plain string comparison is a date comparison.
    """
    require_ymd(date)
    result = await db.execute(
        select(ExchangeRate)
        .where(ExchangeRate.date <= date)
        .order_by(ExchangeRate.date.desc())
        .limit(1)
    )
    rate = result.scalar_one_or_none()
    if not rate:
        raise NotFoundError("No rate found on or before requested date")
    return EffectiveRate(requested_date=date, source_date=rate.date, rate=rate.rate)


async def get_effective_rate_public(db: AsyncSession, date: str) -> EffectiveRate:
    """Effective rate for non-admin callers, only while the tariff page allows it."""
    require_ymd(date)
    result = await db.execute(select(TariffPage).order_by(TariffPage.id).limit(1))
    page = result.scalar_one_or_none()
    if not page or not page.allow_user_historical_rates:
        raise ForbiddenError("Historical rates are not available")
    return await get_effective_rate(db, date)


async def upsert_rate(db: AsyncSession, date: str, rate: float) -> ExchangeRate:
    """Create or overwrite the record for ``date``. Saving the same pair twice is a no-op."""
    require_ymd(date, "date (YYYY-MM-DD) is required")
    if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
        raise ValidationError("rate must be a positive number")
    result = await db.execute(select(ExchangeRate).where(ExchangeRate.date == date))
    record = result.scalar_one_or_none()
    if record:
        record.rate = float(rate)
    else:
        record = ExchangeRate(date=date, rate=float(rate))
        db.add(record)
    await db.flush()
    await db.refresh(record)
    return record
