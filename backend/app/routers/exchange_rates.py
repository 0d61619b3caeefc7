"""Exchange rate history API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import TariffAdmin
from app.database import get_db
from app.schemas.common import envelope
from app.schemas.exchange_rate import ExchangeRateCreate, ExchangeRateResponse
from app.services import exchange_service

router = APIRouter(prefix="/exchange-rates", tags=["exchange-rates"])


@router.get("")
async def list_exchange_rates(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
):
    rates = await exchange_service.list_rates(db, date_from, date_to)
    return envelope([ExchangeRateResponse.model_validate(r) for r in rates])


@router.post("")
async def upsert_exchange_rate(
    data: ExchangeRateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
):
    rate = await exchange_service.upsert_rate(db, data.date, data.rate)
    return envelope(ExchangeRateResponse.model_validate(rate))


# Registered before "/{date}" so the literal path segments win
@router.get("/effective-public/{date}")
async def get_effective_rate_public(
    date: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return envelope(await exchange_service.get_effective_rate_public(db, date))


@router.get("/effective/{date}")
async def get_effective_rate(
    date: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
):
    return envelope(await exchange_service.get_effective_rate(db, date))


@router.get("/{date}")
async def get_exchange_rate(
    date: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
):
    rate = await exchange_service.get_rate_for_date(db, date)
    return envelope(ExchangeRateResponse.model_validate(rate))
