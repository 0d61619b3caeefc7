"""Exchange rate schemas."""
from datetime import datetime

from pydantic import Field

from app.schemas.common import YMD_PATTERN, ApiModel


class ExchangeRateCreate(ApiModel):
    date: str = Field(..., pattern=YMD_PATTERN)
    rate: float = Field(..., gt=0, strict=True)


class ExchangeRateResponse(ApiModel):
    id: int
    date: str
    rate: float
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EffectiveRate(ApiModel):
    requested_date: str
    source_date: str
    rate: float
