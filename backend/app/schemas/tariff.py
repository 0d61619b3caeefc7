"""Tariff page schemas."""
from datetime import datetime

from pydantic import Field

from app.schemas.common import YMD_PATTERN, ApiModel

Cell = str | int | float


class TariffTableSchema(ApiModel):
    title: str
    columns: list[str] = []
    rows: list[list[Cell]] = []


class CompanySchema(ApiModel):
    name: str
    tables: list[TariffTableSchema] = []


class TariffPageResponse(ApiModel):
    id: int
    exchange_rate: float
    exchange_date: str
    allow_user_historical_rates: bool
    companies: list[CompanySchema]
    version: int
    updated_at: datetime | None = None


class TariffPageUpdate(ApiModel):
    """Whole-document replace. Unknown keys (_id, __v, timestamps) are ignored."""

    exchange_rate: float | None = Field(None, gt=0, strict=True)
    exchange_date: str | None = Field(None, pattern=YMD_PATTERN)
    allow_user_historical_rates: bool | None = None
    companies: list[CompanySchema] | None = None
    version: int | None = None


class ExchangeUpdate(ApiModel):
    exchange_date: str = Field(..., pattern=YMD_PATTERN)
    exchange_rate: float = Field(..., gt=0, strict=True)


class HistoricalRatesFlag(ApiModel):
    allow_user_historical_rates: bool


class CompanyName(ApiModel):
    name: str


class TableCreate(ApiModel):
    title: str | None = None


class ColumnCreate(ApiModel):
    header: str | None = None


class TableResize(ApiModel):
    rows: int
    cols: int


class TableTitle(ApiModel):
    title: str


class ColumnHeader(ApiModel):
    header: str


class CellValue(ApiModel):
    value: Cell
