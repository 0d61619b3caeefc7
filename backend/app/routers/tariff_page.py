"""Tariff page API: the singleton document, the unified exchange update, and table editing."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import TariffAdmin
from app.database import get_db
from app.engine import tariff_editor
from app.models.tariff_page import TariffPage
from app.schemas.common import envelope
from app.schemas.tariff import (
    CellValue,
    ColumnCreate,
    ColumnHeader,
    CompanyName,
    ExchangeUpdate,
    HistoricalRatesFlag,
    TableCreate,
    TableResize,
    TableTitle,
    TariffPageResponse,
    TariffPageUpdate,
    TariffTableSchema,
)
from app.services import tariff_service

router = APIRouter(prefix="/tariffPage", tags=["tariff-page"])

Version = Annotated[int | None, Query(description="Version the edit is based on; 409 if stale")]


def _page_response(page: TariffPage) -> dict:
    return envelope(TariffPageResponse.model_validate(page))


@router.get("")
async def get_tariff_page(db: Annotated[AsyncSession, Depends(get_db)]):
    return _page_response(await tariff_service.get_page_or_404(db))


@router.put("")
async def replace_tariff_page(
    data: TariffPageUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    return _page_response(await tariff_service.replace_page(db, data, version))


@router.patch("/exchange")
async def update_exchange(
    data: ExchangeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
):
    page = await tariff_service.update_exchange(db, data.exchange_date, data.exchange_rate)
    return _page_response(page)


@router.patch("/settings")
async def update_settings(
    data: HistoricalRatesFlag,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.set_historical_rates_flag(db, data.allow_user_historical_rates, version)
    return _page_response(page)


# --- companies ---------------------------------------------------------------


@router.post("/companies", status_code=201)
async def add_company(
    data: CompanyName,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_companies(
        db, lambda companies: tariff_editor.add_company(companies, data.name), version
    )
    return _page_response(page)


@router.patch("/companies/{company_index}")
async def rename_company(
    company_index: int,
    data: CompanyName,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_companies(
        db, lambda companies: tariff_editor.rename_company(companies, company_index, data.name), version
    )
    return _page_response(page)


@router.delete("/companies/{company_index}")
async def delete_company(
    company_index: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_companies(
        db, lambda companies: tariff_editor.delete_company(companies, company_index), version
    )
    return _page_response(page)


# --- tables ------------------------------------------------------------------


@router.post("/companies/{company_index}/tables", status_code=201)
async def add_table(
    company_index: int,
    data: TableCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_companies(
        db, lambda companies: tariff_editor.add_table(companies, company_index, data.title), version
    )
    return _page_response(page)


@router.put("/companies/{company_index}/tables/{table_index}")
async def replace_table(
    company_index: int,
    table_index: int,
    data: TariffTableSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    table = data.model_dump()
    tariff_editor.validate_table_shape(table)
    page = await tariff_service.edit_table(db, company_index, table_index, lambda _: table, version)
    return _page_response(page)


@router.patch("/companies/{company_index}/tables/{table_index}")
async def rename_table(
    company_index: int,
    table_index: int,
    data: TableTitle,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db, company_index, table_index, lambda t: tariff_editor.set_title(t, data.title), version
    )
    return _page_response(page)


@router.delete("/companies/{company_index}/tables/{table_index}")
async def delete_table(
    company_index: int,
    table_index: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_companies(
        db, lambda companies: tariff_editor.delete_table(companies, company_index, table_index), version
    )
    return _page_response(page)


# --- rows / columns ----------------------------------------------------------


@router.post("/companies/{company_index}/tables/{table_index}/rows")
async def add_row(
    company_index: int,
    table_index: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(db, company_index, table_index, tariff_editor.add_row, version)
    return _page_response(page)


@router.delete("/companies/{company_index}/tables/{table_index}/rows/{row_index}")
async def delete_row(
    company_index: int,
    table_index: int,
    row_index: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db, company_index, table_index, lambda t: tariff_editor.delete_row(t, row_index), version
    )
    return _page_response(page)


@router.post("/companies/{company_index}/tables/{table_index}/columns")
async def add_column(
    company_index: int,
    table_index: int,
    data: ColumnCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db, company_index, table_index, lambda t: tariff_editor.add_column(t, data.header), version
    )
    return _page_response(page)


@router.patch("/companies/{company_index}/tables/{table_index}/columns/{column_index}")
async def set_column_header(
    company_index: int,
    table_index: int,
    column_index: int,
    data: ColumnHeader,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db, company_index, table_index, lambda t: tariff_editor.set_header(t, column_index, data.header), version
    )
    return _page_response(page)


@router.patch("/companies/{company_index}/tables/{table_index}/cells/{row_index}/{column_index}")
async def set_cell(
    company_index: int,
    table_index: int,
    row_index: int,
    column_index: int,
    data: CellValue,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db,
        company_index,
        table_index,
        lambda t: tariff_editor.set_cell(t, row_index, column_index, data.value),
        version,
    )
    return _page_response(page)


@router.delete("/companies/{company_index}/tables/{table_index}/columns/{column_index}")
async def delete_column(
    company_index: int,
    table_index: int,
    column_index: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db, company_index, table_index, lambda t: tariff_editor.delete_column(t, column_index), version
    )
    return _page_response(page)


@router.post("/companies/{company_index}/tables/{table_index}/resize")
async def resize_table(
    company_index: int,
    table_index: int,
    data: TableResize,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: TariffAdmin,
    version: Version = None,
):
    page = await tariff_service.edit_table(
        db, company_index, table_index, lambda t: tariff_editor.resize(t, data.rows, data.cols), version
    )
    return _page_response(page)
