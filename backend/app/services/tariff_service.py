"""Tariff page singleton: reads, whole-document replace, exchange update and per-entity edits."""
import logging
from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.engine import tariff_editor
from app.errors import ConflictError, NotFoundError
from app.models.tariff_page import TariffPage
from app.schemas.tariff import TariffPageUpdate
from app.services.exchange_service import require_ymd, upsert_rate

logger = logging.getLogger(__name__)


async def get_page(db: AsyncSession) -> TariffPage | None:
    result = await db.execute(select(TariffPage).order_by(TariffPage.id).limit(1))
    return result.scalar_one_or_none()


async def get_page_or_404(db: AsyncSession) -> TariffPage:
    page = await get_page(db)
    if not page:
        raise NotFoundError("Tariff page not found")
    return page


async def get_or_create_page(db: AsyncSession) -> TariffPage:
    """The singleton is created lazily on the first write, at version 0."""
    page = await get_page(db)
    if page:
        return page
    page = TariffPage(companies=[], version=0)
    db.add(page)
    await db.flush()
    await db.refresh(page)
    return page


def _check_version(page: TariffPage, expected_version: int | None) -> None:
    if expected_version is not None and expected_version != page.version:
        raise ConflictError(
            f"Tariff page has changed (version {page.version}, expected {expected_version}); reload and retry"
        )


async def _save(db: AsyncSession, page: TariffPage) -> TariffPage:
    page.version = (page.version or 0) + 1
    await db.flush()
    await db.refresh(page)
    return page


async def replace_page(db: AsyncSession, data: TariffPageUpdate, expected_version: int | None = None) -> TariffPage:
    """Replace the page with the given fields. Rows must match their table's column count."""
    page = await get_or_create_page(db)
    _check_version(page, data.version if data.version is not None else expected_version)
    fields = data.model_dump(exclude_unset=True, exclude={"version"})
    if fields.get("companies") is not None:
        tariff_editor.validate_companies(fields["companies"])
    changes = {k: v for k, v in fields.items() if v is not None and getattr(page, k) != v}
    # A freshly created page is always saved so its first version is 1
    if not changes and page.version:
        return page
    for key, value in changes.items():
        setattr(page, key, value)
    return await _save(db, page)


async def update_exchange(db: AsyncSession, exchange_date: str, exchange_rate: float) -> TariffPage:
    """Set the displayed rate/date and record it in the rate history.

    These are two separate writes. The history write runs in a savepoint so its
    failure is logged and leaves the page update in place.
    """
    require_ymd(exchange_date, "exchangeDate must be in YYYY-MM-DD format")
    page = await get_or_create_page(db)
    page.exchange_date = exchange_date
    page.exchange_rate = float(exchange_rate)
    page = await _save(db, page)
    try:
        async with db.begin_nested():
            await upsert_rate(db, exchange_date, exchange_rate)
    except SQLAlchemyError:
        logger.warning("Failed to upsert historical exchange rate for %s", exchange_date, exc_info=True)
    return page


async def set_historical_rates_flag(db: AsyncSession, allow: bool, expected_version: int | None = None) -> TariffPage:
    page = await get_or_create_page(db)
    _check_version(page, expected_version)
    page.allow_user_historical_rates = allow
    return await _save(db, page)


async def edit_companies(
    db: AsyncSession,
    edit: Callable[[list], list],
    expected_version: int | None = None,
) -> TariffPage:
    """Apply a pure companies-list edit from the tariff editor and persist it."""
    page = await get_or_create_page(db)
    _check_version(page, expected_version)
    current = page.companies or []
    updated = edit(current)
    if updated == current:
        return page
    page.companies = updated
    return await _save(db, page)


async def edit_table(
    db: AsyncSession,
    company_index: int,
    table_index: int,
    edit: Callable[[dict], dict],
    expected_version: int | None = None,
) -> TariffPage:
    def apply(companies: list) -> list:
        table = tariff_editor.get_table(companies, company_index, table_index)
        return tariff_editor.replace_table(companies, company_index, table_index, edit(table))

    return await edit_companies(db, apply, expected_version)
