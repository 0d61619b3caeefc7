"""Content categories API."""
import re
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import AdminUser
from app.database import get_db
from app.errors import NotFoundError, ValidationError
from app.models.category import Category, CategoryType
from app.schemas.common import envelope
from app.schemas.content import CategoryCreate, CategoryResponse, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["categories"])


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")


async def _get_by_slug(db: AsyncSession, slug: str) -> Category:
    result = await db.execute(select(Category).where(Category.slug == slug.lower()))
    category = result.scalar_one_or_none()
    if not category:
        raise NotFoundError("Category not found")
    return category


@router.get("")
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_db)],
    type: CategoryType | None = Query(None),
):
    q = select(Category).order_by(Category.name)
    if type:
        q = q.where(Category.type == type.value)
    result = await db.execute(q)
    items = [CategoryResponse.model_validate(c) for c in result.scalars().all()]
    return envelope(items, count=len(items))


@router.post("", status_code=201)
async def create_category(
    data: CategoryCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
):
    slug = slugify(data.slug or data.name)
    if not slug:
        raise ValidationError("Category slug cannot be empty")
    existing = await db.execute(select(Category).where(Category.slug == slug))
    if existing.scalar_one_or_none():
        raise ValidationError("Category already exists")
    category = Category(name=data.name.strip(), slug=slug, type=data.type, created_by=user.id)
    db.add(category)
    await db.flush()
    await db.refresh(category)
    return envelope(CategoryResponse.model_validate(category))


@router.put("/{slug}")
async def update_category(
    slug: str,
    data: CategoryUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
):
    category = await _get_by_slug(db, slug)
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is not None:
            setattr(category, k, v.strip() if isinstance(v, str) else v)
    await db.flush()
    await db.refresh(category)
    return envelope(CategoryResponse.model_validate(category))


@router.delete("/{slug}")
async def delete_category(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
):
    category = await _get_by_slug(db, slug)
    await db.delete(category)
    return {"success": True, "message": "Category deleted successfully"}
