"""Gallery API."""
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import AdminUser
from app.database import get_db
from app.errors import NotFoundError, ValidationError
from app.models.gallery import GalleryItem
from app.schemas.common import envelope
from app.schemas.content import GalleryItemResponse
from app.services.storage import save_upload

router = APIRouter(prefix="/gallery", tags=["gallery"])


async def _get_item(db: AsyncSession, item_id: int) -> GalleryItem:
    item = await db.get(GalleryItem, item_id)
    if not item:
        raise NotFoundError("Gallery image not found")
    return item


@router.get("")
async def list_gallery(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: str | None = Query(None),
):
    q = select(GalleryItem).order_by(GalleryItem.created_at.desc(), GalleryItem.id.desc())
    if category and category != "all":
        q = q.where(GalleryItem.category == category)
    result = await db.execute(q)
    items = [GalleryItemResponse.model_validate(i) for i in result.scalars().all()]
    return envelope(items, count=len(items))


@router.get("/{item_id}")
async def get_gallery_item(item_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    return envelope(GalleryItemResponse.model_validate(await _get_item(db, item_id)))


@router.post("", status_code=201)
async def create_gallery_item(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
    title: Annotated[str, Form(max_length=100)],
    description: Annotated[str, Form(max_length=500)],
    category: Annotated[str, Form()],
    image: Annotated[UploadFile | None, File()] = None,
):
    if not title.strip() or not description.strip() or not category.strip():
        raise ValidationError("Missing fields")
    if image is None:
        raise ValidationError("No file uploaded")
    stored = await save_upload(image, "image", str(request.base_url))
    item = GalleryItem(
        title=title.strip(),
        description=description,
        image_url=stored.url,
        category=category.strip(),
        uploaded_by=user.id,
    )
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return envelope(GalleryItemResponse.model_validate(item))


@router.put("/{item_id}")
async def update_gallery_item(
    item_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
    title: Annotated[str | None, Form(max_length=100)] = None,
    description: Annotated[str | None, Form(max_length=500)] = None,
    category: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    item = await _get_item(db, item_id)
    if title:
        item.title = title.strip()
    if description:
        item.description = description
    if category:
        item.category = category.strip()
    if image is not None:
        stored = await save_upload(image, "image", str(request.base_url))
        item.image_url = stored.url
    await db.flush()
    await db.refresh(item)
    return envelope(GalleryItemResponse.model_validate(item))


@router.delete("/{item_id}")
async def delete_gallery_item(
    item_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
):
    item = await _get_item(db, item_id)
    await db.delete(item)
    return {"success": True, "message": "Gallery image deleted successfully"}
