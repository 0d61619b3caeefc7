"""Download center documents API."""
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import AdminUser
from app.database import get_db
from app.errors import NotFoundError, ValidationError
from app.models.document import DocCategory, DownloadDoc
from app.schemas.common import envelope
from app.schemas.content import DownloadDocResponse
from app.services.storage import delete_upload, save_upload

router = APIRouter(prefix="/download-docs", tags=["download-docs"])


async def _list(db: AsyncSession, category: DocCategory | None) -> dict:
    q = select(DownloadDoc).order_by(DownloadDoc.created_at.desc(), DownloadDoc.id.desc())
    if category:
        q = q.where(DownloadDoc.category == category.value)
    result = await db.execute(q)
    items = [DownloadDocResponse.model_validate(d) for d in result.scalars().all()]
    return envelope(items, count=len(items))


@router.get("")
async def list_docs(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: DocCategory | None = Query(None),
):
    return await _list(db, category)


@router.get("/category/{category}")
async def list_docs_by_category(category: DocCategory, db: Annotated[AsyncSession, Depends(get_db)]):
    return await _list(db, category)


@router.post("", status_code=201)
async def upload_doc(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
    title: Annotated[str, Form(min_length=1)],
    category: Annotated[DocCategory, Form()],
    file: Annotated[UploadFile | None, File()] = None,
):
    if file is None:
        raise ValidationError("Please upload a file")
    stored = await save_upload(file, "file", str(request.base_url))
    doc = DownloadDoc(
        title=title.strip(),
        category=category.value,
        file_name=stored.original_name,
        file_url=stored.url,
        file_type=stored.content_type,
        uploaded_by=user.id,
    )
    db.add(doc)
    await db.flush()
    await db.refresh(doc)
    return envelope(DownloadDocResponse.model_validate(doc))


@router.delete("/{doc_id}")
async def delete_doc(
    doc_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
):
    doc = await db.get(DownloadDoc, doc_id)
    if not doc:
        raise NotFoundError("Document not found")
    delete_upload(doc.file_url)
    await db.delete(doc)
    return {"success": True, "message": "Document removed"}
