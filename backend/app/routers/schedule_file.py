"""Vessel schedule file API. Only the latest upload is kept."""
from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import AdminUser
from app.database import get_db
from app.errors import ValidationError
from app.models.document import ScheduleFile
from app.schemas.common import envelope
from app.schemas.content import ScheduleFileResponse
from app.services.storage import delete_upload, save_upload

router = APIRouter(prefix="/schedule-file", tags=["schedule-file"])


@router.get("")
async def get_schedule_file(db: Annotated[AsyncSession, Depends(get_db)]):
    result = await db.execute(
        select(ScheduleFile).order_by(ScheduleFile.created_at.desc(), ScheduleFile.id.desc()).limit(1)
    )
    current = result.scalar_one_or_none()
    return envelope(ScheduleFileResponse.model_validate(current) if current else None)


@router.post("", status_code=201)
async def upload_schedule_file(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
    file: Annotated[UploadFile | None, File()] = None,
):
    if file is None:
        raise ValidationError("No file uploaded")
    stored = await save_upload(file, "file", str(request.base_url))
    result = await db.execute(select(ScheduleFile))
    for old in result.scalars().all():
        delete_upload(old.file_url)
        await db.delete(old)
    schedule = ScheduleFile(
        file_name=stored.original_name,
        file_url=stored.url,
        file_type=stored.content_type,
        uploaded_by=user.id,
    )
    db.add(schedule)
    await db.flush()
    await db.refresh(schedule)
    return envelope(ScheduleFileResponse.model_validate(schedule))
