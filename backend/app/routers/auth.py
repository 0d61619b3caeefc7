"""Auth API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import CurrentUser
from app.auth.jwt import create_access_token
from app.database import get_db
from app.schemas.auth import AdminCreate, UserLogin
from app.schemas.common import envelope
from app.services.auth_service import authenticate_user, create_admin, user_to_response

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    data: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await authenticate_user(db, data)
    token = create_access_token(user.id)
    return envelope(user_to_response(user), token=token)


@router.post("/create-admin", status_code=201)
async def create_admin_user(
    data: AdminCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await create_admin(db, data)
    token = create_access_token(user.id)
    return envelope(user_to_response(user), token=token)


@router.get("/me")
async def me(user: CurrentUser):
    return envelope(user_to_response(user))
