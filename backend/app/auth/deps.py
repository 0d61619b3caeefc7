"""Auth dependencies for FastAPI."""
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import decode_token
from app.auth.rbac import can_manage_content, can_manage_tariffs
from app.database import get_db
from app.errors import AuthError, ForbiddenError
from app.models.user import User

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    if not credentials:
        raise AuthError("Not authorized, no token")
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id or not str(user_id).isdigit():
        raise AuthError("Invalid token")
    user = await db.get(User, int(user_id))
    if not user:
        raise AuthError("User not found")
    return user


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not can_manage_content(user.role):
        raise ForbiddenError(f"User role '{user.role}' is not authorized to access this route")
    return user


async def require_tariff_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not can_manage_tariffs(user.role):
        raise ForbiddenError(f"User role '{user.role}' is not authorized to access this route")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
TariffAdmin = Annotated[User, Depends(require_tariff_admin)]
