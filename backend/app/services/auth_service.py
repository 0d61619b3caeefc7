"""Authentication service."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import get_password_hash, verify_password
from app.auth.rbac import Role
from app.config import get_settings
from app.errors import AuthError, ValidationError
from app.models.user import User
from app.schemas.auth import AdminCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def authenticate_user(db: AsyncSession, data: UserLogin) -> User:
    """Return the user for valid credentials, else raise AuthError."""
    user = await get_user_by_email(db, data.email)
    if not user or not verify_password(data.password, user.hashed_password):
        raise AuthError("Invalid credentials")
    return user


async def create_admin(db: AsyncSession, data: AdminCreate) -> User:
    """Create an admin account. Guarded by the shared admin creation key."""
    settings = get_settings()
    if not settings.admin_creation_key or data.admin_key != settings.admin_creation_key:
        raise AuthError("Unauthorized - Invalid admin creation key")
    if await get_user_by_email(db, data.email):
        raise ValidationError("User already exists")
    user = User(
        email=data.email,
        hashed_password=get_password_hash(data.password),
        role=Role.ADMIN.value,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Created admin %s", user.email)
    return user


async def seed_admin(db: AsyncSession) -> User | None:
    """Ensure the configured admin exists; promote an existing user if needed."""
    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        logger.warning("seed_admin: ADMIN_EMAIL or ADMIN_PASSWORD not set - skipping admin seeding")
        return None
    email = settings.admin_email.strip().lower()
    user = await get_user_by_email(db, email)
    if user:
        if user.role != Role.ADMIN.value:
            user.role = Role.ADMIN.value
            logger.info("seed_admin: promoted existing user %s to admin", email)
        else:
            logger.info("seed_admin: admin %s already exists", email)
        return user
    user = User(
        email=email,
        hashed_password=get_password_hash(settings.admin_password),
        role=Role.ADMIN.value,
    )
    db.add(user)
    await db.flush()
    logger.info("seed_admin: created admin %s", email)
    return user


def user_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, email=user.email, role=user.role)
