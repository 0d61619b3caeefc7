"""Auth schemas."""
from pydantic import EmailStr, Field, field_validator

from app.schemas.common import ApiModel


class UserLogin(ApiModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AdminCreate(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    admin_key: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(ApiModel):
    id: int
    email: str
    role: str
