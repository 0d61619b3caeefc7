"""Role-based access control."""
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


def is_admin(role: str | None) -> bool:
    return (role or "").lower() == Role.ADMIN.value


def can_manage_content(role: str | None) -> bool:
    """Gallery, blogs, categories, documents and schedule uploads."""
    return is_admin(role)


def can_manage_tariffs(role: str | None) -> bool:
    """Tariff tables, exchange rates and the historical-rates flag."""
    return is_admin(role)
