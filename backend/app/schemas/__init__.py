"""Pydantic schemas."""
from app.schemas.auth import AdminCreate, UserLogin, UserResponse
from app.schemas.common import ApiModel, envelope
from app.schemas.content import (
    BlogPostResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    DownloadDocResponse,
    GalleryItemResponse,
    ScheduleFileResponse,
)
from app.schemas.exchange_rate import EffectiveRate, ExchangeRateCreate, ExchangeRateResponse
from app.schemas.tariff import (
    CompanySchema,
    ExchangeUpdate,
    TariffPageResponse,
    TariffPageUpdate,
    TariffTableSchema,
)

__all__ = [
    "AdminCreate",
    "UserLogin",
    "UserResponse",
    "ApiModel",
    "envelope",
    "BlogPostResponse",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "DownloadDocResponse",
    "GalleryItemResponse",
    "ScheduleFileResponse",
    "EffectiveRate",
    "ExchangeRateCreate",
    "ExchangeRateResponse",
    "CompanySchema",
    "ExchangeUpdate",
    "TariffPageResponse",
    "TariffPageUpdate",
    "TariffTableSchema",
]
