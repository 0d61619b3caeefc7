"""SQLAlchemy models."""
from app.models.blog import BlogPost
from app.models.category import Category, CategoryType
from app.models.document import DocCategory, DownloadDoc, ScheduleFile
from app.models.exchange_rate import ExchangeRate
from app.models.gallery import GalleryItem
from app.models.tariff_page import TariffPage
from app.models.user import User

__all__ = [
    "BlogPost",
    "Category",
    "CategoryType",
    "DocCategory",
    "DownloadDoc",
    "ExchangeRate",
    "GalleryItem",
    "ScheduleFile",
    "TariffPage",
    "User",
]
