"""Schemas for site content: categories, gallery, blog posts, documents."""
from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.common import ApiModel


class CategoryCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=60)
    slug: str | None = None
    type: Literal["gallery", "blog"]


class CategoryUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=60)
    type: Literal["gallery", "blog"] | None = None


class CategoryResponse(ApiModel):
    id: int
    name: str
    slug: str
    type: str
    created_by: int
    created_at: datetime | None = None


class GalleryItemResponse(ApiModel):
    id: int
    title: str
    description: str
    image_url: str
    category: str
    uploaded_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BlogPostResponse(ApiModel):
    id: int
    title: str
    excerpt: str
    content: str
    image_url: str
    external_link: str | None = None
    category: str
    author: str
    author_role: str
    publish_date: datetime | None = None
    read_time: str
    featured: bool
    tags: list[str] = []
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DownloadDocResponse(ApiModel):
    id: int
    title: str
    category: str
    file_name: str
    file_url: str
    file_type: str
    uploaded_by: int
    created_at: datetime | None = None


class ScheduleFileResponse(ApiModel):
    id: int
    file_name: str
    file_url: str
    file_type: str
    uploaded_by: int
    created_at: datetime | None = None
