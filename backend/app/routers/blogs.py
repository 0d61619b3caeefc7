"""Blog / news API."""
import re
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import AdminUser
from app.database import get_db
from app.errors import NotFoundError, ValidationError
from app.models.blog import BlogPost
from app.schemas.common import envelope
from app.schemas.content import BlogPostResponse
from app.services.storage import save_upload

router = APIRouter(prefix="/blogs", tags=["blogs"])

DEFAULT_CATEGORY = "company"
DEFAULT_READ_TIME = "5 min read"
_URL = re.compile(r"^https?://.+")


def parse_tags(tags: str | None) -> list[str]:
    if not tags:
        return []
    return [t.strip() for t in tags.split(",") if t.strip()]


def parse_flag(value: str | bool | None) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == "true")


def _check_link(link: str | None) -> str | None:
    if link and not _URL.match(link):
        raise ValidationError("Please provide a valid URL")
    return link or None


def _parse_publish_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("publishDate must be an ISO date")


async def _get_post(db: AsyncSession, post_id: int) -> BlogPost:
    post = await db.get(BlogPost, post_id)
    if not post:
        raise NotFoundError("Blog post not found")
    return post


@router.get("")
async def list_blogs(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: str | None = Query(None),
    featured: str | None = Query(None),
):
    q = select(BlogPost).order_by(BlogPost.publish_date.desc(), BlogPost.id.desc())
    if category and category != "all":
        q = q.where(BlogPost.category == category)
    if featured == "true":
        q = q.where(BlogPost.featured.is_(True))
    result = await db.execute(q)
    items = [BlogPostResponse.model_validate(p) for p in result.scalars().all()]
    return envelope(items, count=len(items))


@router.get("/{post_id}")
async def get_blog(post_id: int, db: Annotated[AsyncSession, Depends(get_db)]):
    return envelope(BlogPostResponse.model_validate(await _get_post(db, post_id)))


@router.post("", status_code=201)
async def create_blog(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
    title: Annotated[str, Form(max_length=200)],
    excerpt: Annotated[str, Form(max_length=300)],
    author: Annotated[str, Form()],
    author_role: Annotated[str, Form(alias="authorRole")],
    content: Annotated[str | None, Form()] = None,
    external_link: Annotated[str | None, Form(alias="externalLink")] = None,
    category: Annotated[str | None, Form()] = None,
    read_time: Annotated[str | None, Form(alias="readTime")] = None,
    featured: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form()] = None,
    publish_date: Annotated[str | None, Form(alias="publishDate")] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    if not all(v.strip() for v in (title, excerpt, author, author_role)):
        raise ValidationError("Please provide all required fields")
    if image is None:
        raise ValidationError("Please upload an image")
    body = content if content and content.strip() else excerpt
    if len(body) < 10:
        raise ValidationError("Content must be at least 10 characters")
    link = _check_link(external_link)
    published = _parse_publish_date(publish_date)
    stored = await save_upload(image, "image")
    post = BlogPost(
        title=title.strip(),
        excerpt=excerpt,
        content=body,
        image_url=stored.url,
        external_link=link,
        category=(category or "").strip() or DEFAULT_CATEGORY,
        author=author.strip(),
        author_role=author_role.strip(),
        read_time=read_time or DEFAULT_READ_TIME,
        featured=parse_flag(featured),
        tags=parse_tags(tags),
        created_by=user.id,
    )
    if published:
        post.publish_date = published
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return envelope(BlogPostResponse.model_validate(post))


@router.put("/{post_id}")
async def update_blog(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
    title: Annotated[str | None, Form(max_length=200)] = None,
    excerpt: Annotated[str | None, Form(max_length=300)] = None,
    content: Annotated[str | None, Form()] = None,
    author: Annotated[str | None, Form()] = None,
    author_role: Annotated[str | None, Form(alias="authorRole")] = None,
    external_link: Annotated[str | None, Form(alias="externalLink")] = None,
    category: Annotated[str | None, Form()] = None,
    read_time: Annotated[str | None, Form(alias="readTime")] = None,
    featured: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    post = await _get_post(db, post_id)
    updates = {
        "title": title,
        "excerpt": excerpt,
        "content": content,
        "author": author,
        "author_role": author_role,
        "category": category,
        "read_time": read_time,
    }
    for k, v in updates.items():
        if v:
            setattr(post, k, v.strip() if k != "content" else v)
    if external_link:
        post.external_link = _check_link(external_link)
    if featured is not None:
        post.featured = parse_flag(featured)
    if tags is not None:
        post.tags = parse_tags(tags)
    if image is not None:
        stored = await save_upload(image, "image")
        post.image_url = stored.url
    await db.flush()
    await db.refresh(post)
    return envelope(BlogPostResponse.model_validate(post))


@router.delete("/{post_id}")
async def delete_blog(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    user: AdminUser,
):
    post = await _get_post(db, post_id)
    await db.delete(post)
    return {"success": True, "message": "Blog post deleted successfully"}
