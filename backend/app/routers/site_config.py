"""Public, environment-sourced site settings."""
from fastapi import APIRouter

from app.config import get_settings
from app.schemas.common import envelope

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/tracking-url")
async def tracking_url():
    settings = get_settings()
    return envelope({"trackingUrl": settings.tracking_url, "whatsappNumber": settings.whatsapp_number})
