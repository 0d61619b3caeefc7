"""Contact form relay API."""
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.services.contact_service import RelayError, submit_contact_form

router = APIRouter(prefix="/contact", tags=["contact"])


@router.get("/config")
async def contact_config():
    api_key = get_settings().web3forms_api_key
    if not api_key:
        return JSONResponse(status_code=500, content={"message": "API Key not configured"})
    return {"apiKey": api_key}


@router.post("")
async def submit_contact(payload: dict[str, Any] = Body(...)):
    if not get_settings().web3forms_api_key:
        return JSONResponse(status_code=500, content={"message": "Server configuration error: API Key missing"})
    try:
        status_code, data = await submit_contact_form(payload)
    except RelayError as e:
        content = {"message": e.message}
        if e.details is not None:
            content["details"] = e.details
        return JSONResponse(status_code=500, content=content)
    return JSONResponse(status_code=status_code, content=data)
