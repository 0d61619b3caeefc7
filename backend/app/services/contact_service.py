"""Relay of contact form submissions to the form-relay service."""
import json
import logging
from typing import Any

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

RELAY_TIMEOUT_SECONDS = 15.0


class RelayError(Exception):
    """The relay could not be reached or answered with something other than JSON."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


async def submit_contact_form(
    payload: dict[str, Any],
    client: httpx.AsyncClient | None = None,
) -> tuple[int, Any]:
    """Forward the submission with the access key. Returns (upstream status, upstream JSON)."""
    settings = get_settings()
    body = {"access_key": settings.web3forms_api_key, **payload}
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=RELAY_TIMEOUT_SECONDS)
    try:
        response = await client.post(settings.web3forms_url, json=body, headers=headers)
    except httpx.HTTPError as e:
        logger.error("Contact relay request failed: %s", e)
        raise RelayError("Failed to send email", str(e))
    finally:
        if owns_client:
            await client.aclose()

    logger.info("Contact relay responded with status %s", response.status_code)
    try:
        data = response.json()
    except json.JSONDecodeError:
        logger.error("Contact relay returned non-JSON response")
        raise RelayError("External API returned invalid response", response.text[:200])
    return response.status_code, data
