"""Shared schema base and response envelope."""
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

YMD_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class ApiModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def envelope(data: Any = None, **extra: Any) -> dict[str, Any]:
    """Wrap a payload as ``{"success": true, "data": ...}``."""
    body: dict[str, Any] = {"success": True}
    if data is not None or not extra:
        body["data"] = _dump(data)
    body.update({k: _dump(v) for k, v in extra.items()})
    return body
