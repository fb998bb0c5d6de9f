"""
Request-scoped dependencies shared by the routers.
"""
from typing import Any, Dict, Optional

from fastapi import Header, Request

from .config import settings
from .errors import ApiError


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Owner identity for the request.

    Resolved upstream (session or bearer token) and forwarded in the X-User-Id
    header; without it the configured default owner is used.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return settings.DEFAULT_USER_ID


async def read_json_object(request: Request) -> Dict[str, Any]:
    """Request body as a JSON object, or INVALID_BODY"""
    try:
        body = await request.json()
    except ValueError:
        raise ApiError.bad_request("INVALID_BODY", "Request body must be valid JSON")
    if not isinstance(body, dict):
        raise ApiError.bad_request("INVALID_BODY", "Request body must be a JSON object")
    return body
