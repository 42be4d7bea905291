"""Failure messages for Locust, built from the storefront's error bodies.

The API answers errors in three shapes:

- Checkout rejections (422): {"error": {"phone": ["..."]}, "code": "invalid_phone"}
- Domain errors (400/404/409/503): {"error": {"field": ["..."]}} or {"error": "..."}
- FastAPI errors: {"detail": "Admin token required"} (401/403) or
  {"detail": [{"loc": [...], "msg": "..."}]} (request body validation)

Checkout codes lead the message so failures group by cause in the Locust
report, and an unavailable order store (503) is named as such.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_DETAIL_LENGTH = 300


def _format_messages(error) -> str:
    if not isinstance(error, dict):
        return str(error)
    parts = []
    for field, messages in error.items():
        if isinstance(messages, list | tuple):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field}: {messages}")
    return " | ".join(parts)


def _format_detail(detail) -> str:
    if not isinstance(detail, list):
        return str(detail)
    parts = []
    for err in detail:
        # Skip the leading "body"/"query" segment
        loc = ".".join(str(p) for p in err.get("loc", [])[1:])
        msg = err.get("msg", str(err))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return " | ".join(parts)


def extract_error_detail(response: Response) -> str:
    """Compact, single-line description of a failed storefront response."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:MAX_DETAIL_LENGTH] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:MAX_DETAIL_LENGTH]

    if "error" in body:
        message = _format_messages(body["error"])
        if body.get("code"):
            message = f"{body['code']}: {message}"
        elif response.status_code == 503:
            message = f"order store unavailable: {message}"
        return message[:MAX_DETAIL_LENGTH]

    if "detail" in body:
        return _format_detail(body["detail"])[:MAX_DETAIL_LENGTH]

    return str(body)[:MAX_DETAIL_LENGTH]


def checkout_error_code(response: Response) -> str | None:
    """The checkout rejection code of a 422 response, if there is one."""
    if response.status_code != 422:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("code") if isinstance(body, dict) else None
