"""Turn Storefront error bodies into one-line failure messages for Locust."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_DETAIL = 300


def _describe(error) -> str:
    # ValidationError bodies map field names to lists of messages
    if isinstance(error, dict):
        parts = []
        for field, messages in error.items():
            if isinstance(messages, list):
                messages = ", ".join(map(str, messages))
            parts.append(f"{field}: {messages}")
        return " | ".join(parts)
    return str(error)


def extract_error_detail(response: Response) -> str:
    """Summarise an error response.

    Storefront errors look like ``{"error": "...", "session_id": ...}``.
    FastAPI's own rejections use ``{"detail": ...}``, either a string or a
    list of pydantic errors. Anything else is returned as truncated text.
    """
    try:
        body = response.json()
    except ValueError:
        return (response.text or "(empty response body)")[:MAX_DETAIL]

    if not isinstance(body, dict):
        return str(body)[:MAX_DETAIL]

    if "error" in body:
        context = ", ".join(f"{k}={v}" for k, v in body.items() if k != "error")
        message = _describe(body["error"])
        return f"{message} ({context})" if context else message

    detail = body.get("detail")
    if isinstance(detail, list):
        return " | ".join(
            f"{'.'.join(map(str, err.get('loc', [])))}: {err.get('msg', err)}" for err in detail
        )
    if detail is not None:
        return str(detail)

    return str(body)[:MAX_DETAIL]
