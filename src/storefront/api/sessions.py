"""Session cookie handling for the Storefront API."""

import secrets

from fastapi import Request, Response

from storefront.utils import settings
from storefront.utils.logging import bind_session


def new_session_id() -> str:
    return "sess-" + secrets.token_hex(16)


def shopper_session(request: Request, response: Response) -> str:
    """Resolve the shopper's session id from the cookie, minting one if absent."""
    session_id = request.cookies.get(settings.SESSION_COOKIE)
    if not session_id:
        session_id = new_session_id()
        response.set_cookie(settings.SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    bind_session(session_id)
    return session_id
