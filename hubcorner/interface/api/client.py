"""Anonymous client identification.

Voters are identified by an opaque cookie. The value is not authenticated;
the same string is treated as the same voter.
"""

import secrets

from fastapi import Request, Response

from hubcorner.config import Settings

MAX_CLIENT_ID_LENGTH = 255


def read_client_id(request: Request, settings: Settings) -> str | None:
    """Return the client id cookie if present and well-formed."""
    client_id = request.cookies.get(settings.client.cookie_name)
    if not client_id or not client_id.strip() or len(client_id) > MAX_CLIENT_ID_LENGTH:
        return None
    return client_id


def ensure_client_id(request: Request, response: Response, settings: Settings) -> str:
    """Return the client id cookie, issuing a new one if missing.

    Args:
        request: Incoming request
        response: Response whose cookies are sent with the result
        settings: Application settings

    Returns:
        Client id for this request
    """
    client_id = read_client_id(request, settings)
    if client_id:
        return client_id

    client_id = secrets.token_urlsafe(24)
    response.set_cookie(
        key=settings.client.cookie_name,
        value=client_id,
        max_age=settings.client.cookie_max_age,
        httponly=True,
        samesite="lax",
    )
    return client_id
