"""URL shortening API routes.

This module contains the endpoints for URL operations:
- Save a URL under an alias (POST /url)
- Redirect to the original URL (GET /{alias})
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ...core.config import Settings, get_settings
from ...models.url import URLSaveRequest, ErrorResponse
from ...schemas.url import URLSaveResponse
from ...services import LookupService, SaveService, get_lookup_service, get_save_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["URLs"])

basic_auth = HTTPBasic(auto_error=False, realm="url-shortener")


def require_credentials(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    settings: Settings = Depends(get_settings),
) -> None:
    """Enforce HTTP Basic auth when credentials are configured.

    Args:
        credentials: Credentials sent by the client, if any.
        settings: Application settings.
    """
    if not settings.auth_enabled:
        return
    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode(), settings.http_user.encode()
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode(), settings.http_password.encode()
        )
        if user_ok and password_ok:
            return
    logger.info("rejected save request with missing or invalid credentials")
    raise HTTPException(
        status_code=401,
        detail="unauthorized",
        headers={"WWW-Authenticate": 'Basic realm="url-shortener"'},
    )


@router.post(
    "/url",
    response_model=URLSaveResponse,
    responses={
        200: {"description": "URL saved"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
        409: {"model": ErrorResponse, "description": "Alias already exists"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    dependencies=[Depends(require_credentials)],
    summary="Save a URL",
    description="Store a URL under an alias. A random alias is generated when none is given.",
)
async def save_url(
    payload: URLSaveRequest,
    service: SaveService = Depends(get_save_service),
) -> URLSaveResponse:
    """Save a URL under an alias.

    Args:
        payload: URL and optional alias.
        service: Save service.

    Returns:
        The alias the URL was stored under.
    """
    result = await service.save(payload.url, payload.alias)
    return URLSaveResponse(alias=result.alias)


@router.get(
    "/{alias}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Alias not found"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Redirect to original URL",
    description="Redirect to the URL stored under the alias.",
)
async def redirect(
    alias: str,
    service: LookupService = Depends(get_lookup_service),
) -> RedirectResponse:
    """Redirect to the original URL.

    Args:
        alias: The alias from the path.
        service: Lookup service.

    Returns:
        Redirect response to original URL.
    """
    result = await service.resolve(alias)
    return RedirectResponse(url=result.url, status_code=302)
