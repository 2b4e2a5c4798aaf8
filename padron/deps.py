"""
FastAPI dependencies shared by the route modules.

The store and the matcher live on `app.state` (set up in
padron.main.create_app) and reach handlers through these functions, so
tests can build an app around any store or matcher they like.
"""

from fastapi import Depends, Header, HTTPException, Request

from padron import config
from padron.matching import FingerprintMatcher
from padron.models.schemas import User
from padron.security import decode_access_token
from padron.store import RegistryStore

WEB_PORTAL = "WEB_PORTAL"
API_CLIENT = "API_CLIENT"


def get_store(request: Request) -> RegistryStore:
    return request.app.state.store


def get_matcher(request: Request) -> FingerprintMatcher:
    return request.app.state.matcher


def client_ip(request: Request) -> str | None:
    """Socket peer address. The first hop of X-Forwarded-For is used
    instead only when PADRON_TRUST_PROXY is on."""
    if config.TRUST_PROXY:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def requesting_institution(
    request: Request,
    store: RegistryStore = Depends(get_store),
) -> str:
    """Label written to the validation history for this caller.

    An active institution's API key (X-API-Key) wins; any Authorization
    header marks a generic API client; everything else is the web portal."""
    api_key = request.headers.get("x-api-key")
    if api_key:
        institution = store.get_institution_by_api_key(api_key)
        if institution is not None and institution.active:
            return institution.name
    if request.headers.get("authorization"):
        return API_CLIENT
    return WEB_PORTAL


def current_user(
    authorization: str | None = Header(default=None),
    store: RegistryStore = Depends(get_store),
) -> User:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_access_token(token.strip())
    user = store.get_user(user_id) if user_id is not None else None
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
