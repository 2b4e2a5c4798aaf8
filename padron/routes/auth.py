"""
/api/auth -- Portal login, registration and session lookup.

Login checks the bcrypt hash and, for accounts with an IP allow-list,
the caller's address. A signed bearer token comes back with the user;
only /api/auth/me requires it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from padron.deps import client_ip, current_user, get_store
from padron.models.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    User,
    UserPublic,
)
from padron.security import create_access_token, hash_password, ip_allowed, validate_user
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in to the portal",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)
async def login(
    body: LoginRequest,
    request: Request,
    store: RegistryStore = Depends(get_store),
) -> LoginResponse:
    if not body.username or not body.password:
        raise HTTPException(status_code=400, detail="Username and password required")

    user = validate_user(store, body.username, body.password)
    if user is None:
        logger.info("[AUTH] Failed login for '%s'", body.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    ip = client_ip(request)
    if not ip_allowed(user, ip):
        logger.warning("[AUTH] User '%s' attempted login from unauthorized IP: %s", user.username, ip)
        raise HTTPException(status_code=403, detail="Access denied from this IP address")

    logger.info("[AUTH] User '%s' logged in successfully from %s", user.username, ip or "unknown IP")

    return LoginResponse(
        user=UserPublic(id=user.id, username=user.username),
        token=create_access_token(user),
    )


@router.post(
    "/register",
    response_model=UserPublic,
    status_code=201,
    summary="Create a portal account",
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register(
    body: RegisterRequest,
    store: RegistryStore = Depends(get_store),
) -> UserPublic:
    # DuplicateKeyError -> 409 via the app-level handler
    user = store.create_user(
        body.username,
        hash_password(body.password),
        display_name=body.display_name,
        allowed_ips=body.allowed_ips,
    )
    logger.info("[AUTH] Registered user '%s' (id=%d)", user.username, user.id)
    return UserPublic(id=user.id, username=user.username)


@router.get(
    "/me",
    response_model=UserPublic,
    summary="Who owns this token",
    responses={401: {"model": ErrorResponse}},
)
async def me(user: User = Depends(current_user)) -> UserPublic:
    return UserPublic(id=user.id, username=user.username)
