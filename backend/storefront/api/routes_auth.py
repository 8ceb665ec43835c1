from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from storefront.api.deps import (
    AdminContext,
    client_key,
    get_session_authority,
    login_payload,
    require_admin,
    session_token,
    throttle_login,
)
from storefront.config import settings
from storefront.errors import AuthenticationError, ValidationError
from storefront.schemas.auth_schema import LoginIn
from storefront.services.credential_service import verify_password
from storefront.services.session_service import SessionAuthority
from storefront.utils.logger import get_logger

router = APIRouter(prefix="/api/admin", tags=["auth"])

log = get_logger("auth")


@router.post("/login", summary="Admin login")
def login(
    request: Request,
    response: Response,
    _throttled: None = Depends(throttle_login),
    authority: SessionAuthority = Depends(get_session_authority),
    payload: Optional[LoginIn] = Depends(login_payload),
):
    # dependencies resolve in order: the throttle slot is spent before the body is read
    password = payload.password if payload else None
    if not password:
        raise ValidationError("Password required")

    if not verify_password(password, settings.ADMIN_PASSWORD_HASH):
        log.warning(f"login failed client={client_key(request)}")
        raise AuthenticationError("Wrong password")

    # never carry a pre-login session over
    authority.revoke(session_token(request))
    token = authority.issue()
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    log.info(f"login ok client={client_key(request)}")
    return {"ok": True}


@router.post("/logout", summary="Admin logout")
def logout(
    response: Response,
    admin: AdminContext = Depends(require_admin),
    authority: SessionAuthority = Depends(get_session_authority),
):
    authority.revoke(admin.token)
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return {"ok": True}
