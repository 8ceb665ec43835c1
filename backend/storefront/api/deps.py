"""
Request-level dependencies for the admin surface.

``require_admin`` is the single authorization chokepoint: every admin handler
declares it, and FastAPI resolves it before the handler body runs, so a
rejected request never reaches the catalog.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.db import get_db
from storefront.errors import AuthorizationError, RateLimited, ValidationError
from storefront.schemas.auth_schema import LoginIn
from storefront.services.session_service import SessionAuthority
from storefront.services.throttle_service import LoginThrottle, get_login_throttle
from storefront.utils.logger import get_logger

log = get_logger("auth")


@dataclass(frozen=True)
class AdminContext:
    token: str


def authorize(token: Optional[str], authority: SessionAuthority) -> AdminContext:
    session = authority.validate(token)
    if session is None or not session.is_admin:
        raise AuthorizationError()
    return AdminContext(token=token)


def get_session_authority(db: Session = Depends(get_db)) -> SessionAuthority:
    return SessionAuthority(db)


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def require_admin(
    request: Request, authority: SessionAuthority = Depends(get_session_authority)
) -> AdminContext:
    return authorize(session_token(request), authority)


def client_key(request: Request) -> str:
    # behind one reverse proxy the right-most forwarded hop is the real peer
    if settings.TRUST_PROXY:
        forwarded = request.headers.get("x-forwarded-for", "")
        hops = [h.strip() for h in forwarded.split(",") if h.strip()]
        if hops:
            return hops[-1]
    return request.client.host if request.client else "unknown"


def throttle_login(request: Request, throttle: LoginThrottle = Depends(get_login_throttle)):
    key = client_key(request)
    decision = throttle.check(key)
    if not decision.allowed:
        log.warning(f"login throttled client={key} retry_after={decision.retry_after}s")
        raise RateLimited(decision.retry_after)


async def login_payload(request: Request) -> Optional[LoginIn]:
    """
    Decode the login body by hand so it is read after ``throttle_login`` has
    run: a malformed body still costs the client a throttle slot.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return LoginIn.model_validate_json(raw)
    except PydanticValidationError:
        raise ValidationError("Invalid request body")
