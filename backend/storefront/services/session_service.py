import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.models.admin_session import AdminSession
from storefront.repositories.session_repo import AdminSessionRepository
from storefront.utils.logger import get_logger
from storefront.utils.transactions import transaction

log = get_logger("auth")


class SessionAuthority:
    """
    Issues, validates and revokes admin sessions.

    The client only ever sees the opaque token (in a cookie). The store keeps
    an HMAC digest of it keyed with SECRET_KEY, so a leaked sessions table
    cannot be replayed as cookies. Sessions are durable across restarts and
    expire after ``ttl_seconds`` of inactivity.
    """

    def __init__(self, db: Session, ttl_seconds: Optional[int] = None, secret: Optional[str] = None):
        self.db = db
        self.repo = AdminSessionRepository(db)
        self.ttl = timedelta(seconds=ttl_seconds or settings.SESSION_TTL_SECONDS)
        self.secret = (secret or settings.SECRET_KEY).encode("utf-8")

    def _now(self) -> datetime:
        # stored naive, in UTC
        return datetime.now(timezone.utc).replace(tzinfo=None)

    def _digest(self, token: str) -> str:
        return hmac.new(self.secret, token.encode("utf-8"), hashlib.sha256).hexdigest()

    def issue(self) -> str:
        token = secrets.token_urlsafe(32)
        now = self._now()
        with transaction(self.db):
            self.repo.add(self._digest(token), is_admin=True, now=now, expires_at=now + self.ttl)
        log.info("admin session issued")
        return token

    def validate(self, token: Optional[str]) -> Optional[AdminSession]:
        """
        Return the live session for ``token`` or None. Unknown, revoked and
        expired tokens all give None. A hit pushes the idle expiry forward.
        """
        if not token:
            return None
        digest = self._digest(token)
        rec = self.repo.get(digest)
        if rec is None:
            return None
        now = self._now()
        with transaction(self.db):
            if rec.is_expired(now):
                self.repo.delete(digest)
                return None
            rec.last_seen_at = now
            rec.expires_at = now + self.ttl
        return rec

    def revoke(self, token: Optional[str]):
        if not token:
            return
        with transaction(self.db):
            removed = self.repo.delete(self._digest(token))
        if removed:
            log.info("admin session revoked")

    def purge_expired(self) -> int:
        with transaction(self.db):
            n = self.repo.delete_expired(self._now())
        return n
