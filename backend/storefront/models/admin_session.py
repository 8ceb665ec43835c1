from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String
from storefront.db import Base


class AdminSession(Base):
    __tablename__ = "admin_sessions"

    # HMAC digest of the cookie token; the raw token is never stored
    token_digest = Column(String(64), primary_key=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, nullable=False)
    last_seen_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
