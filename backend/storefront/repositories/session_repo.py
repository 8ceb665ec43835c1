from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session
from storefront.models.admin_session import AdminSession


class AdminSessionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, token_digest: str) -> Optional[AdminSession]:
        return self.db.get(AdminSession, token_digest)

    def add(self, token_digest: str, is_admin: bool, now: datetime, expires_at: datetime) -> AdminSession:
        rec = AdminSession(
            token_digest=token_digest,
            is_admin=is_admin,
            created_at=now,
            last_seen_at=now,
            expires_at=expires_at,
        )
        self.db.add(rec)
        self.db.flush()
        return rec

    def delete(self, token_digest: str) -> bool:
        n = (
            self.db.query(AdminSession)
            .filter(AdminSession.token_digest == token_digest)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return n > 0

    def delete_expired(self, now: datetime) -> int:
        n = (
            self.db.query(AdminSession)
            .filter(AdminSession.expires_at <= now)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return n
