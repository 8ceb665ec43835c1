import time
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.errors import NotFound, ValidationError
from storefront.models.review import Review
from storefront.repositories.review_repo import ReviewRepository
from storefront.utils.logger import get_logger
from storefront.utils.transactions import transaction

log = get_logger("catalog")


class ReviewService:
    """Public submissions land unapproved; only an admin approval makes them visible."""

    def __init__(self, db: Session):
        self.db = db
        self.reviews = ReviewRepository(db)

    def list_public(self) -> List[Review]:
        return self.reviews.list_approved()

    def list_all(self) -> List[Review]:
        return self.reviews.list_all()

    def submit(self, fields: Dict[str, Any]) -> Review:
        name = str(fields.get("name") or "").strip()
        title = str(fields.get("title") or "").strip()
        text = str(fields.get("text") or "").strip()
        if not name or not title or not text:
            raise ValidationError("All fields required")
        with transaction(self.db):
            r = self.reviews.add(name=name, title=title, text=text, created_at=int(time.time() * 1000))
        log.info(f"review submitted id={r.id}")
        return r

    def approve(self, review_id: int) -> Review:
        with transaction(self.db):
            r = self.reviews.get(review_id)
            if not r:
                raise NotFound()
            if r.approved:
                return r
            r.approved = True
        log.info(f"review approved id={review_id}")
        return r

    def delete(self, review_id: int):
        with transaction(self.db):
            r = self.reviews.get(review_id)
            if not r:
                raise NotFound()
            self.reviews.delete(r)
        log.info(f"review deleted id={review_id}")
