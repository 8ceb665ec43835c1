from typing import List, Optional

from sqlalchemy.orm import Session
from storefront.db import MAX_INTEGER
from storefront.models.review import Review


class ReviewRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, review_id: int) -> Optional[Review]:
        # ids outside the column range cannot exist
        if not 1 <= review_id <= MAX_INTEGER:
            return None
        return self.db.query(Review).filter(Review.id == review_id).first()

    def list_approved(self) -> List[Review]:
        return (
            self.db.query(Review)
            .filter(Review.approved == True)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )

    def list_all(self) -> List[Review]:
        return self.db.query(Review).order_by(Review.id.desc()).all()

    def add(self, name: str, title: str, text: str, created_at: int) -> Review:
        r = Review(name=name, title=title, text=text, created_at=created_at, approved=False)
        self.db.add(r)
        self.db.flush()
        return r

    def delete(self, review: Review):
        self.db.delete(review)
        self.db.flush()
