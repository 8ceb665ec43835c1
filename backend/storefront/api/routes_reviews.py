from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.schemas.review_schema import ReviewIn, review_to_dict
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("", summary="List approved reviews")
def list_reviews(db: Session = Depends(get_db)):
    svc = ReviewService(db)
    return [review_to_dict(r) for r in svc.list_public()]


@router.post("", status_code=201, summary="Submit a review for moderation")
def submit_review(payload: ReviewIn, db: Session = Depends(get_db)):
    svc = ReviewService(db)
    r = svc.submit(payload.model_dump())
    return review_to_dict(r)
