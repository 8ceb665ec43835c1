from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import AdminContext, require_admin
from storefront.db import get_db
from storefront.schemas.product_schema import ProductIn, product_to_dict
from storefront.schemas.review_schema import review_to_dict
from storefront.services.catalog_service import CatalogService
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/api/admin", tags=["admin"])


# ---------------- products ----------------

@router.get("/products", summary="List every product")
def list_products(
    admin: AdminContext = Depends(require_admin), db: Session = Depends(get_db)
):
    svc = CatalogService(db)
    return [product_to_dict(p) for p in svc.list_all_products()]


@router.post("/products", status_code=201, summary="Create a product")
def create_product(
    payload: ProductIn,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    p = svc.create_product(payload.provided())
    return product_to_dict(p)


@router.put("/products/{slug}", summary="Update a product (only the fields sent)")
def update_product(
    slug: str,
    payload: ProductIn,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    p = svc.update_product(slug, payload.provided())
    return product_to_dict(p)


@router.delete("/products/{slug}", summary="Delete a product")
def delete_product(
    slug: str, admin: AdminContext = Depends(require_admin), db: Session = Depends(get_db)
):
    CatalogService(db).delete_product(slug)
    return {"ok": True}


# ---------------- reviews ----------------

@router.get("/reviews", summary="List all reviews, approved or not")
def list_reviews(
    admin: AdminContext = Depends(require_admin), db: Session = Depends(get_db)
):
    svc = ReviewService(db)
    return [review_to_dict(r) for r in svc.list_all()]


@router.put("/reviews/{review_id}/approve", summary="Approve a review")
def approve_review(
    review_id: int,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ReviewService(db).approve(review_id)
    return {"ok": True}


@router.delete("/reviews/{review_id}", summary="Delete a review")
def delete_review(
    review_id: int,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ReviewService(db).delete(review_id)
    return {"ok": True}
