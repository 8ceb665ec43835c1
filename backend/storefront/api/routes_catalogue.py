from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.orm import Session
from storefront.db import get_db
from storefront.schemas.product_schema import product_to_dict
from storefront.services.catalog_service import CatalogService

router = APIRouter(tags=["catalogue"])

@router.get("", summary="List products with site settings")
def list_products(
    sort: Optional[str] = Query(None, description="'new' for newest first"),
    limit: Optional[str] = Query(None, description="positive number to truncate"),
    db: Session = Depends(get_db),
):
    # limit is parsed leniently by the service; junk values mean "no limit"
    svc = CatalogService(db)
    listing = svc.storefront_listing(sort=sort, limit=limit)
    listing["products"] = [product_to_dict(p) for p in listing["products"]]
    return listing

@router.get("/{slug}", summary="Get product by slug")
def get_product(slug: str, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    return product_to_dict(svc.get_product(slug))
