from urllib.parse import quote
from xml.sax.saxutils import escape

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.db import get_db
from storefront.services.catalog_service import CatalogService

router = APIRouter(tags=["sitemap"])

STATIC_PAGES = ["/", "/products.html", "/who-we-are.html", "/locate-us.html"]


def build_sitemap(base_url: str, slugs) -> str:
    base = base_url.rstrip("/")
    locs = [f"{base}{page}" for page in STATIC_PAGES]
    locs += [f"{base}/product.html?slug={quote(slug, safe='')}" for slug in slugs]
    urls = "\n".join(f"  <url>\n    <loc>{escape(loc)}</loc>\n  </url>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{urls}\n"
        "</urlset>\n"
    )


@router.get("/sitemap.xml", summary="Sitemap of storefront pages and products")
def sitemap(db: Session = Depends(get_db)):
    slugs = CatalogService(db).product_slugs()
    return Response(content=build_sitemap(settings.SITE_BASE_URL, slugs), media_type="application/xml")
