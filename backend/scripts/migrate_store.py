#!/usr/bin/env python3
"""
One-shot copy of the catalog from one database to another, e.g. from the
local SQLite file to a hosted PostgreSQL instance.

Products whose slug already exists in the target are skipped. Reviews are
appended. The settings row in the target is overwritten with the source's.
Admin sessions are not copied.

Usage:
    python scripts/migrate_store.py --source sqlite:///./dev.db --target "$DATABASE_URL"
"""
import argparse
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from storefront.db import Base
from storefront.models.product import Product
from storefront.models.review import Review
from storefront.models.site_settings import SiteSettings

PRODUCT_FIELDS = ["slug", "name", "price", "grams", "category", "image", "short_desc", "created_at"]
REVIEW_FIELDS = ["name", "title", "text", "created_at", "approved"]


def _session_for(url: str):
    return sessionmaker(bind=create_engine(url, future=True))()


def migrate(source_url: str, target_url: str):
    src = _session_for(source_url)
    dst = _session_for(target_url)
    Base.metadata.create_all(bind=dst.get_bind())
    try:
        existing = {row[0] for row in dst.query(Product.slug).all()}
        products = src.query(Product).order_by(Product.id).all()
        copied = 0
        for p in products:
            if p.slug in existing:
                continue
            dst.add(Product(**{f: getattr(p, f) for f in PRODUCT_FIELDS}))
            existing.add(p.slug)
            copied += 1
        print(f"Migrated {copied} of {len(products)} products")

        reviews = src.query(Review).order_by(Review.id).all()
        for r in reviews:
            dst.add(Review(**{f: getattr(r, f) for f in REVIEW_FIELDS}))
        print(f"Migrated {len(reviews)} reviews")

        s = src.get(SiteSettings, SiteSettings.SINGLETON_ID)
        if s is not None:
            target = dst.get(SiteSettings, SiteSettings.SINGLETON_ID)
            if target is None:
                target = SiteSettings(id=SiteSettings.SINGLETON_ID)
                dst.add(target)
            target.currency = s.currency
            target.phone = s.phone
            print("Settings migrated")

        dst.commit()
        print("Migration complete")
    except Exception:
        dst.rollback()
        raise
    finally:
        src.close()
        dst.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Copy products, reviews and settings between databases.")
    parser.add_argument("--source", required=True, help="SQLAlchemy URL to read from")
    parser.add_argument("--target", default=os.environ.get("DATABASE_URL"), help="SQLAlchemy URL to write to")
    args = parser.parse_args()
    if not args.target:
        print("No target URL (pass --target or set DATABASE_URL)")
        sys.exit(1)
    try:
        migrate(args.source, args.target)
    except Exception as e:
        print("Migration failed:", e)
        sys.exit(1)
