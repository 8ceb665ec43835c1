#!/usr/bin/env python3
"""
Seed products from a JSON file (a list of products, or an object with an
"items"/"products" list). Entries are normalised so a few variations of the
frontend mock catalogue are accepted. Slugs that already exist are left
untouched.

Usage:
    python scripts/seed_products.py --file ../public/mock/catalogue.json
"""
import json
import argparse
import sys
import os

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import init_db, SessionLocal
from storefront.errors import Conflict, ValidationError
from storefront.services.catalog_service import CatalogService

DEFAULT_SOURCE = os.path.join(os.path.dirname(__file__), "..", "public", "mock", "catalogue.json")


def _normalize_entry(entry):
    """Return a dict with the keys CatalogService.create_product understands."""
    slug = entry.get("slug") or entry.get("id") or entry.get("sku")
    name = entry.get("name") or entry.get("title") or ""
    price = entry.get("price", entry.get("amount", 0))
    try:
        price = float(price)
    except (TypeError, ValueError):
        price = 0
    grams = entry.get("grams", entry.get("weight", 0))
    try:
        grams = int(grams or 0)
    except (TypeError, ValueError):
        grams = 0

    image = entry.get("image")
    if not image:
        imgs = entry.get("images") or []
        image = imgs[0] if isinstance(imgs, (list, tuple)) and len(imgs) > 0 else ""

    return {
        "slug": str(slug) if slug is not None else "",
        "name": name,
        "price": price,
        "grams": grams,
        "category": entry.get("category") or "",
        "image": image or "",
        "short_desc": entry.get("shortDesc") or entry.get("description") or "",
    }


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    if isinstance(data, dict):
        for key in ("items", "products"):
            if isinstance(data.get(key), list):
                return data[key]
        return list(data.values())
    if isinstance(data, list):
        return data
    return []


def seed_from_file(path: str):
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    init_db()
    db = SessionLocal()
    svc = CatalogService(db)
    created = skipped = 0
    try:
        for entry in load_entries(path):
            try:
                svc.create_product(_normalize_entry(entry))
                created += 1
            except (Conflict, ValidationError) as e:
                print(f"skip {entry.get('slug') or entry.get('name')!r}: {e.message}")
                skipped += 1
        print(f"Seeded products: {created} (skipped {skipped})")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=DEFAULT_SOURCE, help="Path to product json (frontend mock) or a list of product entries")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file)
