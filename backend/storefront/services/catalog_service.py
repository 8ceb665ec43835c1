import hashlib
import math
import os
import tempfile
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from filelock import FileLock, Timeout
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.db import MAX_INTEGER
from storefront.errors import Conflict, NotFound, StoreError, ValidationError
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.settings_repo import SettingsRepository
from storefront.utils.logger import get_logger
from storefront.utils.transactions import transaction

log = get_logger("catalog")

SORT_NEW = "new"


def parse_limit(raw: Any) -> Optional[int]:
    """Lenient limit parsing: anything that is not a positive number the store can
    take (junk, zero, negatives, values past a 64-bit integer) means "no limit".
    """
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 1 or value >= MAX_INTEGER:
        return None
    return int(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _price(value: Any) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a number")
    if not math.isfinite(price) or price < 0:
        raise ValidationError("Price must be zero or more")
    return price


def _grams(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Grams must be a whole number")
    try:
        grams = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Grams must be a whole number")
    if grams < 0:
        raise ValidationError("Grams must be zero or more")
    return grams


class CatalogService:
    def __init__(self, db: Session, lock_dir: Optional[str] = None):
        self.db = db
        self.products = ProductRepository(db)
        self.site_settings = SettingsRepository(db)
        self.lock_dir = lock_dir or os.path.join(tempfile.gettempdir(), "storefront_locks")

    def _now_ms(self) -> int:
        return int(time.time() * 1000)

    @contextmanager
    def _slug_lock(self, slug: str):
        """
        Serialise check-then-write on one slug across workers and processes.
        The unique index on products.slug still has the final word.
        """
        os.makedirs(self.lock_dir, exist_ok=True)
        name = hashlib.sha1(slug.encode("utf-8")).hexdigest()
        lock = FileLock(os.path.join(self.lock_dir, f"slug_{name}.lock"))
        try:
            with lock.acquire(timeout=settings.SLUG_LOCK_TIMEOUT_SECONDS):
                yield
        except Timeout:
            log.error(f"timed out waiting for slug lock slug={slug!r}")
            raise StoreError("Could not acquire product lock; try again")

    # ---------------- reads ----------------

    def read_settings(self) -> Dict[str, str]:
        return self.site_settings.read()

    def list_products(self, sort: Optional[str] = None, limit: Any = None) -> List[Product]:
        newest_first = str(sort or "").lower() == SORT_NEW
        return self.products.list(newest_first=newest_first, limit=parse_limit(limit))

    def storefront_listing(self, sort: Optional[str] = None, limit: Any = None) -> Dict[str, Any]:
        listing = self.read_settings()
        listing["products"] = self.list_products(sort=sort, limit=limit)
        return listing

    def list_all_products(self) -> List[Product]:
        return self.products.list()

    def get_product(self, slug: str) -> Product:
        p = self.products.get_by_slug(slug)
        if not p:
            raise NotFound()
        return p

    def product_slugs(self) -> List[str]:
        return self.products.list_slugs()

    # ---------------- admin writes ----------------

    def create_product(self, fields: Dict[str, Any]) -> Product:
        name = _text(fields.get("name"))
        slug = _text(fields.get("slug"))
        if not name or not slug:
            raise ValidationError("Name and slug required")

        record = {
            "slug": slug,
            "name": name,
            "price": _price(fields.get("price", 0)),
            "grams": _grams(fields.get("grams", 0)),
            "category": _text(fields.get("category")),
            "image": _text(fields.get("image")),
            "short_desc": _text(fields.get("short_desc")),
            "created_at": self._now_ms(),
        }

        with self._slug_lock(slug):
            try:
                with transaction(self.db):
                    if self.products.slug_exists(slug):
                        raise Conflict()
                    p = self.products.add(**record)
            except IntegrityError as e:
                raise Conflict() from e
        log.info(f"product created slug={slug!r} id={p.id}")
        return p

    def update_product(self, slug: str, fields: Dict[str, Any]) -> Product:
        """
        Partial update: only fields present in ``fields`` change, everything
        else keeps its stored value. A new ``slug`` renames the product and is
        subject to the same uniqueness rule as create.
        """
        changes: Dict[str, Any] = {}
        if "name" in fields:
            changes["name"] = _text(fields["name"])
            if not changes["name"]:
                raise ValidationError("Name cannot be empty")
        if "slug" in fields:
            changes["slug"] = _text(fields["slug"])
            if not changes["slug"]:
                raise ValidationError("Slug cannot be empty")
        if "price" in fields:
            changes["price"] = _price(fields["price"])
        if "grams" in fields:
            changes["grams"] = _grams(fields["grams"])
        for key in ("category", "image", "short_desc"):
            if key in fields:
                changes[key] = _text(fields[key])

        new_slug = changes.get("slug", slug)
        with self._slug_lock(new_slug):
            try:
                with transaction(self.db):
                    p = self.products.get_by_slug(slug)
                    if not p:
                        raise NotFound()
                    if new_slug != slug and self.products.slug_exists(new_slug):
                        raise Conflict()
                    self.products.update(p, **changes)
            except IntegrityError as e:
                raise Conflict() from e
        log.info(f"product updated slug={slug!r} fields={sorted(changes)}")
        return p

    def delete_product(self, slug: str):
        with transaction(self.db):
            p = self.products.get_by_slug(slug)
            if not p:
                raise NotFound()
            self.products.delete(p)
        log.info(f"product deleted slug={slug!r}")
