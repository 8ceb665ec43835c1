from typing import List, Optional

from storefront.models.product import Product
from sqlalchemy.orm import Session


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.slug == slug).first()

    def slug_exists(self, slug: str) -> bool:
        return (
            self.db.query(Product.id).filter(Product.slug == slug).first() is not None
        )

    def list(self, newest_first: bool = False, limit: Optional[int] = None) -> List[Product]:
        """
        Default order is reverse insertion (id DESC). ``newest_first`` orders by
        creation timestamp instead, with id as the tie-break.
        """
        query = self.db.query(Product)
        if newest_first:
            query = query.order_by(Product.created_at.desc(), Product.id.desc())
        else:
            query = query.order_by(Product.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def list_slugs(self) -> List[str]:
        return [row[0] for row in self.db.query(Product.slug).order_by(Product.id).all()]

    def add(self, **fields) -> Product:
        p = Product(**fields)
        self.db.add(p)
        self.db.flush()
        return p

    def update(self, product: Product, **fields) -> Product:
        for key, value in fields.items():
            setattr(product, key, value)
        self.db.flush()
        return product

    def delete(self, product: Product):
        self.db.delete(product)
        self.db.flush()
