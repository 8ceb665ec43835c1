from sqlalchemy import BigInteger, Column, Float, Integer, String, Text
from storefront.db import Base

class Product(Base):
    __tablename__ = "products"
    # ids are never reused after a delete
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(191), unique=True, index=True, nullable=False)
    name = Column(String(256), nullable=False)
    price = Column(Float, nullable=False, default=0)
    grams = Column(Integer, nullable=False, default=0)
    category = Column(String(128), nullable=False, default="")
    image = Column(String(512), nullable=False, default="")
    short_desc = Column(Text, nullable=False, default="")
    created_at = Column(BigInteger, nullable=False, index=True)  # epoch milliseconds

    def __repr__(self):
        return f"<Product slug={self.slug} name={self.name}>"
