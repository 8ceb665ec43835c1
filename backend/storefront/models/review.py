from sqlalchemy import BigInteger, Boolean, Column, Integer, String, Text
from storefront.db import Base


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False)
    title = Column(String(256), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(BigInteger, nullable=False, index=True)  # epoch milliseconds
    approved = Column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self):
        return f"<Review id={self.id} approved={self.approved}>"
