from sqlalchemy import Column, Integer, String
from storefront.db import Base

DEFAULT_SETTINGS = {"currency": "USD", "phone": ""}


class SiteSettings(Base):
    __tablename__ = "settings"

    SINGLETON_ID = 1

    id = Column(Integer, primary_key=True, autoincrement=False)
    currency = Column(String(8), nullable=False, default="USD")
    phone = Column(String(64), nullable=False, default="")
