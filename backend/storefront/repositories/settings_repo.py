from typing import Dict

from sqlalchemy.orm import Session
from storefront.models.site_settings import DEFAULT_SETTINGS, SiteSettings


class SettingsRepository:
    def __init__(self, db: Session):
        self.db = db

    def read(self) -> Dict[str, str]:
        """Return the singleton settings; a missing row reads as the defaults."""
        row = self.db.get(SiteSettings, SiteSettings.SINGLETON_ID)
        if row is None:
            return dict(DEFAULT_SETTINGS)
        return {"currency": row.currency, "phone": row.phone}
