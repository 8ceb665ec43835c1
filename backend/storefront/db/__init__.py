import importlib
import os

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker, declarative_base
from storefront.config import settings
from storefront.utils.logger import get_logger

DATABASE_URL = settings.DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # handlers run in the threadpool, so one connection may cross threads
    connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# largest value an INTEGER column or LIMIT clause accepts on SQLite and PostgreSQL
MAX_INTEGER = 2 ** 63 - 1

log = get_logger("store")

# Model modules that must be imported so Base.metadata knows every table.
MODEL_MODULES = [
    "storefront.models.product",
    "storefront.models.review",
    "storefront.models.site_settings",
    "storefront.models.admin_session",
]

# Columns added after the first release. Older databases get them via ALTER TABLE.
ADDITIVE_COLUMNS = {
    "products": {
        "grams": "INTEGER DEFAULT 0",
        "short_desc": "TEXT DEFAULT ''",
    },
}


def _ensure_additive_columns():
    insp = inspect(engine)
    for table, columns in ADDITIVE_COLUMNS.items():
        if not insp.has_table(table):
            continue
        existing = {c["name"] for c in insp.get_columns(table)}
        missing = [(name, ddl) for name, ddl in columns.items() if name not in existing]
        if not missing:
            continue
        with engine.begin() as conn:
            for name, ddl in missing:
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {ddl}"))
                log.info(f"added column {table}.{name}")


def _ensure_settings_row():
    from storefront.models.site_settings import DEFAULT_SETTINGS, SiteSettings

    s = SessionLocal()
    try:
        if s.get(SiteSettings, SiteSettings.SINGLETON_ID) is None:
            s.add(SiteSettings(id=SiteSettings.SINGLETON_ID, **DEFAULT_SETTINGS))
            s.commit()
            log.info("created default settings row")
    finally:
        s.close()


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - If ``reset`` is true or RESET_DB env var is set to 1/true/yes, drop & recreate tables.
      - Otherwise keep existing tables and only add missing additive columns.
      - Always make sure the settings singleton row exists.
    """
    env_reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")

    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or env_reset:
        log.info("resetting database")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    _ensure_additive_columns()
    _ensure_settings_row()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
