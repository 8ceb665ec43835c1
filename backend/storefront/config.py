from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    SECRET_KEY: str = "change-this-secret"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # admin auth
    ADMIN_PASSWORD_HASH: str = ""
    SESSION_COOKIE_NAME: str = "admin-session"
    SESSION_COOKIE_SECURE: bool = True
    SESSION_TTL_SECONDS: int = 86400
    SESSION_PURGE_INTERVAL_SECONDS: int = 300

    # login throttle
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_WINDOW_SECONDS: int = 600
    THROTTLE_STORAGE_URI: str = "memory://"
    TRUST_PROXY: bool = False

    SLUG_LOCK_TIMEOUT_SECONDS: int = 10
    SITE_BASE_URL: str = "https://example.com"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
