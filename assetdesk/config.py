import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    APP_ENV: str = "development"
    BASE_URL: str = "http://localhost:8000"
    SECRET_KEY: str = _DEFAULT_SECRET
    DATABASE_URL: str = "sqlite:///./data/assetdesk.db"
    FIRST_ADMIN_EMAIL: str = "admin@assetdesk.local"
    FIRST_ADMIN_PASS: str = "admin123"
    APP_TIMEZONE: str = "Asia/Manila"
    LOG_LEVEL: str = "INFO"
    CACHE_TTL_SECONDS: int = 300
    ASSET_TAG_MAX_RETRIES: int = 3
    OLD_ITEM_YEARS: int = 5

    class Config:
        env_file = ".env"


settings = Settings()

if settings.SECRET_KEY == _DEFAULT_SECRET:
    if settings.APP_ENV == "production":
        raise RuntimeError("SECRET_KEY must be set in production! Check your .env file.")
    else:
        logger.warning("SECRET_KEY uses the default value, set it in .env before deploying")

if settings.FIRST_ADMIN_PASS == "admin123":
    logger.warning("FIRST_ADMIN_PASS uses the default value 'admin123', change it in .env")
