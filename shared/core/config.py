import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Asset Tag")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-asset-tag-secret")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv(
        "JWT_EXPIRE_MINUTES", "1440"))  # 24 hours default

    AUTH_DATABASE_URL: str = os.getenv(
        "AUTH_DATABASE_URL", "sqlite:///./asset_tag_auth.db")
    ASSET_DATABASE_URL: str = os.getenv(
        "ASSET_DATABASE_URL", "sqlite:///./asset_tag.db")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "2"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "2"))

    # Rendered QR tags are archived under this directory
    TAG_STORAGE_DIR: str = os.getenv("TAG_STORAGE_DIR", "storage")
    TAG_PUBLIC_URL: str = os.getenv("TAG_PUBLIC_URL", "/storage")

    # hex encoded, used for server account passwords
    ENCRYPTION_KEY: str | None = os.getenv("ENCRYPTION_KEY")

    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


settings = Settings()

AUTH_DATABASE_URL = settings.AUTH_DATABASE_URL
ASSET_DATABASE_URL = settings.ASSET_DATABASE_URL
