"""
Application Configuration

Centralized configuration management using Pydantic settings.
Loads from environment variables, a .env file, or one file per setting
under the mounted secrets directory (/etc/secrets on the hosting platform).
"""
import os
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded once at startup.

    SUPER_ADMIN_KEY and SECRET_KEY have no defaults: instantiating Settings
    without them (or with values too short to be secrets) raises a
    ValidationError and the process refuses to start.
    """

    # Secrets
    SUPER_ADMIN_KEY: str = Field(..., min_length=8)
    SECRET_KEY: str = Field(..., min_length=16)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    # When false, tenant admin routes only check that the tenant exists
    REQUIRE_TENANT_TOKEN: bool = True

    # Database settings
    DATABASE_URL: str = "sqlite:///./negocios.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40

    # Redis for rate limiting
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 120
    RATE_LIMIT_BURST: int = 30

    # Blob storage
    BLOB_BACKEND: str = "local"  # local, s3
    LOCAL_MEDIA_DIR: str = "./media"
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    S3_BUCKET: Optional[str] = None
    S3_REGION: Optional[str] = None
    S3_PUBLIC_URL: Optional[str] = None
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    # Application settings
    CORS_ORIGINS: List[str] = ["*"]
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        secrets_dir = os.getenv("SECRETS_DIR", "/etc/secrets")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Tests that need different values must call get_settings.cache_clear().
    """
    return Settings()
