from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure env file is loaded before Settings() reads environment variables
from projecthub.core.env import load_env
load_env()


class Settings(BaseSettings):
    # Pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_file=None,  # we load via projecthub.core.env (ENV_FILE)
        extra="ignore",
        case_sensitive=True,
    )

    DATABASE_URL: str

    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Startup behaviour
    DB_INIT_ON_STARTUP: bool = True
    STORAGE_ENSURE_ON_STARTUP: bool = True

    # Object storage (MinIO or any S3-compatible endpoint)
    MINIO_ENDPOINT: str = "localhost"
    MINIO_PORT: int = Field(
        default=9000,
        validation_alias=AliasChoices("MINIO_PORT", "MINIO_API_PORT"),
    )
    MINIO_USE_SSL: bool = False
    MINIO_ACCESS_KEY: str = "minioadmin"
    MINIO_SECRET_KEY: str = "minioadmin"
    # Validated when the bucket is first used, not here
    MINIO_BUCKET_NAME: str = "project-images"
    MINIO_PUBLIC_URL: Optional[str] = None  # e.g. https://images.example.com or https://example.com/minio
    MINIO_REGION: str = "us-east-1"
    STORAGE_CONNECT_TIMEOUT: float = 5.0
    STORAGE_READ_TIMEOUT: float = 30.0

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
