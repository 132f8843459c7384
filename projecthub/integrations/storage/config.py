"""Bucket configuration, built once at startup and passed to the gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from projecthub.core.upload_constants import PLACEHOLDER_BUCKET_NAMES
from projecthub.integrations.storage.errors import ConfigurationError


@dataclass(frozen=True)
class BucketConfig:
    """
    Object-store connection and publication settings.

    Immutable after load. The bucket name is deliberately not validated
    here: an empty or placeholder name surfaces as ConfigurationError the
    first time the bucket is used, so the server can still boot.
    """
    endpoint: str
    port: int
    use_tls: bool
    access_key: str
    secret_key: str
    bucket_name: str
    public_base_url: Optional[str] = None
    region: str = "us-east-1"
    connect_timeout: float = 5.0
    read_timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings) -> "BucketConfig":
        return cls(
            endpoint=settings.MINIO_ENDPOINT.strip(),
            port=settings.MINIO_PORT,
            use_tls=settings.MINIO_USE_SSL,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            bucket_name=settings.MINIO_BUCKET_NAME,
            public_base_url=(settings.MINIO_PUBLIC_URL or "").strip() or None,
            region=settings.MINIO_REGION,
            connect_timeout=settings.STORAGE_CONNECT_TIMEOUT,
            read_timeout=settings.STORAGE_READ_TIMEOUT,
        )

    @property
    def scheme(self) -> str:
        return "https" if self.use_tls else "http"

    @property
    def endpoint_url(self) -> str:
        """
        Base URL of the S3 API, e.g. http://localhost:9000.

        MINIO_ENDPOINT may be `host` or `host:port`; an explicit port there
        wins over MINIO_PORT.
        """
        _, sep, tail = self.endpoint.rpartition(":")
        if sep and tail.isdigit():
            return f"{self.scheme}://{self.endpoint}"
        return f"{self.scheme}://{self.endpoint}:{self.port}"

    def validated_bucket_name(self) -> str:
        """Return the trimmed bucket name or raise ConfigurationError."""
        name = (self.bucket_name or "").strip()
        if name.lower() in PLACEHOLDER_BUCKET_NAMES:
            raise ConfigurationError(
                "MINIO_BUCKET_NAME is not set or invalid",
                details={"bucket_name": self.bucket_name or ""},
            )
        return name
