"""Image storage gateway over an S3-compatible object store (MinIO)."""

from .config import BucketConfig
from .client import ObjectStoreClient
from .errors import (
    AssetValidationError,
    BackendUnavailable,
    ConfigurationError,
    PolicyAttachmentFailure,
    StorageError,
    TooLarge,
    WriteFailure,
)
from .gateway import (
    StorageGateway,
    StorageKind,
    StoredAsset,
    UploadResult,
    decode_inline_url,
    storage_kind_of,
)
from .provisioner import BucketProvisioner, anonymous_read_policy, ensure_bucket_on_startup
from .urls import resolve_public_url

__all__ = [
    "AssetValidationError",
    "BackendUnavailable",
    "BucketConfig",
    "BucketProvisioner",
    "ConfigurationError",
    "ObjectStoreClient",
    "PolicyAttachmentFailure",
    "StorageError",
    "StorageGateway",
    "StorageKind",
    "StoredAsset",
    "TooLarge",
    "UploadResult",
    "WriteFailure",
    "anonymous_read_policy",
    "decode_inline_url",
    "ensure_bucket_on_startup",
    "resolve_public_url",
    "storage_kind_of",
]
