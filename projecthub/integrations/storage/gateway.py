"""
Image storage gateway.

Stores an uploaded image in the object store and returns its permanent
public URL. When the object store cannot be reached, the image is returned
inline as a base64 data: URL instead, so callers always get a usable URL to
persist in the owning record.
"""

from __future__ import annotations

import base64
import binascii
import enum
import io
import re
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Optional

from projecthub.core.logging import get_logger
from projecthub.core.upload_constants import (
    DEFAULT_IMAGE_EXTENSION,
    IMAGE_MIME_PREFIX,
    MAX_IMAGE_SIZE_BYTES,
)
from projecthub.integrations.storage.client import ObjectStoreClient
from projecthub.integrations.storage.config import BucketConfig
from projecthub.integrations.storage.errors import (
    AssetValidationError,
    BackendUnavailable,
    TooLarge,
    WriteFailure,
)
from projecthub.integrations.storage.provisioner import BucketProvisioner
from projecthub.integrations.storage.urls import resolve_public_url

logger = get_logger(__name__)

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]+);base64,(?P<payload>.*)$", re.DOTALL)


class StorageKind(str, enum.Enum):
    object_store = "object_store"
    inline = "inline"


@dataclass(frozen=True)
class StoredAsset:
    """One uploaded file, alive for the duration of a single request."""
    data: bytes
    mime_type: str
    size_bytes: int
    filename: Optional[str] = None

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str, filename: Optional[str] = None) -> "StoredAsset":
        return cls(
            data=data,
            mime_type=media_type(mime_type),
            size_bytes=len(data),
            filename=filename,
        )


def media_type(content_type: Optional[str]) -> str:
    """`image/png; charset=binary` -> `image/png`."""
    return (content_type or "").split(";", 1)[0].strip()


@dataclass(frozen=True)
class UploadResult:
    url: str
    storage_kind: StorageKind
    object_name: Optional[str] = None
    bucket: Optional[str] = None
    mime_type: Optional[str] = None
    size_bytes: Optional[int] = None


def generate_object_name(filename: Optional[str]) -> str:
    """
    `<epoch-millis>-<random>.<ext>`, keeping the original extension.

    Collisions are improbable, not impossible.
    """
    ext = ""
    if filename and "." in filename:
        ext = re.sub(r"[^a-z0-9]", "", filename.rsplit(".", 1)[-1].lower())
    ext = ext or DEFAULT_IMAGE_EXTENSION
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}.{ext}"


def encode_inline_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_inline_url(url: str) -> tuple[str, bytes]:
    """Inverse of encode_inline_url: returns (mime_type, data)."""
    match = _DATA_URL_RE.match(url or "")
    if not match:
        raise AssetValidationError("Not a base64 data URL")
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AssetValidationError(f"Invalid base64 payload: {exc}") from exc
    return match.group("mime"), data


def storage_kind_of(url: Optional[str]) -> Optional[str]:
    """Classify a stored image URL for logging; None when there is no image."""
    if not url:
        return None
    if url.startswith("data:"):
        return StorageKind.inline.value
    return StorageKind.object_store.value


class StorageGateway:
    """
    Decides where an image goes and returns the URL to persist.

    Flow per call:
    1. Validate the asset (image MIME type, non-empty, at most 5 MiB).
       Nothing touches the backend before this passes.
    2. Provision the bucket. BackendUnavailable here means "store down"
       and selects the inline fallback for this request only.
    3. Otherwise write the object once and resolve its public URL.
       A write failure is raised as WriteFailure, never masked by the
       fallback: the store was reachable a moment ago, so this is a
       different fault.
    """

    def __init__(
        self,
        config: BucketConfig,
        client: ObjectStoreClient,
        provisioner: Optional[BucketProvisioner] = None,
        name_factory: Callable[[Optional[str]], str] = generate_object_name,
    ):
        self._config = config
        self._client = client
        self._provisioner = provisioner or BucketProvisioner(config, client)
        self._name_factory = name_factory

    @property
    def provisioner(self) -> BucketProvisioner:
        return self._provisioner

    def validate(self, asset: StoredAsset) -> None:
        """Raise AssetValidationError if the asset cannot be stored."""
        mime_type = (asset.mime_type or "").lower()
        if not mime_type.startswith(IMAGE_MIME_PREFIX):
            raise AssetValidationError(
                "File must be an image",
                details={"mime_type": asset.mime_type or ""},
            )
        if not asset.data:
            raise AssetValidationError("File buffer is empty")
        if asset.size_bytes > MAX_IMAGE_SIZE_BYTES or len(asset.data) > MAX_IMAGE_SIZE_BYTES:
            raise TooLarge(
                "Image size must be at most 5MB",
                details={"size_bytes": str(asset.size_bytes), "max_bytes": str(MAX_IMAGE_SIZE_BYTES)},
            )

    def store(self, asset: StoredAsset) -> UploadResult:
        """
        Store an image and return where it can be fetched.

        Raises:
            AssetValidationError: wrong type, empty, or too large
            ConfigurationError: bucket name not configured
            WriteFailure: object write rejected after provisioning succeeded
        """
        self.validate(asset)

        try:
            self._provisioner.ensure()
        except BackendUnavailable as exc:
            logger.warning(
                "object store unreachable, storing image inline",
                error=exc.message,
                size_bytes=asset.size_bytes,
            )
            return self._store_inline(asset)

        return self._store_object(asset)

    def _store_inline(self, asset: StoredAsset) -> UploadResult:
        url = encode_inline_url(asset.data, asset.mime_type)
        logger.info("image encoded inline", mime_type=asset.mime_type, size_bytes=asset.size_bytes)
        return UploadResult(
            url=url,
            storage_kind=StorageKind.inline,
            mime_type=asset.mime_type,
            size_bytes=asset.size_bytes,
        )

    def _store_object(self, asset: StoredAsset) -> UploadResult:
        bucket = self._config.validated_bucket_name()
        object_name = self._name_factory(asset.filename)

        logger.info(
            "uploading image",
            bucket=bucket,
            object_name=object_name,
            size_bytes=len(asset.data),
            mime_type=asset.mime_type,
        )
        try:
            self._client.put_object(
                bucket,
                object_name,
                io.BytesIO(asset.data),
                len(asset.data),
                asset.mime_type,
            )
        except BackendUnavailable as exc:
            logger.error("image upload failed", bucket=bucket, object_name=object_name, error=exc.message)
            raise WriteFailure(
                f"Failed to upload file to object storage: {exc.message}",
                details={"bucket": bucket, "object": object_name},
            ) from exc

        url = resolve_public_url(self._config, bucket, object_name)
        logger.info("image stored", bucket=bucket, object_name=object_name, url=url)
        return UploadResult(
            url=url,
            storage_kind=StorageKind.object_store,
            object_name=object_name,
            bucket=bucket,
        )
