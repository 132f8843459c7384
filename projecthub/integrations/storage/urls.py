"""Public URL construction for stored objects."""

from __future__ import annotations

from projecthub.integrations.storage.config import BucketConfig


def resolve_public_url(config: BucketConfig, bucket_name: str, object_name: str) -> str:
    """
    Build the permanent, unsigned URL of an object.

    With MINIO_PUBLIC_URL set, the object is addressed through that base.
    A subdomain (https://images.example.com) and a path-prefixed proxy
    (https://example.com/minio) only differ in the base itself, so both
    reduce to base + "/" + bucket + "/" + object. Without it, the S3
    endpoint is addressed directly.

    The URL only resolves while the bucket's anonymous-read policy is in
    effect.
    """
    if config.public_base_url:
        base = config.public_base_url.rstrip("/")
        return f"{base}/{bucket_name}/{object_name}"

    return f"{config.endpoint_url}/{bucket_name}/{object_name}"
