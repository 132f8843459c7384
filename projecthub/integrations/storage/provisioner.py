"""Idempotent bucket provisioning with an anonymous-read policy."""

from __future__ import annotations

from projecthub.core.logging import get_logger
from projecthub.core.upload_constants import POLICY_VERSION
from projecthub.integrations.storage.client import ObjectStoreClient
from projecthub.integrations.storage.config import BucketConfig
from projecthub.integrations.storage.errors import PolicyAttachmentFailure, StorageError

logger = get_logger(__name__)


def anonymous_read_policy(bucket_name: str) -> dict:
    """Policy letting anyone locate/list the bucket and read its objects."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"AWS": ["*"]},
                "Action": ["s3:GetBucketLocation", "s3:ListBucket"],
                "Resource": [f"arn:aws:s3:::{bucket_name}"],
            },
            {
                "Effect": "Allow",
                "Principal": {"AWS": ["*"]},
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket_name}/*"],
            },
        ],
    }


class BucketProvisioner:
    """
    Makes sure the image bucket exists and is publicly readable.

    The same ensure() runs at startup (failures swallowed, see
    ensure_bucket_on_startup) and before every upload (failures decide the
    fallback). It holds no mutable state, so concurrent calls are safe.
    """

    def __init__(self, config: BucketConfig, client: ObjectStoreClient):
        self._config = config
        self._client = client

    def ensure(self) -> bool:
        """
        Ensure the bucket exists.

        Returns:
            True if the bucket was created by this call

        Raises:
            ConfigurationError: bucket name missing or a placeholder
            BackendUnavailable: the store could not be reached
        """
        bucket = self._config.validated_bucket_name()

        if self._client.bucket_exists(bucket):
            logger.debug("bucket already exists", bucket=bucket)
            return False

        logger.info("bucket missing, creating", bucket=bucket, region=self._config.region)
        if not self._client.make_bucket(bucket, self._config.region):
            # A concurrent request created it; that request attaches the policy
            return False
        logger.info("bucket created", bucket=bucket)

        try:
            self._client.set_bucket_policy(bucket, anonymous_read_policy(bucket))
            logger.info("anonymous read policy set", bucket=bucket)
        except PolicyAttachmentFailure as exc:
            # Bucket is still usable; public URLs will 403 until the policy is fixed
            logger.warning(
                "could not set bucket policy",
                bucket=bucket,
                error=exc.message,
            )
        return True

    def apply_policy(self) -> str:
        """Reapply the anonymous-read policy to the existing bucket."""
        bucket = self._config.validated_bucket_name()
        self._client.set_bucket_policy(bucket, anonymous_read_policy(bucket))
        logger.info("anonymous read policy set", bucket=bucket)
        return bucket


def ensure_bucket_on_startup(provisioner: BucketProvisioner) -> bool:
    """
    Best-effort provisioning during process start.

    Never raises: the API must come up even when the object store is down,
    and uploads will retry provisioning (or fall back) per request.

    Returns:
        True if the bucket is known to exist afterwards
    """
    try:
        provisioner.ensure()
    except StorageError as exc:
        logger.warning(
            "object storage initialization failed, uploads will retry per request",
            error=exc.message,
            error_type=type(exc).__name__,
        )
        return False
    logger.info("object storage ready")
    return True
