"""S3-compatible object store transport (MinIO in production)."""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Optional, Union

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from projecthub.core.logging import get_logger
from projecthub.integrations.storage.config import BucketConfig
from projecthub.integrations.storage.errors import BackendUnavailable, PolicyAttachmentFailure

logger = get_logger(__name__)

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}
_ALREADY_EXISTS_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _http_status(exc: ClientError) -> Optional[int]:
    return exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")


class ObjectStoreClient:
    """
    Thin wrapper over a boto3 S3 client.

    Exposes only what the bucket provisioner and storage gateway need. Every
    transport or auth failure is raised as BackendUnavailable so callers can
    treat "store unreachable" uniformly; a missing bucket is not an error.
    """

    def __init__(self, config: BucketConfig, s3_client: Any = None):
        self._config = config
        if s3_client is None:
            # Path-style addressing: MinIO serves buckets under the endpoint path
            boto_config = Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                connect_timeout=config.connect_timeout,
                read_timeout=config.read_timeout,
                retries={"max_attempts": 2, "mode": "standard"},
            )
            s3_client = boto3.client(
                "s3",
                endpoint_url=config.endpoint_url,
                aws_access_key_id=config.access_key,
                aws_secret_access_key=config.secret_key,
                region_name=config.region,
                config=boto_config,
            )
            logger.info("object store client initialized", endpoint=config.endpoint_url)
        self._s3 = s3_client

    def bucket_exists(self, name: str) -> bool:
        """
        Check whether a bucket exists.

        Args:
            name: Bucket name

        Returns:
            True if present, False if the store answered "no such bucket"

        Raises:
            BackendUnavailable: the store could not be reached or refused us
        """
        try:
            self._s3.head_bucket(Bucket=name)
            return True
        except ClientError as exc:
            if _error_code(exc) in _MISSING_BUCKET_CODES or _http_status(exc) == 404:
                return False
            raise BackendUnavailable(
                f"Bucket existence check failed: {exc}",
                details={"bucket": name, "code": _error_code(exc)},
            ) from exc
        except BotoCoreError as exc:
            raise BackendUnavailable(
                f"Object store unreachable at {self._config.endpoint_url}: {exc}",
                details={"bucket": name},
            ) from exc

    def make_bucket(self, name: str, region: str) -> bool:
        """
        Create a bucket.

        "Already exists" answers count as success so concurrent provisioning
        never fails a request.

        Returns:
            True if this call created the bucket, False if it already existed
        """
        params: dict[str, Any] = {"Bucket": name}
        # us-east-1 is the default location and must not be sent explicitly
        if region and region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}

        try:
            self._s3.create_bucket(**params)
            return True
        except ClientError as exc:
            if _error_code(exc) in _ALREADY_EXISTS_CODES:
                logger.info("bucket already exists", bucket=name)
                return False
            raise BackendUnavailable(
                f"Bucket creation failed: {exc}",
                details={"bucket": name, "code": _error_code(exc)},
            ) from exc
        except BotoCoreError as exc:
            raise BackendUnavailable(f"Bucket creation failed: {exc}", details={"bucket": name}) from exc

    def set_bucket_policy(self, name: str, policy: Union[dict, str]) -> None:
        """
        Attach a bucket policy document.

        Raises:
            PolicyAttachmentFailure: on any failure, including connectivity
        """
        document = policy if isinstance(policy, str) else json.dumps(policy)
        try:
            self._s3.put_bucket_policy(Bucket=name, Policy=document)
        except (ClientError, BotoCoreError) as exc:
            raise PolicyAttachmentFailure(
                f"Could not set bucket policy: {exc}",
                details={"bucket": name},
            ) from exc

    def put_object(
        self,
        bucket: str,
        name: str,
        stream: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        """
        Write one object from a byte stream.

        Args:
            bucket: Target bucket
            name: Object key
            stream: Readable binary stream positioned at the start
            size: Exact number of bytes in the stream
            content_type: Stored as the object's Content-Type
        """
        try:
            self._s3.put_object(
                Bucket=bucket,
                Key=name,
                Body=stream,
                ContentLength=size,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise BackendUnavailable(
                f"Object write failed: {exc}",
                details={"bucket": bucket, "object": name},
            ) from exc

    def list_buckets(self) -> list[str]:
        """Names of all buckets visible to these credentials."""
        try:
            response = self._s3.list_buckets()
        except (ClientError, BotoCoreError) as exc:
            raise BackendUnavailable(f"Listing buckets failed: {exc}") from exc
        return [bucket["Name"] for bucket in response.get("Buckets", [])]
