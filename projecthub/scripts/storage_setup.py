"""
Operator commands for the object store.

    python -m projecthub.scripts.storage_setup check
    python -m projecthub.scripts.storage_setup ensure
    python -m projecthub.scripts.storage_setup make-public [--create]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from sqlalchemy import text

from projecthub.core.config import settings
from projecthub.core.logging import configure_logging
from projecthub.integrations.storage import (
    BucketConfig,
    BucketProvisioner,
    ObjectStoreClient,
    StorageError,
    resolve_public_url,
)


def _mask(value: Optional[str]) -> str:
    return "***set***" if value else "not set"


def check(config: BucketConfig, client: ObjectStoreClient) -> int:
    """Print the configuration, ping the database and list buckets."""
    failures = 0

    print("Environment:")
    print(f"  MINIO_ENDPOINT: {config.endpoint_url}")
    print(f"  MINIO_BUCKET_NAME: {config.bucket_name or 'not set'}")
    print(f"  MINIO_PUBLIC_URL: {config.public_base_url or 'not set'}")
    print(f"  MINIO_ACCESS_KEY: {_mask(config.access_key)}")
    print(f"  MINIO_SECRET_KEY: {_mask(config.secret_key)}")
    print()

    print("Database:")
    try:
        from projecthub.db.session import engine

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("  ok")
    except Exception as exc:  # report any driver/connection error and keep checking
        failures += 1
        print(f"  FAILED: {exc}")
    print()

    print("Object store:")
    try:
        buckets = client.list_buckets()
        print("  ok")
        print(f"  buckets: {', '.join(buckets) or 'none'}")
    except StorageError as exc:
        failures += 1
        print(f"  FAILED: {exc.message}")

    return 1 if failures else 0


def ensure(provisioner: BucketProvisioner) -> int:
    try:
        created = provisioner.ensure()
    except StorageError as exc:
        print(f"Could not provision bucket: {exc.message}")
        return 1
    print("Bucket created" if created else "Bucket already exists")
    return 0


def make_public(
    config: BucketConfig,
    client: ObjectStoreClient,
    provisioner: BucketProvisioner,
    create: bool = False,
) -> int:
    """Apply the anonymous-read policy so object URLs work without signing."""
    try:
        bucket = config.validated_bucket_name()
        if not client.bucket_exists(bucket):
            if not create:
                print(f'Bucket "{bucket}" does not exist. Re-run with --create or create it first.')
                return 1
            client.make_bucket(bucket, config.region)
            print(f'Bucket "{bucket}" created')
        provisioner.apply_policy()
    except StorageError as exc:
        print(f"Failed to set public access: {exc.message}")
        return 1

    print(f'Bucket "{bucket}" is now publicly readable.')
    print(f"Images are served at: {resolve_public_url(config, bucket, '<filename>.jpg')}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Object storage setup for ProjectHub")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("check", help="Check configuration, database and object store connectivity")
    sub.add_parser("ensure", help="Create the bucket (with public-read policy) if missing")
    public = sub.add_parser("make-public", help="Apply the anonymous-read policy to the bucket")
    public.add_argument("--create", action="store_true", help="Create the bucket if it is missing")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    config = BucketConfig.from_settings(settings)
    client = ObjectStoreClient(config)
    provisioner = BucketProvisioner(config, client)

    if args.command == "check":
        return check(config, client)
    if args.command == "ensure":
        return ensure(provisioner)
    return make_public(config, client, provisioner, create=args.create)


if __name__ == "__main__":
    sys.exit(main())
