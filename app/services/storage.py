"""
S3 object storage for uploaded videos. Videos are private; clients get
short-lived presigned GET URLs generated from the stored (bucket, key) pair.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from app.config import get_settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Upload or URL signing failed."""


@dataclass(frozen=True)
class ObjectLocation:
    bucket: str
    key: str


class ObjectStore(Protocol):
    def put_object(self, key: str, path: Path, content_type: str) -> ObjectLocation:
        ...

    def presigned_url(self, location: ObjectLocation, expires_in: int) -> str:
        ...


class S3ObjectStore:
    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    def put_object(self, key: str, path: Path, content_type: str) -> ObjectLocation:
        try:
            with path.open("rb") as body:
                self.client.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=body,
                    ContentType=content_type,
                )
        except (BotoCoreError, ClientError, OSError) as e:
            raise StorageError(f"put_object s3://{self.bucket}/{key} failed: {e}") from e
        logger.info("Uploaded %s to s3://%s/%s", path, self.bucket, key)
        return ObjectLocation(bucket=self.bucket, key=key)

    def presigned_url(self, location: ObjectLocation, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": location.bucket, "Key": location.key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"presign s3://{location.bucket}/{location.key} failed: {e}") from e


@lru_cache
def get_object_store() -> ObjectStore:
    """One S3 client per process (boto3 clients are thread-safe)."""
    settings = get_settings()
    client = boto3.client(
        "s3",
        region_name=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url or None,
    )
    return S3ObjectStore(client, settings.s3_bucket)
