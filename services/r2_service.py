import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import anyio
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.config import R2Settings


logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an upload or delete against object storage fails."""


@dataclass
class StoredObject:
    key: str
    url: str


def build_object_key(folder: str, filename: str, now_ms: Optional[int] = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{folder.strip('/')}/{stamp}-{filename}"


def build_public_url(public_base_url: str, key: str) -> str:
    return f"{public_base_url.rstrip('/')}/{key}"


class R2Storage:
    """Cloudflare R2 bucket accessed through the S3-compatible API."""

    def __init__(self, settings: R2Settings, client: Any = None):
        self.settings = settings
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            region_name="auto",
        )

    def key_from_url(self, url: str) -> Optional[str]:
        if not url:
            return None
        prefix = f"{self.settings.public_url.rstrip('/')}/"
        if url.startswith(prefix):
            return url[len(prefix):]
        return None

    def upload_bytes(self, file_bytes: bytes, filename: str, content_type: str, folder: str = "uploads") -> StoredObject:
        key = build_object_key(folder, filename)
        try:
            self.client.put_object(
                Bucket=self.settings.bucket,
                Key=key,
                Body=file_bytes,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Error uploading %s to R2", key)
            raise StorageError("Failed to upload file") from exc
        return StoredObject(key=key, url=build_public_url(self.settings.public_url, key))

    def delete_object(self, key: str) -> bool:
        try:
            self.client.delete_object(Bucket=self.settings.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Error deleting %s from R2", key)
            raise StorageError("Failed to delete file") from exc
        return True

    async def upload(self, file_bytes: bytes, filename: str, content_type: str, folder: str = "uploads") -> StoredObject:
        return await anyio.to_thread.run_sync(self.upload_bytes, file_bytes, filename, content_type, folder)

    async def delete(self, key: str) -> bool:
        return await anyio.to_thread.run_sync(self.delete_object, key)

