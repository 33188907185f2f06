"""
Resume blob storage (the ``resumes`` bucket).

Two backends share one interface: a local directory for development and S3
for deployments. Keys are the original filename prefixed with an epoch
millisecond timestamp; there is no other collision handling.
"""
import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from portal.config import settings
from portal.core.exceptions import NotFound, RemoteServiceFailure
from portal.utils.helpers import timestamped_key

logger = structlog.get_logger(__name__)

BUCKET = "resumes"


class ResumeStorage(ABC):
    """Object storage for uploaded resumes."""

    @abstractmethod
    async def upload(self, filename: str, content: bytes) -> str:
        """Store the blob and return its storage path (``resumes/<key>``)."""

    @abstractmethod
    async def read(self, path: str) -> bytes:
        """Return the blob stored at ``path``."""


class LocalResumeStorage(ResumeStorage):
    """Stores resumes under RESUME_STORAGE_DIR."""

    def __init__(self, root: str = None):
        self.root = Path(root or settings.RESUME_STORAGE_DIR)

    def _resolve(self, path: str) -> Path:
        key = path[len(BUCKET) + 1:] if path.startswith(f"{BUCKET}/") else path
        resolved = (self.root / key).resolve()
        if self.root.resolve() not in resolved.parents:
            raise NotFound("Resume", path)
        return resolved

    async def upload(self, filename: str, content: bytes) -> str:
        key = timestamped_key(filename)
        try:
            os.makedirs(self.root, exist_ok=True)
            await asyncio.to_thread((self.root / key).write_bytes, content)
        except OSError as e:
            logger.error("resume_upload_failed", backend="local", key=key, error=str(e))
            raise RemoteServiceFailure("storage", str(e))
        logger.info("resume_uploaded", backend="local", key=key, size=len(content))
        return f"{BUCKET}/{key}"

    async def read(self, path: str) -> bytes:
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise NotFound("Resume", path)
        return await asyncio.to_thread(file_path.read_bytes)


class S3ResumeStorage(ResumeStorage):
    """Stores resumes in S3_BUCKET_NAME."""

    def __init__(self, bucket_name: str = None, client=None):
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.client = client or boto3.client("s3", region_name=settings.AWS_REGION)

    async def upload(self, filename: str, content: bytes) -> str:
        key = f"{BUCKET}/{timestamped_key(filename)}"
        try:
            await asyncio.to_thread(
                self.client.put_object, Bucket=self.bucket_name, Key=key, Body=content
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("resume_upload_failed", backend="s3", key=key, error=str(e))
            raise RemoteServiceFailure("storage", str(e))
        logger.info("resume_uploaded", backend="s3", key=key, size=len(content))
        return key

    async def read(self, path: str) -> bytes:
        try:
            obj = await asyncio.to_thread(self.client.get_object, Bucket=self.bucket_name, Key=path)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFound("Resume", path)
            raise RemoteServiceFailure("storage", str(e))
        except BotoCoreError as e:
            raise RemoteServiceFailure("storage", str(e))
        return await asyncio.to_thread(obj["Body"].read)


def get_resume_storage() -> ResumeStorage:
    """Backend selected by STORAGE_TYPE."""
    if settings.STORAGE_TYPE == "s3":
        return S3ResumeStorage()
    return LocalResumeStorage()
