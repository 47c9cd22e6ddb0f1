import logging
import os
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from uploader.core.config import settings
from uploader.services.storage.conflict import Decision, OnFileExists, resolve
from uploader.services.storage.hasher import hash_file_content, iter_chunks, sha256_of_chunks
from uploader.services.storage.interfaces import StorageBackend
from uploader.services.storage.results import CommitResult, PathConflict, ReadError, WriteError

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class R2Config:
    """Immutable configuration object"""
    def __init__(self, bucket: str, endpoint: str, access_key: str, secret_key: str):
        self.bucket = bucket
        self.endpoint = endpoint
        self.access_key = access_key
        self.secret_key = secret_key

    @classmethod
    def from_settings(cls) -> "R2Config":
        missing = [name for name in ("r2_bucket", "r2_endpoint", "r2_access_key", "r2_secret_key")
                   if not getattr(settings, name)]
        if missing:
            raise ValueError(f"R2 backend is not configured, missing: {', '.join(missing)}")
        return cls(
            bucket=settings.r2_bucket,
            endpoint=settings.r2_endpoint,
            access_key=settings.r2_access_key,
            secret_key=settings.r2_secret_key
        )


class R2Backend(StorageBackend):
    """R2 bucket storage backend"""
    def __init__(self, config: R2Config, object_prefix: str = "", client=None,
                 chunk_size: Optional[int] = None):
        self.bucket_name = config.bucket
        self.object_prefix = object_prefix
        self.chunk_size = chunk_size or settings.hash_chunk_size
        self.boto_client = client or boto3.client(
                's3',
                endpoint_url=config.endpoint,
                aws_access_key_id=config.access_key,
                aws_secret_access_key=config.secret_key,
                config=Config(
                    region_name='auto',
                    signature_version='s3v4'
                )
            )

    def __repr__(self):
        return f"R2Backend(bucket={self.bucket_name!r}, prefix={self.object_prefix!r})"

    def object_key(self, dest_path: str) -> str:
        return self.object_prefix + str(dest_path).lstrip("/")

    def object_exists(self, object_key: str) -> bool:
        try:
            self.boto_client.head_object(
                Bucket=self.bucket_name,
                Key=object_key
            )
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return False
            raise

    def hash_object(self, object_key: str) -> str:
        """Stream a stored object through the same chunked SHA-256 as local files."""
        try:
            response = self.boto_client.get_object(Bucket=self.bucket_name, Key=object_key)
            body = response["Body"]
            try:
                return sha256_of_chunks(iter_chunks(body, self.chunk_size))
            finally:
                body.close()
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not read {object_key} from {self.bucket_name}: {e}")
            raise ReadError(object_key) from e

    def commit(self,
               source_path: str,
               dest_path: str,
               on_file_exists: Optional[OnFileExists] = None) -> CommitResult:
        object_key = self.object_key(dest_path)

        def hash_source(path):
            return hash_file_content(path, self.chunk_size)

        def hash_stored(key):
            try:
                return self.hash_object(key)
            except ReadError as e:
                raise ReadError(dest_path) from e

        try:
            exists = self.object_exists(object_key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Could not check {object_key} in {self.bucket_name}: {e}")
            return CommitResult.fail(ReadError(dest_path))

        try:
            decision = resolve(exists, on_file_exists, str(source_path), object_key,
                               hasher=hash_source, dest_hasher=hash_stored)
        except ReadError as e:
            return CommitResult.fail(e)

        if decision is Decision.SKIP:
            logger.info(f"Skipping {object_key}: identical content already stored")
            return CommitResult.skip()

        if decision is Decision.FAIL:
            return CommitResult.fail(PathConflict(dest_path))

        if not os.path.isfile(source_path):
            return CommitResult.fail(ReadError(source_path))

        try:
            self.boto_client.upload_file(str(source_path), self.bucket_name, object_key)
        except (ClientError, BotoCoreError, OSError) as e:
            logger.error(f"Upload failed for {object_key}: {e}")
            return CommitResult.fail(WriteError(dest_path))

        logger.info(f"Uploaded {source_path} to {self.bucket_name}/{object_key}")
        return CommitResult.success()


class R2BackendBuilder:
    """Constructs the backend from settings"""
    @staticmethod
    def build(object_prefix: str = "") -> R2Backend:
        return R2Backend(R2Config.from_settings(), object_prefix=object_prefix)
