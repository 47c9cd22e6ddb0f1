"""
Local filesystem backend.

Bytes are copied into a staging file next to the destination and moved into
place with os.replace, so a failed copy never leaves a partial file at the
destination path.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from uploader.core.config import settings
from uploader.services.storage.conflict import Decision, OnFileExists, resolve
from uploader.services.storage.hasher import hash_file_content
from uploader.services.storage.interfaces import StorageBackend
from uploader.services.storage.results import CommitResult, PathConflict, ReadError, WriteError

logger = logging.getLogger(__name__)


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove staging file {path}: {e}")


class LocalBackend(StorageBackend):
    """Stores uploads on the local filesystem"""

    def __init__(self, root: Optional[str] = None, chunk_size: Optional[int] = None):
        self.root = Path(root) if root else None
        self.chunk_size = chunk_size or settings.hash_chunk_size

    @classmethod
    def from_settings(cls) -> "LocalBackend":
        return cls(root=settings.storage_path, chunk_size=settings.hash_chunk_size)

    def __repr__(self):
        return f"LocalBackend(root={str(self.root) if self.root else None!r})"

    def resolve_path(self, dest_path: str) -> Path:
        path = Path(dest_path)
        if self.root is not None and not path.is_absolute():
            return self.root / path
        return path

    def _hash(self, path: str) -> str:
        return hash_file_content(path, self.chunk_size)

    def commit(self,
               source_path: str,
               dest_path: str,
               on_file_exists: Optional[OnFileExists] = None) -> CommitResult:
        target = self.resolve_path(dest_path)

        def hash_stored(path):
            try:
                return self._hash(path)
            except ReadError as e:
                raise ReadError(dest_path) from e

        try:
            decision = resolve(target.exists(), on_file_exists, str(source_path), str(target),
                               hasher=self._hash, dest_hasher=hash_stored)
        except ReadError as e:
            return CommitResult.fail(e)

        if decision is Decision.SKIP:
            logger.info(f"Skipping {dest_path}: identical content already stored")
            return CommitResult.skip()

        if decision is Decision.FAIL:
            logger.info(f"Refusing to replace existing file {dest_path}")
            return CommitResult.fail(PathConflict(dest_path))

        return self._copy_file(source_path, dest_path, target)

    def _copy_file(self, source_path: str, dest_path: str, target: Path) -> CommitResult:
        if not os.path.isfile(source_path) or not os.access(source_path, os.R_OK):
            return CommitResult.fail(ReadError(source_path))

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create directory {target.parent}: {e}")
            return CommitResult.fail(WriteError(dest_path))

        staging_path = None
        try:
            fd, staging_path = tempfile.mkstemp(prefix=".upload-", dir=str(target.parent))
            os.close(fd)
            shutil.copy2(source_path, staging_path)
            os.replace(staging_path, target)
            staging_path = None
        except OSError as e:
            logger.error(f"Failed to copy {source_path} to {dest_path}: {e}")
            return CommitResult.fail(WriteError(dest_path))
        finally:
            if staging_path is not None:
                _discard(staging_path)

        logger.info(f"Stored {source_path} as {target}")
        return CommitResult.success()
