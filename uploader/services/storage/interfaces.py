from abc import ABC, abstractmethod
from typing import Optional

from uploader.services.storage.conflict import OnFileExists
from uploader.services.storage.results import CommitResult


class StorageBackend(ABC):
    """Abstract storage backend interface"""
    @abstractmethod
    def commit(self,
               source_path: str,
               dest_path: str,
               on_file_exists: Optional[OnFileExists] = None) -> CommitResult:
        """Copy source_path to dest_path, honoring the conflict strategy."""
        pass
