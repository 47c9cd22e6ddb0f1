"""
Pytest configuration for Uploader tests
"""

import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from uploader.models.uploadable import UploadableMixin
from uploader.services.storage import CommitResult, OnFileExists, StorageBackend


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs"""
    with tempfile.TemporaryDirectory() as tmpdirname:
        yield Path(tmpdirname)


@pytest.fixture
def make_file(temp_dir):
    """Write bytes to a file under temp_dir and return its path"""
    def _make_file(relative: str, content: bytes) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _make_file


class RecordingBackend(StorageBackend):
    """Backend that records every commit and returns scripted results"""

    def __init__(self, results: Optional[List[CommitResult]] = None):
        self.calls: List[Tuple[str, str, OnFileExists]] = []
        self.results = list(results or [])

    def commit(self, source_path, dest_path, on_file_exists=None):
        self.calls.append((source_path, dest_path, on_file_exists))
        if self.results:
            return self.results.pop(0)
        return CommitResult.success()


@pytest.fixture
def recording_backend():
    return RecordingBackend()


class Document(UploadableMixin):
    """Plain entity used by the orchestrator tests"""

    def __init__(self, **values):
        for name, value in values.items():
            setattr(self, name, value)


def make_entity_class(*configs, name: str = "Document"):
    """Build a Document subclass with the given upload fields"""
    return type(name, (Document,), {"__upload_fields__": tuple(configs)})
