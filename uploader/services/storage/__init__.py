"""
Storage Service Package

Commits pending file uploads of an entity to durable storage.

Key Components:
- StorageBackend: Abstract base class for storage targets
- LocalBackend: Local filesystem implementation
- R2Backend: Cloudflare R2 implementation
- OnFileExists / resolve: Conflict policy for existing destinations
- hash_file_content: Streaming SHA-256 of a file
- FileUploadService: Main orchestration service
"""

from .results import (
    CommitResult,
    PathConflict,
    ReadError,
    StoreFailure,
    StoreResult,
    WriteError,
)
from .hasher import files_have_same_content, hash_file_content
from .conflict import Decision, OnFileExists, resolve
from .interfaces import StorageBackend
from .local_backend import LocalBackend
from .r2_backend import R2Backend, R2BackendBuilder, R2Config
from .fields import CommitTriple, PendingUpload, UploadFieldConfig
from .upload_service import FileUploadService, store_files

__all__ = [
    # Interfaces
    'StorageBackend',

    # Implementations
    'LocalBackend',
    'R2Config',
    'R2Backend',
    'R2BackendBuilder',

    # Conflict policy
    'OnFileExists',
    'Decision',
    'resolve',
    'hash_file_content',
    'files_have_same_content',

    # Types
    'UploadFieldConfig',
    'PendingUpload',
    'CommitTriple',
    'CommitResult',
    'StoreResult',
    'StoreFailure',
    'PathConflict',
    'ReadError',
    'WriteError',

    # Services
    'FileUploadService',
    'store_files'
]
