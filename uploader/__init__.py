"""
Uploader - commit file uploads attached to entities into storage
"""

from uploader.services.storage import (
    FileUploadService,
    LocalBackend,
    OnFileExists,
    PathConflict,
    PendingUpload,
    ReadError,
    StorageBackend,
    StoreFailure,
    StoreResult,
    UploadFieldConfig,
    WriteError,
    hash_file_content,
    store_files,
)

__version__ = "0.2.0"
