"""
Per-field upload configuration and the transient records built from it.
"""

import os
import re
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Callable, List, Optional, Union

from uploader.services.storage.conflict import OnFileExists
from uploader.services.storage.interfaces import StorageBackend
from uploader.services.storage.local_backend import LocalBackend

FilenameFn = Callable[[Any, str], Union[str, List[str]]]

_SEPARATORS = "/\\"


def field_value_filename(entity: Any, field_name: str) -> str:
    """Default filename: whatever value the entity holds for the field."""
    return getattr(entity, field_name)


@dataclass(frozen=True)
class UploadFieldConfig:
    """How one uploadable field of an entity type is stored."""
    field: str
    backend: StorageBackend = dataclass_field(default_factory=LocalBackend)
    on_file_exists: OnFileExists = OnFileExists.NONE
    directory: str = ""
    filename: FilenameFn = field_value_filename

    def __post_init__(self):
        if not self.field:
            raise ValueError("Upload field name must not be empty")
        if not isinstance(self.backend, StorageBackend):
            raise ValueError(f"Field {self.field!r}: backend must be a StorageBackend, got {self.backend!r}")
        object.__setattr__(self, "on_file_exists", OnFileExists.parse(self.on_file_exists))

    def filenames(self, entity: Any) -> List[str]:
        names = self.filename(entity, self.field)
        if isinstance(names, (str, os.PathLike)):
            return [os.fspath(names)]
        names = [os.fspath(name) for name in names]
        if not names:
            raise ValueError(f"Field {self.field!r}: filename function returned no names")
        return names

    def destination(self, name: str) -> str:
        """
        Join a generated filename under the configured directory.

        Leading separators are dropped so an absolute name still lands inside
        the directory, and parent references are refused.
        """
        relative = name.lstrip(_SEPARATORS)
        if not relative or ".." in re.split(r"[\\/]", relative):
            raise ValueError(f"Field {self.field!r}: invalid filename {name!r}")
        return os.path.join(self.directory, relative)

    def triples(self, entity: Any, pending: "PendingUpload") -> List["CommitTriple"]:
        return [
            CommitTriple(
                source_path=pending.source_path,
                dest_path=self.destination(name),
                on_file_exists=self.on_file_exists
            )
            for name in self.filenames(entity)
        ]


@dataclass(frozen=True)
class PendingUpload:
    """A staged upload waiting to be committed"""
    field: str
    source_path: str
    filename: Optional[str] = None
    content_type: Optional[str] = None


@dataclass(frozen=True)
class CommitTriple:
    source_path: str
    dest_path: str
    on_file_exists: OnFileExists = OnFileExists.NONE
