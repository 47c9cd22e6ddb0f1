"""
Failure taxonomy and result objects for upload commits.

A commit never raises for an expected conflict or I/O problem; it returns a
result carrying one of the StoreFailure subclasses below. Callers that prefer
exceptions can raise the carried failure themselves.
"""

from dataclasses import dataclass, field
from typing import List, Optional


class StoreFailure(Exception):
    """Base class for every failure reported by a storage backend."""

    kind = "store_failure"

    def __init__(self, path: str):
        super().__init__(path)
        self.path = str(path)

    def __eq__(self, other):
        return type(self) is type(other) and self.path == other.path

    def __hash__(self):
        return hash((type(self), self.path))

    def __repr__(self):
        return f"{type(self).__name__}({self.path!r})"

    def __str__(self):
        return f"{self.kind}: {self.path}"


class PathConflict(StoreFailure):
    """Destination exists and the configured policy does not allow replacing it."""

    kind = "file_path_exists"


class ReadError(StoreFailure):
    """A file could not be opened or read."""

    kind = "read_error"


class WriteError(StoreFailure):
    """The destination could not be created or written."""

    kind = "write_error"


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a single backend commit"""
    written: bool = False
    skipped: bool = False
    failure: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls) -> "CommitResult":
        return cls(written=True)

    @classmethod
    def skip(cls) -> "CommitResult":
        return cls(skipped=True)

    @classmethod
    def fail(cls, failure: StoreFailure) -> "CommitResult":
        return cls(failure=failure)


@dataclass
class StoreResult:
    """Whole-entity outcome: every commit succeeded, or the first failure."""
    failure: Optional[StoreFailure] = None
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure
