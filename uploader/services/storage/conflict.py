"""
Conflict resolution for destinations that already exist.

| strategy     | destination exists | decision                              |
|--------------|--------------------|---------------------------------------|
| any          | no                 | PROCEED                               |
| OVERWRITE    | yes                | PROCEED                               |
| COMPARE_HASH | yes                | SKIP if same content, FAIL otherwise  |
| NONE         | yes                | FAIL                                  |
"""

from enum import Enum
from typing import Callable, Optional, Union

from uploader.services.storage.hasher import hash_file_content


class OnFileExists(str, Enum):
    """What to do when the destination path is already taken."""
    NONE = "none"
    OVERWRITE = "overwrite"
    COMPARE_HASH = "compare_hash"

    @classmethod
    def parse(cls, value: Union["OnFileExists", str, None]) -> "OnFileExists":
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().replace("-", "_"))
        except ValueError:
            raise ValueError(
                f"Unknown on_file_exists strategy {value!r}, "
                f"expected one of {[s.value for s in cls]}"
            ) from None


class Decision(str, Enum):
    PROCEED = "proceed"
    SKIP = "skip"
    FAIL = "fail"


Hasher = Callable[[str], str]


def resolve(destination_exists: bool,
            strategy: Optional[OnFileExists],
            source_path: str,
            dest_path: str,
            hasher: Hasher = hash_file_content,
            dest_hasher: Optional[Hasher] = None) -> Decision:
    """
    Decide whether a commit copies, skips or fails.

    The hashers are only called for COMPARE_HASH on an existing destination and
    may raise ReadError, which is left to the caller. dest_hasher reads the
    stored copy when it lives somewhere the source hasher cannot reach, and
    defaults to hasher.
    """
    if not destination_exists:
        return Decision.PROCEED

    strategy = OnFileExists.parse(strategy)

    if strategy is OnFileExists.OVERWRITE:
        return Decision.PROCEED

    if strategy is OnFileExists.COMPARE_HASH:
        source_digest = hasher(source_path)
        dest_digest = (dest_hasher or hasher)(dest_path)
        return Decision.SKIP if source_digest == dest_digest else Decision.FAIL

    return Decision.FAIL
