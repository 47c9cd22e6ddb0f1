"""
Streaming content hashing.

Digests are only used to tell whether two files hold the same bytes, never
for anything security related.
"""

import hashlib
import logging
from typing import BinaryIO, Iterable

from uploader.services.storage.results import ReadError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 2048


def sha256_of_chunks(chunks: Iterable[bytes]) -> str:
    """Fold an iterable of byte chunks into a lowercase hex SHA-256 digest."""
    digest = hashlib.sha256()
    for chunk in chunks:
        digest.update(chunk)
    return digest.hexdigest()


def iter_chunks(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterable[bytes]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield chunk


def hash_file_content(path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Compute the SHA-256 of a file without loading it into memory.

    Args:
        path: File to hash
        chunk_size: Number of bytes read per iteration

    Returns:
        Lowercase hexadecimal digest

    Raises:
        ReadError: If the file cannot be opened or a read fails
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    try:
        with open(path, "rb") as stream:
            return sha256_of_chunks(iter_chunks(stream, chunk_size))
    except OSError as e:
        logger.warning(f"Could not hash {path}: {e}")
        raise ReadError(path) from e


def files_have_same_content(first, second, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    return hash_file_content(first, chunk_size) == hash_file_content(second, chunk_size)
