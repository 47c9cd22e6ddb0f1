"""
Tests for streaming content hashing
"""

import hashlib
from unittest.mock import patch

import pytest

from uploader.services.storage import ReadError, files_have_same_content, hash_file_content
from uploader.services.storage.hasher import DEFAULT_CHUNK_SIZE


class TestHashFileContent:
    """Test the SHA-256 digest of files"""

    def test_matches_hashlib_digest(self, make_file):
        """Digest equals a one-shot SHA-256 of the same bytes"""
        content = b"uploader test content" * 500
        path = make_file("photo.jpg", content)

        assert hash_file_content(path) == hashlib.sha256(content).hexdigest()

    def test_digest_is_lowercase_hex(self, make_file):
        """Digest is 64 lowercase hexadecimal characters"""
        digest = hash_file_content(make_file("a.bin", b"\x00\xff" * 10))

        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    def test_empty_file(self, make_file):
        """Empty files hash to the SHA-256 of no bytes"""
        assert hash_file_content(make_file("empty", b"")) == hashlib.sha256(b"").hexdigest()

    def test_same_content_different_paths(self, make_file):
        """Identical bytes at different paths give identical digests"""
        content = b"same bytes"
        first = make_file("one/a.jpg", content)
        second = make_file("two/b.png", content)

        assert hash_file_content(first) == hash_file_content(second)
        assert hash_file_content(first) == hash_file_content(first)
        assert files_have_same_content(first, second)

    def test_different_content(self, make_file):
        """A single changed byte changes the digest"""
        first = make_file("a", b"abcdef")
        second = make_file("b", b"abcdeg")

        assert not files_have_same_content(first, second)

    def test_chunk_size_does_not_change_digest(self, make_file):
        """Chunk boundaries have no effect on the result"""
        path = make_file("big.bin", bytes(range(256)) * 40)

        assert hash_file_content(path, chunk_size=1) == hash_file_content(path, chunk_size=4096)

    def test_missing_file_raises_read_error(self, temp_dir):
        """Missing files raise ReadError carrying the path"""
        missing = temp_dir / "nope.jpg"

        with pytest.raises(ReadError) as exc_info:
            hash_file_content(missing)

        assert exc_info.value.path == str(missing)

    def test_directory_raises_read_error(self, temp_dir):
        """Paths that cannot be read as files raise ReadError"""
        with pytest.raises(ReadError):
            hash_file_content(temp_dir)

    def test_invalid_chunk_size(self, make_file):
        """Chunk size must be positive"""
        with pytest.raises(ValueError):
            hash_file_content(make_file("a", b"a"), chunk_size=0)

    def test_reads_in_fixed_chunks(self, make_file):
        """The file is read chunk by chunk, never in one call"""
        path = make_file("chunks.bin", b"x" * (DEFAULT_CHUNK_SIZE * 3 + 5))
        opened = []

        with patch("uploader.services.storage.hasher.open", tracking_open(opened), create=True):
            hash_file_content(path)

        stream = opened[0]
        assert stream.closed
        assert all(n == DEFAULT_CHUNK_SIZE for n in stream.read_sizes)
        assert len(stream.read_sizes) == 5  # 3 full chunks, 1 partial, 1 empty read

    def test_read_failure_mid_stream_closes_file(self, make_file):
        """An I/O error during reading becomes ReadError and the handle is closed"""
        path = make_file("broken.bin", b"y" * (DEFAULT_CHUNK_SIZE * 2))
        opened = []

        with patch("uploader.services.storage.hasher.open", tracking_open(opened, fail_on_read=2), create=True):
            with pytest.raises(ReadError) as exc_info:
                hash_file_content(path)

        assert exc_info.value.path == str(path)
        assert opened[0].closed


class TrackingStream:
    """File wrapper recording read sizes, optionally failing on the nth read"""

    def __init__(self, stream, fail_on_read=None):
        self.stream = stream
        self.fail_on_read = fail_on_read
        self.read_sizes = []

    @property
    def closed(self):
        return self.stream.closed

    def read(self, size=-1):
        self.read_sizes.append(size)
        if self.fail_on_read == len(self.read_sizes):
            raise OSError("device error")
        return self.stream.read(size)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.stream.close()
        return False


def tracking_open(opened, fail_on_read=None):
    def _open(*args, **kwargs):
        stream = TrackingStream(open(*args, **kwargs), fail_on_read)
        opened.append(stream)
        return stream
    return _open
