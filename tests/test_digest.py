# tests/test_digest.py
import hashlib
import io
from pathlib import Path

import pytest

from trusttime.digest.engine import digest_bytes, digest_file, digest_stream, DIGEST_SIZE


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "contract.txt"
    path.write_bytes(b"hello trusttime\n")
    return path


def test_digest_known_content(sample_file: Path):
    digest = digest_file(sample_file)
    assert len(digest) == DIGEST_SIZE
    assert digest.hex() == "89559270ab7dfd7386e1ad6bab9acb5a5f0f01721665267dcca9304c4be14050"


def test_digest_empty_file(tmp_path: Path):
    empty = tmp_path / "empty.bin"
    empty.write_bytes(b"")
    assert digest_file(empty) == hashlib.sha256(b"").digest()


def test_streaming_matches_single_read(tmp_path: Path):
    content = bytes(range(256)) * 1000 + b"tail"
    path = tmp_path / "big.bin"
    path.write_bytes(content)

    one_shot = digest_bytes(content)
    assert digest_file(path, chunk_size=len(content) + 1) == one_shot
    assert digest_file(path, chunk_size=7) == one_shot
    assert digest_file(path, chunk_size=1) == one_shot


def test_digest_stream_reads_in_chunks():
    class CountingStream(io.BytesIO):
        reads = 0

        def read(self, size=-1):
            CountingStream.reads += 1
            assert 0 < size <= 16  # never slurps the whole stream
            return super().read(size)

    stream = CountingStream(b"x" * 100)
    digest = digest_stream(stream, chunk_size=16)
    assert digest == hashlib.sha256(b"x" * 100).digest()
    assert CountingStream.reads == 8  # 7 data blocks + final empty read


def test_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(OSError):
        digest_file(tmp_path / "does-not-exist.pdf")


def test_directory_raises_oserror(tmp_path: Path):
    with pytest.raises(OSError):
        digest_file(tmp_path)


def test_invalid_chunk_size(sample_file: Path):
    with pytest.raises(ValueError, match="chunk_size"):
        digest_file(sample_file, chunk_size=0)
