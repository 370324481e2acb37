"""Unit tests for local media storage"""
import io

import pytest

from core.errors import DomainValidationError


class FailingStream(io.RawIOBase):
    """Stream that yields one chunk and then fails like a dropped connection"""

    def __init__(self):
        self.calls = 0

    def read(self, size=-1):
        self.calls += 1
        if self.calls == 1:
            return b"partial"
        raise OSError("connection reset")


class TestMediaStorage:
    """Test saving, limits and cleanup of stored media"""

    def test_save_generates_key_with_extension(self, media):
        """Test keys are a hex id plus the lower-cased extension"""
        key = media.save(io.BytesIO(b"data"), "My Clip.WebM")

        assert key.endswith(".webm")
        assert len(key) == 32 + len(".webm")
        assert media.exists(key)

    def test_keys_are_unique(self, media):
        """Test identical uploads get distinct keys"""
        assert media.save(io.BytesIO(b"a"), "a.mp4") != media.save(io.BytesIO(b"a"), "a.mp4")

    @pytest.mark.parametrize("filename", ["notes.txt", "noextension", ""])
    def test_unsupported_extension_rejected(self, media, filename):
        """Test non-video file names are refused"""
        with pytest.raises(DomainValidationError):
            media.save(io.BytesIO(b"data"), filename)

    def test_oversized_file_rejected_and_removed(self, media):
        """Test a file over the limit is refused and not left on disk"""
        with pytest.raises(DomainValidationError):
            media.save(io.BytesIO(b"x" * (media.max_bytes + 1)), "big.mp4")

        assert list(media.root.iterdir()) == []

    def test_file_at_limit_accepted(self, media):
        """Test a file exactly at the limit is stored"""
        key = media.save(io.BytesIO(b"x" * media.max_bytes), "exact.mp4")

        assert (media.root / key).stat().st_size == media.max_bytes

    def test_read_error_removes_partial_file(self, media):
        """Test a stream failing mid-copy leaves no partial file"""
        with pytest.raises(OSError):
            media.save(FailingStream(), "clip.mp4")

        assert list(media.root.iterdir()) == []

    def test_exists_rejects_paths(self, media):
        """Test only plain file names count as existing keys"""
        key = media.save(io.BytesIO(b"data"), "a.mp4")

        assert not media.exists(f"./{key}")
        assert not media.exists("")

    def test_discard(self, media):
        """Test discard removes the file and tolerates repeats"""
        key = media.save(io.BytesIO(b"data"), "a.mp4")
        media.discard(key)
        media.discard(key)

        assert not media.exists(key)
