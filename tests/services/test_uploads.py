"""Tests for temporary upload storage and validation."""

from pathlib import Path

import pytest

from voicechat.services.uploads import InvalidUploadError, UploadStore, storage_extension, validate_upload


class TestValidateUpload:

    @pytest.mark.parametrize(
        "content_type",
        [
            "audio/webm",
            "audio/webm;codecs=opus",
            "audio/wav",
            "audio/mpeg",
            "video/webm",
            "application/octet-stream",
            None,
        ],
    )
    def test_accepts_audio_types(self, content_type):
        validate_upload(b"x" * 600, content_type, min_bytes=500, max_bytes=1000)

    @pytest.mark.parametrize("content_type", ["text/plain", "image/png", "application/json"])
    def test_rejects_non_audio(self, content_type):
        with pytest.raises(InvalidUploadError, match="Invalid audio format"):
            validate_upload(b"x" * 600, content_type, min_bytes=500, max_bytes=1000)

    def test_rejects_empty(self):
        with pytest.raises(InvalidUploadError, match="empty"):
            validate_upload(b"", "audio/webm", min_bytes=500, max_bytes=1000)

    def test_rejects_short(self):
        with pytest.raises(InvalidUploadError, match="too short"):
            validate_upload(b"x" * 499, "audio/webm", min_bytes=500, max_bytes=1000)

    def test_rejects_oversized(self):
        with pytest.raises(InvalidUploadError, match="exceeds"):
            validate_upload(b"x" * 1001, "audio/webm", min_bytes=500, max_bytes=1000)


class TestStorageExtension:

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("clip.OGG", ".ogg"),
            ("speech.m4a", ".m4a"),
            ("blob", ".webm"),
            (None, ".webm"),
            ("clip.we/bm", ".webm"),
            ("clip../../etc", ".webm"),
            ("clip." + "a" * 300, ".webm"),
            ("clip.", ".webm"),
        ],
    )
    def test_only_short_alphanumeric_extensions_kept(self, filename, expected):
        assert storage_extension(filename) == expected


class TestUploadStore:

    @pytest.mark.asyncio
    async def test_file_exists_inside_block_and_removed_after(self, tmp_path):
        store = UploadStore(str(tmp_path / "uploads"))

        async with store.save(b"RIFF-data", "speech.wav") as path:
            assert path.exists()
            assert path.suffix == ".wav"
            assert path.read_bytes() == b"RIFF-data"

        assert not path.exists()

    @pytest.mark.asyncio
    async def test_removed_when_block_raises(self, tmp_path):
        store = UploadStore(str(tmp_path / "uploads"))

        with pytest.raises(RuntimeError):
            async with store.save(b"data") as path:
                raise RuntimeError("transcription failed")

        assert not path.exists()

    @pytest.mark.asyncio
    async def test_paths_are_unique(self, tmp_path):
        store = UploadStore(str(tmp_path))

        async with store.save(b"data", "a.webm") as first, store.save(b"data", "a.webm") as second:
            assert first != second

    def test_delete_missing_file_is_quiet(self, tmp_path):
        UploadStore(str(tmp_path)).delete(tmp_path / "gone.webm")

    @pytest.mark.asyncio
    async def test_hostile_filename_stays_in_directory(self, tmp_path):
        store = UploadStore(str(tmp_path / "uploads"))

        async with store.save(b"data", "clip.we/bm") as path:
            assert path.parent == tmp_path / "uploads"
            assert path.suffix == ".webm"

    @pytest.mark.asyncio
    async def test_partial_write_removed(self, tmp_path, monkeypatch):
        store = UploadStore(str(tmp_path / "uploads"))
        real_write_bytes = Path.write_bytes

        def failing_write(path, data):
            real_write_bytes(path, data[:2])
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(Path, "write_bytes", failing_write)

        with pytest.raises(OSError):
            async with store.save(b"RIFF-data", "speech.wav"):
                pass

        assert list((tmp_path / "uploads").iterdir()) == []
