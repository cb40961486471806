"""Temporary storage for uploaded audio.

Uploaded recordings live on disk only for the duration of one request.
"""

import logging
import re
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

from voicechat.config import get_settings

logger = logging.getLogger(__name__)


# Browsers label MediaRecorder output inconsistently
EXTRA_AUDIO_TYPES = {"application/octet-stream", "video/webm", "video/mp4"}

DEFAULT_EXTENSION = ".webm"
_EXTENSION_RE = re.compile(r"[a-z0-9]{1,8}")


class InvalidUploadError(ValueError):
    """Raised when an uploaded file is not acceptable audio."""

    pass


@dataclass
class AudioUpload:
    """Audio received from the browser."""

    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


def storage_extension(filename: Optional[str]) -> str:
    """Extension used on disk for an upload named ``filename``.

    Only a short alphanumeric extension is kept; anything else becomes
    ``.webm`` so the client name never shapes the storage path.
    """
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
        if _EXTENSION_RE.fullmatch(ext):
            return "." + ext
    return DEFAULT_EXTENSION


def validate_upload(
    data: bytes,
    content_type: Optional[str] = None,
    min_bytes: Optional[int] = None,
    max_bytes: Optional[int] = None,
) -> None:
    """Check size bounds and content type of an audio upload.

    Raises:
        InvalidUploadError: If the upload is empty, too short, too large
            or not audio.
    """
    settings = get_settings()
    min_bytes = settings.min_audio_bytes if min_bytes is None else min_bytes
    max_bytes = settings.max_upload_bytes if max_bytes is None else max_bytes

    if content_type:
        base_type = content_type.split(";", 1)[0].strip().lower()
        if not base_type.startswith("audio/") and base_type not in EXTRA_AUDIO_TYPES:
            raise InvalidUploadError(f"Invalid audio format: {base_type}")

    if not data:
        raise InvalidUploadError("Audio file is empty.")
    if len(data) < min_bytes:
        raise InvalidUploadError("Audio too short.")
    if len(data) > max_bytes:
        raise InvalidUploadError(f"Audio exceeds {max_bytes} bytes.")


class UploadStore:
    """Writes uploads to a scratch directory and removes them afterwards."""

    def __init__(self, directory: Optional[str] = None):
        settings = get_settings()
        self.directory = Path(directory or settings.upload_dir)

    def _generate_path(self, filename: Optional[str] = None) -> Path:
        """Generate a collision-free path keeping the upload's extension."""
        return self.directory / f"{uuid.uuid4().hex}{storage_extension(filename)}"

    @asynccontextmanager
    async def save(self, data: bytes, filename: Optional[str] = None) -> AsyncIterator[Path]:
        """Persist ``data`` for the duration of the ``async with`` block."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._generate_path(filename)
        try:
            path.write_bytes(data)
            logger.debug("Stored upload %s (%d bytes)", path.name, len(data))
            yield path
        finally:
            self.delete(path)

    def delete(self, path: Path) -> None:
        """Remove a stored upload; failures are logged, not raised."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to delete upload %s: %s", path, e)
