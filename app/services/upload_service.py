"""
Temporary storage for uploaded resumes.

Files are written under ``UPLOAD_DIR`` as ``<epoch millis>-<original name>``.
When that name is already taken a random fragment is added, so concurrent
uploads never share a file. The store decides whether an upload is
acceptable (type and size), hands out read handles for dispatch and removes
files once the request is finished.
"""
from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadRejected(Exception):
    """The uploaded file was refused; ``reason`` says why."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class ResumeUpload:
    """Reference to one stored upload. The file itself is owned by the store."""

    original_filename: str
    storage_path: Path
    mime_type: str
    size_bytes: int


class UploadStore:
    def __init__(
        self,
        upload_dir: str | Path,
        allowed_types: Iterable[str],
        max_bytes: int,
    ):
        self.upload_dir = Path(upload_dir)
        self.allowed_types = frozenset(allowed_types)
        self.max_bytes = max_bytes

    def _create_file(self, original_filename: str) -> tuple[Path, BinaryIO]:
        # Keep only the base name so a crafted filename cannot leave the directory
        safe_name = Path(original_filename.replace("\\", "/")).name
        millis = int(time.time() * 1000)
        path = self.upload_dir / f"{millis}-{safe_name}"
        while True:
            try:
                return path, path.open("xb")
            except FileExistsError:
                path = self.upload_dir / f"{millis}-{uuid.uuid4().hex[:8]}-{safe_name}"

    async def save_resume(self, upload: Optional[UploadFile]) -> Optional[ResumeUpload]:
        """Store an uploaded resume.

        Returns None when no file was sent and raises ``UploadRejected`` when
        the file has a disallowed type or exceeds the size limit.
        """
        if upload is None or not upload.filename:
            return None

        if upload.content_type not in self.allowed_types:
            raise UploadRejected(f"unsupported type {upload.content_type}")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path, out = self._create_file(upload.filename)
        size = 0
        with out:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > self.max_bytes:
                    break
                out.write(chunk)

        if size > self.max_bytes:
            path.unlink(missing_ok=True)
            raise UploadRejected(f"exceeds {self.max_bytes} bytes limit")

        resume = ResumeUpload(
            original_filename=upload.filename,
            storage_path=path,
            mime_type=upload.content_type,
            size_bytes=size,
        )
        logger.info(
            "Resume stored path=%s size=%s content_type=%s",
            path.name,
            size,
            upload.content_type,
        )
        return resume

    def open(self, path: str | Path) -> BinaryIO:
        return Path(path).open("rb")

    def discard(self, path: str | Path) -> None:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove upload %s: %s", path, exc)
