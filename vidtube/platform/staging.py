"""Request-scoped staging of multipart uploads on local disk."""

import logging
import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from fastapi import UploadFile

from vidtube.core.config import settings
from vidtube.core.errors import ApiError, Failure

CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB

log = logging.getLogger(__name__)


@dataclass(slots=True)
class StagedFile:
    """A local copy of an uploaded file awaiting transfer to the object store."""

    path: Path
    filename: str | None = None
    content_type: str | None = None

    @property
    def extension(self) -> str:
        suffix = Path(self.filename or self.path.name).suffix.lower()
        return suffix if len(suffix) > 1 else ""

    def exists(self) -> bool:
        return self.path.is_file()

    def discard(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            log.warning("Could not remove staged file %s: %s", self.path, e)


@dataclass(slots=True)
class StagingArea:
    """Owns the staged files of one request and removes them on exit."""

    root: Path = field(default_factory=lambda: Path(settings.STAGING_DIR))
    max_bytes: int = field(default_factory=lambda: settings.MAX_UPLOAD_BYTES)
    files: list[StagedFile] = field(default_factory=list)

    async def stage(self, upload: UploadFile | None) -> StagedFile | None:
        if upload is None or not upload.filename:
            return None
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.root / f"{uuid.uuid4().hex}{Path(upload.filename).suffix.lower()}"
        staged = StagedFile(path=target, filename=upload.filename, content_type=upload.content_type)
        self.files.append(staged)

        written = 0
        with target.open("wb") as sink:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > self.max_bytes:
                    raise ApiError(Failure.validation(
                        "File too large",
                        f"{upload.filename} exceeds {self.max_bytes} bytes",
                    ))
                sink.write(chunk)
        log.debug("Staged %s (%d bytes) at %s", upload.filename, written, target)
        return staged

    def cleanup(self) -> None:
        for staged in self.files:
            staged.discard()
        self.files.clear()

    async def __aenter__(self) -> "StagingArea":
        return self

    async def __aexit__(self, *exc) -> None:
        self.cleanup()


def ensure_staging_dir() -> None:
    os.makedirs(settings.STAGING_DIR, exist_ok=True)
