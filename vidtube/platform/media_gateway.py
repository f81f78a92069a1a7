"""Gateway between staged uploads and the remote media store.

``upload`` always consumes its StagedFile: the local copy is deleted whether
the transfer succeeds or fails. Remote objects are named
``<base_url>/<kind>/upload/<public_id><ext>``; ``delete`` recovers the
public id from such a reference by stripping the prefix and extension.
"""

import asyncio
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from vidtube.core.errors import Failure
from vidtube.platform.media_probe import probe_duration
from vidtube.platform.ports.object_storage import ObjectStoragePort
from vidtube.platform.staging import StagedFile

log = logging.getLogger(__name__)

DurationProbe = Callable[[str], float | None]


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


@dataclass(slots=True, frozen=True)
class UploadResult:
    external_ref: str
    public_id: str
    kind: MediaKind
    duration_seconds: float | None = None


class MediaGateway:
    def __init__(self, storage: ObjectStoragePort, *, base_url: str, probe: DurationProbe = probe_duration):
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.probe = probe

    def ref_prefix(self, kind: MediaKind) -> str:
        return f"{self.base_url}/{kind.value}/upload/"

    def public_id_from_ref(self, ref: str | None, kind: MediaKind) -> str | None:
        prefix = self.ref_prefix(kind)
        if not ref or not ref.startswith(prefix):
            return None
        return ref[len(prefix):].split(".")[0] or None

    async def upload(self, staged: StagedFile | None, kind: MediaKind) -> tuple[UploadResult | None, Failure | None]:
        if staged is None:
            return None, Failure.validation(f"No {kind.value} file provided")
        try:
            if not staged.exists():
                return None, Failure.upstream(f"Staged {kind.value} file is missing")

            duration = None
            if kind is MediaKind.VIDEO:
                duration = await asyncio.to_thread(self.probe, str(staged.path))

            public_id = uuid.uuid4().hex
            key = f"{kind.value}/upload/{public_id}{staged.extension}"
            content_type = (
                staged.content_type
                or mimetypes.guess_type(staged.filename or "")[0]
                or "application/octet-stream"
            )
            await asyncio.to_thread(self.storage.upload_file, str(staged.path), key=key, content_type=content_type)
        except Exception as e:
            log.error("Upload of %s %s failed", kind.value, staged.filename, exc_info=True)
            return None, Failure.upstream(f"Error uploading {kind.value} file", cause=e)
        finally:
            staged.discard()

        log.info("Uploaded %s %s as %s", kind.value, staged.filename, key)
        return UploadResult(
            external_ref=f"{self.base_url}/{key}",
            public_id=public_id,
            kind=kind,
            duration_seconds=duration,
        ), None

    async def delete(self, ref: str | None, kind: MediaKind) -> tuple[bool, Failure | None]:
        public_id = self.public_id_from_ref(ref, kind)
        if public_id is None:
            return False, Failure.upstream(f"Unrecognised {kind.value} reference: {ref}")
        try:
            removed = await asyncio.to_thread(self.storage.destroy, public_id, kind.value)
        except Exception as e:
            return False, Failure.upstream(f"Failed to delete {kind.value} from storage", cause=e)
        if not removed:
            return False, Failure.upstream(f"Failed to delete {kind.value} from storage: not found")
        log.info("Deleted %s %s", kind.value, public_id)
        return True, None

    async def rollback(self, results: list[UploadResult]) -> list[UploadResult]:
        """Compensating delete for uploads whose owning write did not happen.

        Returns the uploads that could not be removed (orphans), which are
        also logged with their references.
        """
        orphans = []
        for result in results:
            _, err = await self.delete(result.external_ref, result.kind)
            if err:
                orphans.append(result)
                log.error(
                    "Compensating delete failed, orphaned %s %s: %s",
                    result.kind.value, result.external_ref, err.message,
                    exc_info=err.cause,
                )
        return orphans
