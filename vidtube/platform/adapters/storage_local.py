import os
import shutil
from vidtube.platform.ports.object_storage import ObjectStoragePort
from vidtube.core.config import settings

class LocalFilesystemStorage(ObjectStoragePort):
    def __init__(self, root: str | None = None):
        self.root = os.path.abspath(root or settings.LOCAL_STORAGE_ROOT)
        os.makedirs(self.root, exist_ok=True)

    def _path(self, key: str) -> str:
        safe = key.strip("/").replace("..", "")
        return os.path.join(self.root, safe)

    def upload_file(self, path: str, *, key: str, content_type: str) -> None:
        target = self._path(key)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        shutil.copyfile(path, target)

    def destroy(self, public_id: str, resource_type: str) -> bool:
        directory = self._path(f"{resource_type}/upload")
        if not os.path.isdir(directory):
            return False
        removed = False
        for name in os.listdir(directory):
            # match "<public_id>" and "<public_id>.<ext>" only
            if name == public_id or name.startswith(public_id + "."):
                os.remove(os.path.join(directory, name))
                removed = True
        return removed
