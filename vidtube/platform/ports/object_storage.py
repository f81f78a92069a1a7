from typing import Protocol, runtime_checkable

@runtime_checkable
class ObjectStoragePort(Protocol):
    """Blocking client for the remote media store.

    Objects live under ``<resource_type>/upload/<public_id>.<ext>``; callers
    address them by (public_id, resource_type) the way hosted media services do.
    """

    def upload_file(self, path: str, *, key: str, content_type: str) -> None: ...

    def destroy(self, public_id: str, resource_type: str) -> bool: ...
