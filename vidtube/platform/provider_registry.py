from vidtube.core.config import settings
from vidtube.platform.ports.object_storage import ObjectStoragePort
from vidtube.platform.adapters.storage_local import LocalFilesystemStorage
from vidtube.platform.adapters.storage_s3 import S3Storage
from vidtube.platform.media_gateway import MediaGateway

class ProviderRegistry:
    _object_storage: ObjectStoragePort | None = None
    _media_gateway: MediaGateway | None = None

    @classmethod
    def object_storage(cls) -> ObjectStoragePort:
        if cls._object_storage is None:
            if settings.OBJECT_STORAGE_PROVIDER == "s3":
                cls._object_storage = S3Storage()
            else:
                cls._object_storage = LocalFilesystemStorage(settings.LOCAL_STORAGE_ROOT)
        return cls._object_storage

    @classmethod
    def media_gateway(cls) -> MediaGateway:
        if cls._media_gateway is None:
            cls._media_gateway = MediaGateway(cls.object_storage(), base_url=settings.MEDIA_PUBLIC_BASE_URL)
        return cls._media_gateway

registry = ProviderRegistry()

def get_media_gateway() -> MediaGateway:
    return registry.media_gateway()
