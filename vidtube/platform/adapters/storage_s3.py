import boto3
from botocore.client import Config
from vidtube.platform.ports.object_storage import ObjectStoragePort
from vidtube.core.config import settings

class S3Storage(ObjectStoragePort):
    def __init__(self, client=None, bucket: str | None = None):
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=settings.S3_ACCESS_KEY,
                aws_secret_access_key=settings.S3_SECRET_KEY,
                region_name=settings.S3_REGION,
            )
            client = session.client(
                "s3",
                endpoint_url=settings.S3_ENDPOINT_URL,
                config=Config(signature_version="s3v4"),
            )
        self.s3 = client
        self.bucket = bucket or settings.S3_BUCKET

    def upload_file(self, path: str, *, key: str, content_type: str) -> None:
        self.s3.upload_file(path, self.bucket, key, ExtraArgs={"ContentType": content_type})

    def destroy(self, public_id: str, resource_type: str) -> bool:
        base = f"{resource_type}/upload/{public_id}"
        listing = self.s3.list_objects_v2(Bucket=self.bucket, Prefix=base)
        keys = [
            o["Key"] for o in listing.get("Contents", [])
            if o["Key"] == base or o["Key"].startswith(base + ".")
        ]
        if not keys:
            return False
        self.s3.delete_objects(
            Bucket=self.bucket,
            Delete={"Objects": [{"Key": k} for k in keys], "Quiet": True},
        )
        return True
