"""S3 storage for rendered ACH files."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from nachagen.core.exceptions import FileAlreadyExistsError, FileStoreError

_MISSING = {"404", "NoSuchKey", "NotFound"}
_PRECONDITION_FAILED = {"412", "PreconditionFailed"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3FileStore:
    """IFileStore backed by one S3 bucket.

    Writes are create-only unless ``overwrite`` is passed: an ACH file that
    lands twice at the ODFI settles twice, so an existing key is an error.
    The existence check is backed by a conditional put (``If-None-Match: *``)
    so two concurrent publishers cannot both succeed.
    """

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def exists(self, path: str) -> bool:
        try:
            self._client.head_object(Bucket=self._bucket, Key=path)
            return True
        except ClientError as exc:
            if _error_code(exc) in _MISSING:
                return False
            raise FileStoreError(f"S3 head failed for {path!r}: {exc}") from exc

    def read(self, path: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=path)
            return resp["Body"].read()
        except ClientError as exc:
            raise FileStoreError(f"S3 read failed for {path!r}: {exc}") from exc

    def write(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        metadata: dict[str, str] | None = None,
        overwrite: bool = False,
    ) -> str:
        if not overwrite and self.exists(path):
            raise FileAlreadyExistsError(path)
        params: dict = {
            "Bucket": self._bucket,
            "Key": path,
            "Body": data,
            "ContentType": content_type,
            "Metadata": metadata or {},
        }
        if not overwrite:
            params["IfNoneMatch"] = "*"
        try:
            self._client.put_object(**params)
        except ClientError as exc:
            if _error_code(exc) in _PRECONDITION_FAILED:
                raise FileAlreadyExistsError(path) from exc
            raise FileStoreError(f"S3 write failed for {path!r}: {exc}") from exc
        return path
