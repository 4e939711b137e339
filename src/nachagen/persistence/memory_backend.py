"""In-memory file store, dict-backed."""

from __future__ import annotations

from nachagen.core.exceptions import FileAlreadyExistsError, FileStoreError


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests and local runs; create-only like S3FileStore."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._content_types: dict[str, str] = {}
        self._metadata: dict[str, dict[str, str]] = {}

    def exists(self, path: str) -> bool:
        return path in self._files

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise FileStoreError(f"no such file: {path!r}") from exc

    def write(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        metadata: dict[str, str] | None = None,
        overwrite: bool = False,
    ) -> str:
        if not overwrite and path in self._files:
            raise FileAlreadyExistsError(path)
        self._files[path] = data
        self._content_types[path] = content_type
        self._metadata[path] = dict(metadata or {})
        return path

    def content_type(self, path: str) -> str:
        return self._content_types[path]

    def metadata(self, path: str) -> dict[str, str]:
        return self._metadata[path]
