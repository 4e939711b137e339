"""Protocol interfaces for nachagen collaborators.

The encoder itself has no I/O; rendered files leave the process through these
structural interfaces, which keeps them easy to fake in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """Create-only storage for rendered files."""

    def read(self, path: str) -> bytes: ...

    def exists(self, path: str) -> bool: ...

    def write(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        metadata: dict[str, str] | None = None,
        overwrite: bool = False,
    ) -> str:
        """Store ``data``; raises ``FileAlreadyExistsError`` for an existing key unless ``overwrite``."""
        ...
