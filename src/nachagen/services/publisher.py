"""AchFilePublisher: render a NachaFile and hand it to a file store.

Rendered files contain account numbers; only keys and counts are logged.
"""

from __future__ import annotations

from typing import NamedTuple

from nachagen.core.config import AppSettings
from nachagen.core.logging import get_logger
from nachagen.core.protocols import IFileStore
from nachagen.models.fields import BLOCKING_FACTOR
from nachagen.models.nacha_file import NachaFile

logger = get_logger(__name__)

CONTENT_TYPE = "text/plain"


class PublishedFile(NamedTuple):
    path: str
    line_count: int
    block_count: int


def default_filename(nacha_file: NachaFile) -> str:
    return f"ACHFile{nacha_file.file_creation_date:%Y%m%d}-{nacha_file.file_id_modifier}.txt"


class AchFilePublisher:
    """Writes rendered ACH files under the configured key prefix."""

    def __init__(self, *, file_store: IFileStore, settings: AppSettings | None = None) -> None:
        self._store = file_store
        self._settings = settings or AppSettings()

    @property
    def key_prefix(self) -> str:
        return self._settings.s3.key_prefix

    def publish(
        self,
        nacha_file: NachaFile,
        filename: str | None = None,
        *,
        overwrite: bool = False,
    ) -> PublishedFile:
        """Render once, store as ASCII and describe what was stored.

        Publishing to an existing key raises ``FileAlreadyExistsError`` unless
        ``overwrite`` is set.
        """
        lines = nacha_file.render_lines()
        path = f"{self.key_prefix}{filename or default_filename(nacha_file)}"
        published = PublishedFile(
            path=path, line_count=len(lines), block_count=len(lines) // BLOCKING_FACTOR,
        )
        self._store.write(
            path,
            "\n".join(lines).encode("ascii"),
            content_type=CONTENT_TYPE,
            metadata={
                "batch-count": str(len(nacha_file.batches)),
                "block-count": str(published.block_count),
                "file-id-modifier": nacha_file.file_id_modifier,
            },
            overwrite=overwrite,
        )
        logger.info(
            "Published ACH file",
            extra={
                "path": path,
                "batch_count": len(nacha_file.batches),
                "block_count": published.block_count,
            },
        )
        return published
