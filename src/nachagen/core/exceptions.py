"""nachagen exception hierarchy."""

from __future__ import annotations

from typing import Any


class NachaError(Exception):
    """Base exception for all nachagen errors."""


class FieldValidationError(NachaError, ValueError):
    """A record field violated its width, presence, content or enumeration rule."""

    def __init__(
        self,
        record: str,
        field: str,
        constraint: str,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.record = record
        self.field = field
        self.constraint = constraint
        self.message = message
        self.errors = errors or []
        super().__init__(f"{record}.{field}: {message} ({constraint})")

    @classmethod
    def from_pydantic(cls, record: str, exc: Any) -> FieldValidationError:
        """Build from a pydantic ``ValidationError``, keyed on its first error."""
        errors = exc.errors(include_url=False)
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or "__root__"
        cause = (first.get("ctx") or {}).get("error")
        if isinstance(cause, FieldValidationError):
            # raised by a code translator inside a field validator
            return cls(record, field, cause.constraint, cause.message, errors=errors)
        return cls(
            record,
            field,
            first.get("type", "invalid"),
            first.get("msg", str(exc)),
            errors=errors,
        )


class FileStoreError(NachaError):
    """Reading or writing a rendered file through a storage backend failed."""


class FileAlreadyExistsError(FileStoreError):
    """A create-only write found the key already present."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"refusing to overwrite existing file {path!r}")
