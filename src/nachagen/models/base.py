"""Shared base for validated NACHA record models."""

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from nachagen.core.exceptions import FieldValidationError


class RecordModel(BaseModel):
    """Frozen pydantic model that reports failures as ``FieldValidationError``.

    Header fields are fixed at construction; children (entries, batches,
    addenda) live in private attributes and are attached via explicit
    mutators. Every way in (constructor, ``model_validate``, ``model_copy``
    with ``update``) runs full validation, and assigning to a field raises.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    def __init__(self, /, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise FieldValidationError.from_pydantic(type(self).__name__, exc) from exc

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> Any:
        try:
            return super().model_validate(obj, **kwargs)
        except PydanticValidationError as exc:
            raise FieldValidationError.from_pydantic(cls.__name__, exc) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except PydanticValidationError as exc:
            raise FieldValidationError.from_pydantic(type(self).__name__, exc) from exc

    def model_copy(self, *, update: dict[str, Any] | None = None, deep: bool = False) -> Any:
        """Copy, re-validating any ``update``; children are copied, not shared."""
        if not update:
            copied = super().model_copy(deep=deep)
        else:
            copied = self.model_validate({**dict(self), **update})
        private = self.__pydantic_private__
        if private is None:
            return copied
        object.__setattr__(
            copied,
            "__pydantic_private__",
            copy.deepcopy(private) if deep else {k: copy.copy(v) for k, v in private.items()},
        )
        return copied
