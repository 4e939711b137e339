"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from nachagen.persistence.memory_backend import MemoryFileStore

__all__ = ["MemoryFileStore"]
