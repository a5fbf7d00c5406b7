"""Memory of past tool invocations."""

from .store import MemoryRecord, MemoryStore

__all__ = ["MemoryRecord", "MemoryStore"]
