"""Bounded in-process log of past tool invocations."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Iterator, List

DEFAULT_CAPACITY = 50


@dataclass(frozen=True)
class MemoryRecord:
    event: str
    result: str
    success: bool
    timestamp: datetime = field(default_factory=datetime.now)

    def matches(self, keyword: str) -> bool:
        needle = keyword.lower()
        return needle in self.event.lower() or needle in self.result.lower()


@dataclass
class MemoryStore:
    """Append-only sliding window; the oldest record is evicted first."""

    capacity: int = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError("Memory capacity must be at least 1")
        self._records: Deque[MemoryRecord] = deque(maxlen=self.capacity)

    def record(self, event: str, result: str, success: bool) -> MemoryRecord:
        entry = MemoryRecord(event=event, result=result, success=success)
        self._records.append(entry)
        return entry

    def query(self, keyword: str) -> List[MemoryRecord]:
        return [record for record in self._records if record.matches(keyword)]

    def recent(self, limit: int = 5) -> List[MemoryRecord]:
        if limit <= 0:
            return []
        return list(self._records)[-limit:]

    def stats(self) -> dict:
        total = len(self._records)
        successful = sum(1 for record in self._records if record.success)
        return {
            "total": total,
            "successful": successful,
            "success_rate": successful / total if total else 0.0,
            "capacity": self.capacity,
        }

    def __iter__(self) -> Iterator[MemoryRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)
