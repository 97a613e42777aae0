from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Iterator, List

from lift_scheduler.errors import EmptyQueueUnderflow


class RequestQueue:
    """FIFO of destination floors requested by riders waiting on one floor."""

    def __init__(self, destinations: Iterable[int] = ()) -> None:
        self._items: Deque[int] = deque(destinations)
        self.total_processed = 0

    def enqueue(self, destination: int) -> None:
        self._items.append(destination)

    def enqueue_many(self, destinations: Iterable[int]) -> None:
        self._items.extend(destinations)

    def dequeue(self) -> int:
        if not self._items:
            raise EmptyQueueUnderflow("dequeue from empty request queue")
        self.total_processed += 1
        return self._items.popleft()

    def dequeue_many(self, count: int) -> List[int]:
        """Remove up to ``count`` requests; never more than are queued."""

        return [self.dequeue() for _ in range(min(max(0, count), len(self._items)))]

    def peek(self, position: int = 0) -> int:
        if not 0 <= position < len(self._items):
            raise EmptyQueueUnderflow(f"no request at position {position}")
        return self._items[position]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"RequestQueue({list(self._items)!r})"


@dataclass
class Floor:
    """Represents a floor and the riders queued on it."""

    number: int
    requests: RequestQueue = field(default_factory=RequestQueue)

    def has_waiting(self) -> bool:
        return not self.requests.is_empty()

    def board_riders(self, capacity: int) -> List[int]:
        return self.requests.dequeue_many(capacity)

    def __len__(self) -> int:  # pragma: no cover - convenience
        return len(self.requests)
