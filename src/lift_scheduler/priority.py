"""Indexed binary min-heap of pickup requests with time-based aging.

Every request lives in one array slot. A side index maps each floor to the
set of slots currently holding that floor's requests, so all requests for a
floor can be found and re-prioritised in O(k log n) without scanning the heap.
Each slot move goes through ``_swap`` or ``_place``, which keep that index
current before any further comparison is made.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .errors import EmptyQueueUnderflow
from .interface import Direction

logger = logging.getLogger(__name__)

# Penalty for a request heading against the car. One tick of waiting earns
# one point of urgency, so a mismatched request overtakes a fresh matched one
# after waiting more than this many ticks.
DIRECTION_MISMATCH_PENALTY = 1000


@dataclass
class Request:
    """A tracked pickup; lower ``priority`` is served first."""

    floor: int
    direction: Direction
    priority: int = 0
    created_at_tick: int = 0
    seq: int = field(default=0, compare=False)

    def ticks_waited(self, tick: int) -> int:
        return max(0, tick - self.created_at_tick)

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        return (self.priority, self.created_at_tick, self.seq)


def compute_priority(
    request: Request,
    current_direction: Direction,
    tick: int,
    mismatch_penalty: int = DIRECTION_MISMATCH_PENALTY,
) -> int:
    base = 0 if request.direction == current_direction else mismatch_penalty
    return base - request.ticks_waited(tick)


class PriorityRequestStore:
    """Min-heap of requests supporting in-place priority changes per floor."""

    def __init__(self, mismatch_penalty: int = DIRECTION_MISMATCH_PENALTY) -> None:
        self.mismatch_penalty = mismatch_penalty
        self._heap: List[Request] = []
        self._positions: Dict[int, Set[int]] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Request]:
        return iter(list(self._heap))

    def push(
        self,
        floor: int,
        direction: Direction,
        tick: int = 0,
        current_direction: Optional[Direction] = None,
    ) -> Request:
        request = Request(
            floor=floor,
            direction=direction,
            created_at_tick=tick,
            seq=next(self._counter),
        )
        request.priority = compute_priority(
            request, current_direction or direction, tick, self.mismatch_penalty
        )
        self._heap.append(request)
        self._index(floor).add(len(self._heap) - 1)
        self._sift_up(len(self._heap) - 1)
        return request

    def peek(self) -> Request:
        if not self._heap:
            raise EmptyQueueUnderflow("peek on empty priority store")
        return self._heap[0]

    def pop(self) -> Request:
        if not self._heap:
            raise EmptyQueueUnderflow("pop from empty priority store")
        return self._remove_at(0)

    def positions(self, floor: int) -> Set[int]:
        return set(self._positions.get(floor, ()))

    def requests_at(self, floor: int) -> List[Request]:
        requests = [self._heap[i] for i in self._positions.get(floor, ())]
        return sorted(requests, key=lambda r: (r.created_at_tick, r.seq))

    def floors(self) -> List[int]:
        return sorted(self._positions)

    def best_priority(self, floor: int) -> Optional[int]:
        slots = self._positions.get(floor)
        if not slots:
            return None
        return min(self._heap[i].priority for i in slots)

    def update_priority(self, floor: int, current_direction: Direction, tick: int) -> int:
        """Re-age every request on ``floor``; returns how many priorities changed."""

        changed = 0
        for request in self.requests_at(floor):
            new_priority = compute_priority(
                request, current_direction, tick, self.mismatch_penalty
            )
            if new_priority == request.priority:
                continue
            old_priority = request.priority
            request.priority = new_priority
            slot = self._slot_of(request)
            if new_priority < old_priority:
                self._sift_up(slot)
            else:
                self._sift_down(slot)
            changed += 1
        return changed

    def reprioritize(self, current_direction: Direction, tick: int) -> None:
        """Recompute every priority, then heapify once."""

        for request in self._heap:
            request.priority = compute_priority(
                request, current_direction, tick, self.mismatch_penalty
            )
        self.rebuild_heap()

    def rebuild_heap(self) -> None:
        self._positions = {}
        for slot, request in enumerate(self._heap):
            self._index(request.floor).add(slot)
        for slot in reversed(range(len(self._heap) // 2)):
            self._sift_down(slot)

    def remove_floor(self, floor: int) -> List[Request]:
        return self.remove_oldest(floor, len(self._positions.get(floor, ())))

    def remove_oldest(self, floor: int, count: int) -> List[Request]:
        removed: List[Request] = []
        for request in self.requests_at(floor)[: max(0, count)]:
            removed.append(self._remove_at(self._slot_of(request)))
        if removed:
            logger.debug("served %d tracked request(s) on floor %d", len(removed), floor)
        return removed

    def is_consistent(self) -> bool:
        """Check the heap property and the floor index against the heap contents."""

        for slot in range(1, len(self._heap)):
            if self._heap[(slot - 1) // 2].sort_key > self._heap[slot].sort_key:
                return False
        expected: Dict[int, Set[int]] = {}
        for slot, request in enumerate(self._heap):
            expected.setdefault(request.floor, set()).add(slot)
        return expected == self._positions

    def _index(self, floor: int) -> Set[int]:
        return self._positions.setdefault(floor, set())

    def _slot_of(self, request: Request) -> int:
        for slot in self._positions.get(request.floor, ()):
            if self._heap[slot] is request:
                return slot
        raise KeyError(f"request {request!r} is not tracked")

    def _swap(self, i: int, j: int) -> None:
        first, second = self._heap[i], self._heap[j]
        self._heap[i], self._heap[j] = second, first
        if first.floor == second.floor:
            return
        first_slots = self._positions[first.floor]
        second_slots = self._positions[second.floor]
        first_slots.discard(i)
        first_slots.add(j)
        second_slots.discard(j)
        second_slots.add(i)

    def _sift_up(self, slot: int) -> int:
        while slot > 0:
            parent = (slot - 1) // 2
            if self._heap[parent].sort_key <= self._heap[slot].sort_key:
                break
            self._swap(parent, slot)
            slot = parent
        return slot

    def _sift_down(self, slot: int) -> int:
        size = len(self._heap)
        while True:
            smallest = slot
            for child in (2 * slot + 1, 2 * slot + 2):
                if child < size and self._heap[child].sort_key < self._heap[smallest].sort_key:
                    smallest = child
            if smallest == slot:
                return slot
            self._swap(slot, smallest)
            slot = smallest

    def _remove_at(self, slot: int) -> Request:
        last = len(self._heap) - 1
        if slot != last:
            self._swap(slot, last)
        request = self._heap.pop()
        slots = self._positions[request.floor]
        slots.discard(last)
        if not slots:
            del self._positions[request.floor]
        if slot < len(self._heap):
            self._sift_down(self._sift_up(slot))
        return request
