"""Tests for the indexed priority heap of pickup requests."""

import pytest

from lift_scheduler import Direction, EmptyQueueUnderflow, PriorityRequestStore
from lift_scheduler.priority import DIRECTION_MISMATCH_PENALTY, Request, compute_priority


def _filled_store() -> PriorityRequestStore:
    store = PriorityRequestStore()
    pushes = [
        (4, Direction.DOWN, 0),
        (1, Direction.UP, 1),
        (7, Direction.DOWN, 2),
        (1, Direction.UP, 3),
        (3, Direction.UP, 4),
        (7, Direction.DOWN, 5),
        (0, Direction.UP, 6),
        (5, Direction.DOWN, 7),
    ]
    for floor, direction, tick in pushes:
        store.push(floor, direction, tick, current_direction=Direction.UP)
    return store


class TestComputePriority:
    def test_matching_direction_has_no_penalty(self):
        request = Request(floor=2, direction=Direction.UP, created_at_tick=5)
        assert compute_priority(request, Direction.UP, tick=8) == -3

    def test_mismatched_direction_is_penalised(self):
        request = Request(floor=2, direction=Direction.DOWN, created_at_tick=5)
        assert compute_priority(request, Direction.UP, tick=8) == DIRECTION_MISMATCH_PENALTY - 3


class TestPriorityRequestStore:
    """Heap order and the floor -> positions index stay in step."""

    def test_empty_store_raises(self):
        store = PriorityRequestStore()
        with pytest.raises(EmptyQueueUnderflow):
            store.pop()
        with pytest.raises(EmptyQueueUnderflow):
            store.peek()

    def test_push_keeps_store_consistent(self):
        store = _filled_store()
        assert len(store) == 8
        assert store.is_consistent()
        assert len(store.positions(1)) == 2
        assert len(store.positions(7)) == 2

    def test_pop_returns_most_urgent_first(self):
        store = _filled_store()
        popped = []
        while len(store):
            popped.append(store.pop().sort_key)
            assert store.is_consistent()
        assert popped == sorted(popped)

    def test_pop_removes_floor_from_index(self):
        store = PriorityRequestStore()
        store.push(2, Direction.UP)
        store.pop()
        assert store.floors() == []
        assert store.positions(2) == set()

    def test_update_priority_sifts_up(self):
        store = PriorityRequestStore()
        store.push(1, Direction.UP, 0, current_direction=Direction.UP)
        store.push(3, Direction.DOWN, 0, current_direction=Direction.UP)
        assert store.peek().floor == 1

        changed = store.update_priority(3, Direction.DOWN, tick=5)

        assert changed == 1
        assert store.peek().floor == 3
        assert store.peek().priority == -5
        assert store.is_consistent()

    def test_update_priority_sifts_down(self):
        store = _filled_store()
        store.update_priority(0, Direction.DOWN, tick=10)
        assert store.peek().floor != 0
        assert store.is_consistent()

    def test_update_priority_unchanged_leaves_heap(self):
        store = PriorityRequestStore()
        store.push(1, Direction.UP, 0, current_direction=Direction.UP)
        assert store.update_priority(1, Direction.UP, tick=0) == 0
        assert store.update_priority(6, Direction.UP, tick=3) == 0

    def test_reprioritize_rebuilds_heap(self):
        store = _filled_store()
        store.reprioritize(Direction.DOWN, tick=20)
        assert store.is_consistent()
        assert store.peek().direction is Direction.DOWN
        assert store.peek().floor == 4

    def test_mismatch_overtakes_fresh_match_after_penalty(self):
        store = PriorityRequestStore()
        store.push(5, Direction.DOWN, 0, current_direction=Direction.UP)

        store.push(2, Direction.UP, 999, current_direction=Direction.UP)
        store.reprioritize(Direction.UP, tick=999)
        assert store.peek().floor == 2

        store.push(3, Direction.UP, 1001, current_direction=Direction.UP)
        store.remove_floor(2)
        store.reprioritize(Direction.UP, tick=1001)
        assert store.peek().floor == 5

    def test_remove_oldest_takes_earliest_requests(self):
        store = PriorityRequestStore()
        for tick in range(3):
            store.push(2, Direction.UP, tick)
        store.push(6, Direction.DOWN, 1)

        removed = store.remove_oldest(2, 2)

        assert [r.created_at_tick for r in removed] == [0, 1]
        assert [r.created_at_tick for r in store.requests_at(2)] == [2]
        assert store.is_consistent()

    def test_remove_floor(self):
        store = _filled_store()
        removed = store.remove_floor(7)
        assert len(removed) == 2
        assert 7 not in store.floors()
        assert len(store) == 6
        assert store.is_consistent()

    def test_index_tracks_every_slot(self):
        store = _filled_store()
        store.pop()
        store.remove_oldest(1, 1)
        store.update_priority(5, Direction.DOWN, tick=9)
        for floor in store.floors():
            for slot in store.positions(floor):
                assert list(store)[slot].floor == floor
        assert sum(len(store.positions(f)) for f in store.floors()) == len(store)

    def test_best_priority(self):
        store = PriorityRequestStore()
        store.push(1, Direction.UP, 0, current_direction=Direction.UP)
        store.push(1, Direction.DOWN, 0, current_direction=Direction.UP)
        assert store.best_priority(1) == 0
        assert store.best_priority(4) is None
