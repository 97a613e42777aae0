"""Unit tests for CarState and BuildingState primitives."""

import pytest

from conftest import make_building
from lift_scheduler import Action, Direction, Motion
from lift_simulation import BuildingConfig, BuildingState, CarState, InvalidConfiguration


class TestConstruction:
    """Validation happens before any state exists."""

    def test_zero_floors_raises(self):
        with pytest.raises(InvalidConfiguration):
            BuildingState(floors=[], cars=[CarState(capacity=4)])

    def test_no_cars_raises(self):
        with pytest.raises(InvalidConfiguration):
            BuildingState(make_building(3).floors, cars=[])

    @pytest.mark.parametrize("capacity", [0, -2])
    def test_bad_capacity_raises(self, capacity):
        with pytest.raises(InvalidConfiguration):
            CarState(capacity=capacity)

    def test_car_outside_building_raises(self):
        with pytest.raises(InvalidConfiguration):
            make_building(3, cars=[CarState(capacity=2, current_floor=3)])

    def test_occupants_over_capacity_raise(self):
        with pytest.raises(InvalidConfiguration):
            CarState(capacity=1, occupants=[2, 3])

    def test_queued_destination_outside_building_raises(self):
        with pytest.raises(InvalidConfiguration):
            make_building(3, requests={0: [7]})

    def test_from_config_places_cars(self):
        building = BuildingState.from_config(
            BuildingConfig(floor_count=2, car_count=3, capacity_per_car=5)
        )
        assert building.positions() == (0, 1, 0)
        assert [car.direction for car in building.cars] == [
            Direction.UP,
            Direction.DOWN,
            Direction.UP,
        ]
        assert all(car.capacity == 5 for car in building.cars)


class TestMovement:
    def test_boundaries(self):
        building = make_building(3)
        assert building.is_at_bottom(0)
        assert not building.is_at_top(0)

    def test_move_down_at_bottom_is_noop(self):
        building = make_building(3)
        building.move_down(0)
        assert building.cars[0].current_floor == 0

    def test_move_up_at_top_is_noop(self):
        building = make_building(3, cars=[CarState(capacity=1, current_floor=2)])
        building.move_up(0)
        assert building.cars[0].current_floor == 2

    def test_continue_reverses_at_top(self):
        building = make_building(3, cars=[CarState(capacity=1, current_floor=2)])
        building.continue_in_direction(0)
        assert building.cars[0].current_floor == 1
        assert building.cars[0].direction is Direction.DOWN

    def test_continue_reverses_at_bottom(self):
        car = CarState(capacity=1, current_floor=0, direction=Direction.DOWN)
        building = make_building(3, cars=[car])
        building.continue_in_direction(0)
        assert building.cars[0].current_floor == 1
        assert building.cars[0].direction is Direction.UP

    def test_continue_from_bottom_facing_up_keeps_direction(self):
        building = make_building(3)
        building.continue_in_direction(0)
        assert building.cars[0].current_floor == 1
        assert building.cars[0].direction is Direction.UP

    def test_single_floor_building_never_leaves_floor_zero(self):
        building = make_building(1)
        for _ in range(3):
            building.continue_in_direction(0)
            assert building.cars[0].current_floor == 0

    def test_bad_car_index_raises(self):
        building = make_building(3)
        with pytest.raises(InvalidConfiguration):
            building.move_up(1)


class TestStopAndExchange:
    def test_alights_then_boards_fifo(self):
        car = CarState(capacity=3, current_floor=1, occupants=[1, 4, 1])
        building = make_building(5, requests={1: [3, 0, 2]}, cars=[car])
        outcome = building.stop_and_exchange(0)
        assert outcome.alighted == 2
        assert outcome.boarded == [3, 0]
        assert sorted(building.cars[0].occupants) == [0, 3, 4]
        assert list(building.floors[1].requests) == [2]
        assert building.cars[0].delivered == 2

    def test_never_boards_beyond_capacity(self):
        building = make_building(5, requests={0: [1, 2, 3, 4, 1, 2]}, cars=[CarState(capacity=4)])
        building.stop_and_exchange(0)
        assert building.cars[0].occupancy == 4
        assert len(building.floors[0].requests) == 2

    def test_full_car_boards_nobody(self):
        car = CarState(capacity=2, occupants=[3, 4])
        building = make_building(5, requests={0: [1]}, cars=[car])
        outcome = building.stop_and_exchange(0)
        assert outcome.boarded == []
        assert len(building.floors[0].requests) == 1


class TestApply:
    def test_apply_exchange_then_move(self):
        building = make_building(5, requests={0: [3]})
        outcome = building.apply(0, Action(motion=Motion.UP, exchange=True))
        assert outcome.boarded == [3]
        assert outcome.from_floor == 0
        assert outcome.to_floor == 1
        assert outcome.moved

    def test_apply_alight_only_exchange(self):
        car = CarState(capacity=2, current_floor=1, occupants=[1, 3])
        building = make_building(5, requests={1: [0]}, cars=[car])
        outcome = building.apply(0, Action(exchange=True, board=False))
        assert outcome.alighted == 1
        assert outcome.boarded == []
        assert list(building.floors[1].requests) == [0]

    def test_apply_heading_without_motion(self):
        building = make_building(5)
        building.apply(0, Action(heading=Direction.DOWN))
        assert building.cars[0].direction is Direction.DOWN
        assert building.cars[0].current_floor == 0

    def test_apply_bad_index_mutates_nothing(self):
        building = make_building(5, requests={0: [3]})
        before = building.snapshot()
        with pytest.raises(InvalidConfiguration):
            building.apply(2, Action(motion=Motion.UP, exchange=True))
        assert building.snapshot() == before


class TestRequests:
    def test_add_request(self):
        building = make_building(4)
        building.add_request(2, 0)
        assert list(building.floors[2].requests) == [0]
        assert not building.is_complete()

    @pytest.mark.parametrize("floor,destination", [(5, 0), (1, 9), (2, 2)])
    def test_add_bad_request_raises(self, floor, destination):
        building = make_building(4)
        with pytest.raises(InvalidConfiguration):
            building.add_request(floor, destination)
        assert building.count_pending() == 0

    def test_counts(self):
        car = CarState(capacity=4, occupants=[2], delivered=3)
        building = make_building(4, requests={1: [0, 3], 3: [1]}, cars=[car])
        assert building.count_pending() == 3
        assert building.count_onboard() == 1
        assert building.count_delivered() == 3

    def test_view_reflects_state(self):
        building = make_building(3, requests={2: [0, 1]})
        view = building.view()
        assert view.floor_count == 3
        assert view.waiting == ((), (), (0, 1))
        assert view.cars[0].current_floor == 0
        assert view.waiting_floors() == [2]
