from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple

from .interface import BuildingView, Direction, Motion


def pending_floors(
    view: BuildingView, car_index: int, waiting: Optional[Iterable[int]] = None
) -> Set[int]:
    """Floors a car still has business on: waiting pickups plus its riders' stops.

    ``waiting`` narrows the pickup floors, e.g. to the floors assigned to the car.
    """

    floors = set(view.waiting_floors() if waiting is None else waiting)
    floors.update(view.car(car_index).occupants)
    return floors


def look_motion(
    direction: Direction, here: int, floors: Iterable[int]
) -> Tuple[Direction, Motion]:
    """Advance toward the outermost pending floor, turning around at it.

    On reaching the bound in the travel direction the car turns and, when
    there is work on the other side, starts moving that way in the same tick.
    """

    floors = list(floors)
    low, high = min(floors), max(floors)
    if direction is Direction.UP:
        if here < high:
            return Direction.UP, Motion.UP
        return Direction.DOWN, (Motion.DOWN if here > low else Motion.HOLD)
    if here > low:
        return Direction.DOWN, Motion.DOWN
    return Direction.UP, (Motion.UP if here < high else Motion.HOLD)


def requests_by_side(view: BuildingView, car_index: int) -> Tuple[int, int]:
    """Count floors with pending work above and below the car's floor.

    A floor counts once however many riders wait there or are bound for it.
    A full car cannot pick anyone up, so only its riders' stops count.
    """

    car = view.car(car_index)
    here = car.current_floor
    waiting = () if car.available_capacity == 0 else None
    floors = pending_floors(view, car_index, waiting=waiting)
    above = sum(1 for floor in floors if floor > here)
    below = sum(1 for floor in floors if floor < here)
    return above, below


def motion_for(direction: Direction) -> Motion:
    return Motion.UP if direction is Direction.UP else Motion.DOWN
