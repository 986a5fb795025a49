from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .interface import ElevatorSnapshot

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from simulation.enums import Direction
    from simulation.request import Request


class NearestMoverScheduler:
    """Offers each request to the closest car already heading its way.

    Only cars whose direction matches the pool are eligible, so a fleet of
    idle cars leaves every request pending. ``include_idle`` lets idle cars
    compete as well; it changes assignment order and is off by default.
    Capacity is not checked here; a full car rejects the offer itself.
    """

    def __init__(self, include_idle: bool = False) -> None:
        self.include_idle = include_idle

    def select_elevator(
        self,
        elevators: Sequence[ElevatorSnapshot],
        request: Request,
        direction: Direction,
    ) -> Optional[int]:
        closest: Optional[int] = None
        closest_distance: Optional[int] = None
        for index, elevator in enumerate(elevators):
            if not self._is_eligible(elevator, direction):
                continue
            distance = abs(elevator.floor - request.origin)
            # Strict comparison keeps the lowest index on ties.
            if closest_distance is None or distance < closest_distance:
                closest = index
                closest_distance = distance
        return closest

    def _is_eligible(self, elevator: ElevatorSnapshot, direction: Direction) -> bool:
        if elevator.direction == direction:
            return True
        return self.include_idle and not elevator.direction
