from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from simulation.enums import Direction
    from simulation.request import Request


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for scheduling decisions."""

    elevator_id: int
    floor: int
    direction: Direction
    load: int
    capacity: int

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.load)


class Scheduler(Protocol):
    """Strategy interface for choosing which car is offered a pending request."""

    def select_elevator(
        self,
        elevators: Sequence[ElevatorSnapshot],
        request: Request,
        direction: Direction,
    ) -> Optional[int]:
        """
        Return the position in ``elevators`` of the car to offer ``request``
        to, or ``None`` to leave it pending until a later step.

        ``direction`` is the pool being drained. Implementations must not
        assume the offer is accepted; the car may still turn it down.
        """
        ...
