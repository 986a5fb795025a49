from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .enums import Direction, ElevatorStatus, SystemStatus
from .request import Request


@dataclass(frozen=True)
class ElevatorReport:
    """Read-only view of one car, taken between ticks."""

    elevator_id: int
    floor: int
    direction: Direction
    status: ElevatorStatus
    requests: Tuple[Request, ...]
    wait_timer: int
    doors_open: bool

    def __str__(self) -> str:
        if self.status is ElevatorStatus.OUT_OF_SERVICE:
            return "OutOfService"
        # A draining car renders by door state; its status field says it is stopping.
        if not self.doors_open:
            return f"Moving[Floor {self.floor}, Direction {self.direction.label}]"
        return f"Waiting[Floor {self.floor}, Time {self.wait_timer}]"

    def to_dict(self) -> dict:
        return {
            "id": self.elevator_id,
            "floor": self.floor,
            "direction": self.direction.name,
            "status": self.status.value,
            "requests": [str(request) for request in self.requests],
            "wait_timer": self.wait_timer,
            "text": str(self),
        }


@dataclass(frozen=True)
class BuildingReport:
    """Snapshot of the whole system as shown to operators."""

    num_floors: int
    num_elevators: int
    capacity: int
    elevators: Tuple[ElevatorReport, ...]
    up_requests: Tuple[Request, ...]
    down_requests: Tuple[Request, ...]
    system_status: SystemStatus

    def __str__(self) -> str:
        lines = [
            f"Number of floors: {self.num_floors}",
            f"Number of elevators: {self.num_elevators}",
            f"Elevator capacity: {self.capacity}",
            f"Elevator system status: {self.system_status.value}",
            f"Up requests: {_format_requests(self.up_requests)}",
            f"Down requests: {_format_requests(self.down_requests)}",
        ]
        lines.extend(
            f"Elevator {index}: {elevator}" for index, elevator in enumerate(self.elevators)
        )
        return "".join(line + "\n" for line in lines)

    def to_dict(self) -> dict:
        return {
            "num_floors": self.num_floors,
            "num_elevators": self.num_elevators,
            "capacity": self.capacity,
            "system_status": self.system_status.value,
            "up_requests": [str(request) for request in self.up_requests],
            "down_requests": [str(request) for request in self.down_requests],
            "elevators": [elevator.to_dict() for elevator in self.elevators],
        }


def _format_requests(requests: Tuple[Request, ...]) -> str:
    return "[" + ", ".join(str(request) for request in requests) + "]"
