from __future__ import annotations

from enum import Enum, IntEnum


class Direction(IntEnum):
    """Travel direction; +1 for up, -1 for down, 0 when idle."""

    UP = 1
    DOWN = -1
    NONE = 0

    @property
    def label(self) -> str:
        return self.name.capitalize()


class ElevatorStatus(str, Enum):
    OUT_OF_SERVICE = "OutOfService"
    WAITING = "Waiting"
    MOVING = "Moving"
    STOPPING_FOR_SERVICE = "StoppingForService"

    def __str__(self) -> str:
        return self.value


class SystemStatus(str, Enum):
    OUT_OF_SERVICE = "OutOfService"
    RUNNING = "Running"
    STOPPING = "Stopping"

    def __str__(self) -> str:
        return self.value
