from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .errors import InvalidConfigurationError

DEFAULT_DOOR_DWELL_TICKS = 5


@dataclass
class ElevatorConstraints:
    """Per-car limits shared by every elevator in a building."""

    capacity: int = 3
    door_dwell_ticks: int = DEFAULT_DOOR_DWELL_TICKS


@dataclass
class BuildingConfig:
    """Everything needed to construct a :class:`~simulation.building.Building`."""

    num_floors: int = 12
    elevator_count: int = 5
    constraints: ElevatorConstraints = field(default_factory=ElevatorConstraints)
    scheduler_name: str = "nearest_mover"
    scheduler_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildingConfig":
        scheduler_cfg = data.get("scheduler", {})
        config = cls(
            num_floors=data.get("num_floors", 12),
            elevator_count=data.get("elevator_count", 5),
            constraints=ElevatorConstraints(
                capacity=data.get("capacity", 3),
                door_dwell_ticks=data.get("door_dwell_ticks", DEFAULT_DOOR_DWELL_TICKS),
            ),
            scheduler_name=scheduler_cfg.get("name", "nearest_mover"),
            scheduler_options=dict(scheduler_cfg.get("options", {})),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if (
            self.num_floors <= 0
            or self.elevator_count <= 0
            or self.constraints.capacity <= 0
        ):
            raise InvalidConfigurationError(
                "Number of floors, elevators, and capacity must be greater than 0."
            )
        if self.constraints.door_dwell_ticks < 0:
            raise InvalidConfigurationError("Door dwell ticks cannot be negative.")
