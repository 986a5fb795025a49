"""Simulation primitives for a step-driven multi-elevator building."""

from .building import Building
from .config import BuildingConfig, ElevatorConstraints
from .elevator import Elevator
from .enums import Direction, ElevatorStatus, SystemStatus
from .errors import (
    ElevatorSystemError,
    InvalidConfigurationError,
    InvalidRequestError,
    NotAcceptingRequestsError,
)
from .report import BuildingReport, ElevatorReport
from .request import Request
from .simulation import Simulation

__all__ = [
    "Building",
    "BuildingConfig",
    "BuildingReport",
    "Direction",
    "Elevator",
    "ElevatorConstraints",
    "ElevatorReport",
    "ElevatorStatus",
    "ElevatorSystemError",
    "InvalidConfigurationError",
    "InvalidRequestError",
    "NotAcceptingRequestsError",
    "Request",
    "Simulation",
    "SystemStatus",
]
