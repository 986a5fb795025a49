from __future__ import annotations

from typing import Dict, Type

from .interface import ElevatorSnapshot, Scheduler
from .nearest_mover import NearestMoverScheduler

__all__ = [
    "ElevatorSnapshot",
    "NearestMoverScheduler",
    "Scheduler",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "nearest_mover": NearestMoverScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
