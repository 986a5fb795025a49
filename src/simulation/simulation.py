from __future__ import annotations

import logging
import math
import random
from typing import Callable, Dict, List, Optional

from .building import Building
from .enums import SystemStatus
from .errors import InvalidRequestError, NotAcceptingRequestsError
from .report import BuildingReport
from .request import Request

logger = logging.getLogger(__name__)


class Simulation:
    """Drives a building tick by tick on behalf of a front end.

    Every command publishes the fresh report to the hooks registered for its
    event, so a display only has to subscribe and redraw.
    """

    def __init__(
        self,
        building: Building,
        arrival_rate_per_floor: float = 0.0,
        random_seed: Optional[int] = None,
    ) -> None:
        self.building = building
        self.arrival_rate_per_floor = arrival_rate_per_floor
        self.random = random.Random(random_seed)
        self.current_time: int = 0
        self.rejected_requests: int = 0
        self.event_hooks: Dict[str, List[Callable[[BuildingReport], None]]] = {}

    def run(self, duration: int) -> None:
        for _ in range(duration):
            self.step()

    def step(self) -> None:
        self._generate_arrivals()
        self.building.step()
        self.current_time += 1
        self._emit("step")

    def add_request(self, origin: int, destination: int) -> bool:
        try:
            self.submit_request(origin, destination)
        except (InvalidRequestError, NotAcceptingRequestsError):
            return False
        return True

    def submit_request(self, origin: int, destination: int) -> Request:
        """Queue a pickup, re-raising the rejection after counting it."""
        try:
            request = Request(origin, destination)
            self.building.add_request(request)
        except (InvalidRequestError, NotAcceptingRequestsError) as exc:
            self.rejected_requests += 1
            logger.warning("Rejected request %s->%s: %s", origin, destination, exc)
            raise
        self._emit("request")
        return request

    def start(self) -> bool:
        started = self.building.start_elevator_system()
        if started:
            self._emit("status")
        return started

    def restart(self) -> bool:
        restarted = self.building.restart_elevator_system()
        if restarted:
            self._emit("status")
        return restarted

    def stop(self) -> None:
        self.building.stop_elevator_system()
        self._emit("status")

    def report(self) -> BuildingReport:
        return self.building.report()

    def on_event(self, event: str, callback: Callable[[BuildingReport], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _generate_arrivals(self) -> None:
        if self.arrival_rate_per_floor <= 0 or self.building.num_floors < 2:
            return
        if self.building.status is not SystemStatus.RUNNING:
            return
        for origin in range(self.building.num_floors):
            for _ in range(self._poisson(self.arrival_rate_per_floor)):
                destination = self._choose_destination(origin)
                self.add_request(origin, destination)

    def _choose_destination(self, origin: int) -> int:
        possible_floors = [f for f in range(self.building.num_floors) if f != origin]
        return self.random.choice(possible_floors)

    def _poisson(self, lam: float) -> int:
        L = math.exp(-lam)
        k = 0
        p = 1.0
        while p > L:
            k += 1
            p *= self.random.random()
        return k - 1

    def _emit(self, event: str) -> None:
        callbacks = self.event_hooks.get(event, [])
        if not callbacks:
            return
        report = self.building.report()
        for callback in callbacks:
            callback(report)
