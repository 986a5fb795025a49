from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import DEFAULT_DOOR_DWELL_TICKS, BuildingConfig, ElevatorConstraints
from .elevator import Elevator
from .enums import Direction, SystemStatus
from .errors import InvalidRequestError, NotAcceptingRequestsError
from .pending import PendingRequests
from .report import BuildingReport
from .request import Request
from scheduler import ElevatorSnapshot, Scheduler, get_scheduler

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """A fixed fleet of elevators and the dispatcher that feeds them requests.

    Requests are only queued by :meth:`add_request`; they are handed to cars
    at the start of the next :meth:`step`, before any car moves.
    """

    num_floors: int
    elevator_count: int
    capacity: int
    door_dwell_ticks: int = DEFAULT_DOOR_DWELL_TICKS
    scheduler_name: str = "nearest_mover"
    scheduler_options: dict = field(default_factory=dict)
    status: SystemStatus = field(default=SystemStatus.OUT_OF_SERVICE, init=False)
    scheduler: Scheduler = field(init=False, repr=False)
    _elevators: List[Elevator] = field(init=False, repr=False)
    _pending: PendingRequests = field(default_factory=PendingRequests, init=False, repr=False)

    def __post_init__(self) -> None:
        self.config.validate()
        self.scheduler = get_scheduler(self.scheduler_name, **self.scheduler_options)
        self._elevators = [
            Elevator(
                elevator_id=i,
                num_floors=self.num_floors,
                capacity=self.capacity,
                door_dwell_ticks=self.door_dwell_ticks,
            )
            for i in range(self.elevator_count)
        ]

    @classmethod
    def from_config(cls, config: BuildingConfig) -> "Building":
        return cls(
            num_floors=config.num_floors,
            elevator_count=config.elevator_count,
            capacity=config.constraints.capacity,
            door_dwell_ticks=config.constraints.door_dwell_ticks,
            scheduler_name=config.scheduler_name,
            scheduler_options=dict(config.scheduler_options),
        )

    @property
    def config(self) -> BuildingConfig:
        return BuildingConfig(
            num_floors=self.num_floors,
            elevator_count=self.elevator_count,
            constraints=ElevatorConstraints(
                capacity=self.capacity, door_dwell_ticks=self.door_dwell_ticks
            ),
            scheduler_name=self.scheduler_name,
            scheduler_options=dict(self.scheduler_options),
        )

    @property
    def elevators(self) -> Tuple[Elevator, ...]:
        return tuple(self._elevators)

    @property
    def pending_requests(self) -> Tuple[Request, ...]:
        return tuple(self._pending.requests)

    @property
    def up_requests(self) -> Tuple[Request, ...]:
        return self._pending.pool(Direction.UP)

    @property
    def down_requests(self) -> Tuple[Request, ...]:
        return self._pending.pool(Direction.DOWN)

    def set_scheduler(self, name: str, **options) -> None:
        self.scheduler = get_scheduler(name, **options)
        self.scheduler_name = name
        self.scheduler_options = options

    def add_request(self, request: Optional[Request]) -> bool:
        if request is None:
            raise InvalidRequestError("Request is null.")
        if self.status is not SystemStatus.RUNNING:
            raise NotAcceptingRequestsError("Building is not accepting requests.")
        if not self._is_valid_floor(request.origin) or not self._is_valid_floor(
            request.destination
        ):
            raise InvalidRequestError("Invalid floor number.")
        self._pending.add(request)
        logger.debug("Queued request %s", request)
        return True

    def clear_requests(self) -> None:
        self._pending.clear()

    def step(self) -> None:
        if self.status is SystemStatus.OUT_OF_SERVICE:
            return

        if self.status is SystemStatus.RUNNING:
            self.dispatch()
            for elevator in self._elevators:
                elevator.step()
            return

        for elevator in self._elevators:
            elevator.step()
        if all(elevator.is_stopped() for elevator in self._elevators):
            self.status = SystemStatus.OUT_OF_SERVICE
            logger.info("Elevator system is out of service")

    def dispatch(self) -> None:
        if not self._pending:
            return
        if not self._pending.up_queue and not self._pending.down_queue:
            return
        self._dispatch_direction(Direction.DOWN)
        self._dispatch_direction(Direction.UP)

    def start_elevator_system(self) -> bool:
        if self.status is not SystemStatus.OUT_OF_SERVICE:
            return False
        self._start_all()
        return True

    def restart_elevator_system(self) -> bool:
        if self.status is not SystemStatus.OUT_OF_SERVICE:
            return False
        self._start_all()
        return True

    def stop_elevator_system(self) -> None:
        self.status = SystemStatus.STOPPING
        for elevator in self._elevators:
            elevator.take_out_of_service()
        self.clear_requests()
        logger.info("Elevator system stopping")

    def report(self) -> BuildingReport:
        return BuildingReport(
            num_floors=self.num_floors,
            num_elevators=self.elevator_count,
            capacity=self.capacity,
            elevators=tuple(elevator.report() for elevator in self._elevators),
            up_requests=self.up_requests,
            down_requests=self.down_requests,
            system_status=self.status,
        )

    get_elevator_system_status = report

    def __str__(self) -> str:
        return str(self.report())

    def _dispatch_direction(self, direction: Direction) -> None:
        for request in self._pending.pool(direction):
            index = self.scheduler.select_elevator(self._snapshot_elevators(), request, direction)
            if index is None:
                continue
            elevator = self._elevators[index]
            if elevator.add_request(request):
                self._pending.discard(request)
                logger.debug("Assigned %s to elevator %s", request, elevator.elevator_id)

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [
            ElevatorSnapshot(
                elevator_id=elevator.elevator_id,
                floor=elevator.current_floor,
                direction=elevator.direction,
                load=len(elevator.requests),
                capacity=elevator.capacity,
            )
            for elevator in self._elevators
        ]

    def _start_all(self) -> None:
        for elevator in self._elevators:
            elevator.start()
        self.status = SystemStatus.RUNNING
        logger.info("Elevator system running with %s elevators", self.elevator_count)

    def _is_valid_floor(self, floor: int) -> bool:
        return 0 <= floor < self.num_floors
