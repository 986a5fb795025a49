from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from .config import DEFAULT_DOOR_DWELL_TICKS
from .enums import Direction, ElevatorStatus
from .report import ElevatorReport
from .request import Request

logger = logging.getLogger(__name__)


@dataclass
class _Ride:
    request: Request
    boarded: bool = False


@dataclass
class Elevator:
    """A single car sweeping the shaft one floor per tick.

    The car waits with its doors open for ``door_dwell_ticks`` at every stop
    and at both ends of the shaft, then carries on in its heading. Accepted
    requests are picked up when the car passes their origin and retired when
    it later reaches their destination.
    """

    elevator_id: int
    num_floors: int
    capacity: int
    door_dwell_ticks: int = DEFAULT_DOOR_DWELL_TICKS
    current_floor: int = 0
    wait_timer: int = field(init=False)
    _state: ElevatorStatus = field(default=ElevatorStatus.WAITING, init=False)
    _heading: Direction = field(default=Direction.UP, init=False)
    _rides: List[_Ride] = field(default_factory=list, init=False)
    _draining: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.wait_timer = self.door_dwell_ticks
        self._heading = self._default_heading()

    @property
    def top_floor(self) -> int:
        return self.num_floors - 1

    @property
    def status(self) -> ElevatorStatus:
        if self._state is ElevatorStatus.OUT_OF_SERVICE:
            return ElevatorStatus.OUT_OF_SERVICE
        if self._draining:
            return ElevatorStatus.STOPPING_FOR_SERVICE
        return self._state

    @property
    def direction(self) -> Direction:
        if self._state is ElevatorStatus.OUT_OF_SERVICE:
            return Direction.NONE
        if self._state is ElevatorStatus.MOVING or self._rides:
            return self._heading
        return Direction.NONE

    @property
    def doors_open(self) -> bool:
        return self._state is ElevatorStatus.WAITING

    @property
    def requests(self) -> Tuple[Request, ...]:
        return tuple(ride.request for ride in self._rides)

    def is_taking_requests(self) -> bool:
        return (
            self._state is ElevatorStatus.WAITING
            and not self._draining
            and len(self._rides) < self.capacity
        )

    def is_stopped(self) -> bool:
        return self._state is ElevatorStatus.OUT_OF_SERVICE

    def start(self) -> None:
        self._rides.clear()
        self._draining = False
        self._state = ElevatorStatus.WAITING
        self.wait_timer = self.door_dwell_ticks
        self._heading = self._default_heading()
        logger.debug("Elevator %s started at floor %s", self.elevator_id, self.current_floor)

    def add_request(self, request: Request) -> bool:
        if (
            self._state is ElevatorStatus.OUT_OF_SERVICE
            or self._draining
            or len(self._rides) >= self.capacity
        ):
            return False

        idle = self._state is ElevatorStatus.WAITING and not self._rides
        ride = _Ride(request)
        self._rides.append(ride)
        if self.doors_open and request.origin == self.current_floor:
            ride.boarded = True

        if idle:
            if request.origin == self.current_floor:
                self._heading = request.direction
            else:
                self._heading = (
                    Direction.UP if request.origin > self.current_floor else Direction.DOWN
                )
                self._state = ElevatorStatus.MOVING
        logger.debug("Elevator %s accepted request %s", self.elevator_id, request)
        return True

    def take_out_of_service(self) -> None:
        if self._state is ElevatorStatus.OUT_OF_SERVICE:
            return
        if self._state is ElevatorStatus.WAITING and not self._rides:
            self._shut_down()
            return
        self._draining = True

    def step(self) -> None:
        if self._state is ElevatorStatus.OUT_OF_SERVICE:
            return
        if self._state is ElevatorStatus.WAITING:
            self._wait()
        else:
            self._move()

    def report(self) -> ElevatorReport:
        return ElevatorReport(
            elevator_id=self.elevator_id,
            floor=self.current_floor,
            direction=self.direction,
            status=self.status,
            requests=self.requests,
            wait_timer=self.wait_timer,
            doors_open=self.doors_open,
        )

    def __str__(self) -> str:
        return str(self.report())

    def _wait(self) -> None:
        if self._draining and not self._rides:
            self._shut_down()
            return
        if self.wait_timer > 0:
            self.wait_timer -= 1
        if self.wait_timer == 0:
            self._close_doors()

    def _close_doors(self) -> None:
        if self.top_floor == 0:
            # Nowhere to go in a single-floor building.
            self.wait_timer = self.door_dwell_ticks
            return
        self._turn_at_ends()
        self._state = ElevatorStatus.MOVING

    def _move(self) -> None:
        self._turn_at_ends()
        self.current_floor += int(self._heading)
        if self._draining and not self._rides:
            self._shut_down()
            return
        if self._is_stop(self.current_floor) or self._at_end_of_travel():
            self._open_doors()

    def _open_doors(self) -> None:
        self._state = ElevatorStatus.WAITING
        self.wait_timer = self.door_dwell_ticks
        self._serve_floor()
        self._turn_at_ends()
        if self._draining and not self._rides:
            self._shut_down()

    def _serve_floor(self) -> None:
        floor = self.current_floor

        # Alight
        remaining: List[_Ride] = []
        for ride in self._rides:
            if ride.boarded and ride.request.destination == floor:
                logger.debug("Elevator %s dropped off %s", self.elevator_id, ride.request)
            else:
                remaining.append(ride)
        self._rides = remaining

        # Board
        for ride in self._rides:
            if not ride.boarded and ride.request.origin == floor:
                ride.boarded = True
                logger.debug("Elevator %s picked up %s", self.elevator_id, ride.request)

    def _is_stop(self, floor: int) -> bool:
        for ride in self._rides:
            if ride.boarded and ride.request.destination == floor:
                return True
            if not ride.boarded and ride.request.origin == floor:
                return True
        return False

    def _at_end_of_travel(self) -> bool:
        if self._heading is Direction.UP:
            return self.current_floor >= self.top_floor
        return self.current_floor <= 0

    def _turn_at_ends(self) -> None:
        if self.current_floor >= self.top_floor:
            self._heading = Direction.DOWN
        elif self.current_floor <= 0:
            self._heading = Direction.UP

    def _default_heading(self) -> Direction:
        if self.top_floor > 0 and self.current_floor >= self.top_floor:
            return Direction.DOWN
        return Direction.UP

    def _shut_down(self) -> None:
        self._state = ElevatorStatus.OUT_OF_SERVICE
        self._draining = False
        self.wait_timer = 0
        logger.debug("Elevator %s out of service at floor %s", self.elevator_id, self.current_floor)
