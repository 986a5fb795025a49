from __future__ import annotations

from dataclasses import dataclass

from .enums import Direction
from .errors import InvalidRequestError


@dataclass(frozen=True)
class Request:
    """A pickup from ``origin`` that rides to ``destination``."""

    origin: int
    destination: int

    def __post_init__(self) -> None:
        for floor in (self.origin, self.destination):
            if isinstance(floor, bool) or not isinstance(floor, int):
                raise InvalidRequestError(f"Floor must be an integer, got {floor!r}.")
        if self.origin == self.destination:
            raise InvalidRequestError("Start and end floor must differ.")

    @property
    def direction(self) -> Direction:
        return Direction.UP if self.destination > self.origin else Direction.DOWN

    def __str__(self) -> str:
        return f"{self.origin}->{self.destination}"
