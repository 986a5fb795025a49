from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .enums import Direction
from .request import Request


@dataclass
class PendingRequests:
    """Unassigned requests, kept in arrival order and split by direction."""

    requests: List[Request] = field(default_factory=list)
    up_queue: List[Request] = field(default_factory=list)
    down_queue: List[Request] = field(default_factory=list)

    def add(self, request: Request) -> None:
        self.requests.append(request)
        if request.direction is Direction.UP:
            self.up_queue.append(request)
        else:
            self.down_queue.append(request)

    def pool(self, direction: Direction) -> Tuple[Request, ...]:
        queue = self.up_queue if direction is Direction.UP else self.down_queue
        return tuple(queue)

    def discard(self, request: Request) -> None:
        queue = self.up_queue if request.direction is Direction.UP else self.down_queue
        _remove_identity(queue, request)
        _remove_identity(self.requests, request)

    def clear(self) -> None:
        self.requests.clear()
        self.up_queue.clear()
        self.down_queue.clear()

    def __len__(self) -> int:
        return len(self.requests)


def _remove_identity(queue: List[Request], request: Request) -> None:
    # Equal requests may be pending twice; only the offered object is consumed.
    for index, queued in enumerate(queue):
        if queued is request:
            del queue[index]
            return
