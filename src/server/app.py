from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Callable, Dict, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from simulation import Building, InvalidRequestError, NotAcceptingRequestsError, Simulation

logger = logging.getLogger(__name__)

MAX_STEPS_PER_CALL = 1000


class AlgorithmSelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class PickupRequest(BaseModel):
    origin: int
    destination: int


class StepRequest(BaseModel):
    count: int = Field(default=1, ge=0, le=MAX_STEPS_PER_CALL)


class SimulationManager:
    def __init__(
        self,
        num_floors: int = 12,
        elevator_count: int = 5,
        capacity: int = 3,
        tick_interval: Optional[float] = None,
    ) -> None:
        building = Building(num_floors, elevator_count, capacity)
        self.simulation = Simulation(building=building)
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self.tick_interval and self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            async with self._lock:
                self.simulation.step()
                payload = self.current_state()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        report = self.simulation.report()
        return {
            "time": self.simulation.current_time,
            "report": report.to_dict(),
            "text": str(report),
            "scheduler": self.simulation.building.scheduler_name,
        }

    async def add_request(self, origin: int, destination: int) -> dict:
        async with self._lock:
            self.simulation.submit_request(origin, destination)
            return await self._publish()

    async def step(self, count: int) -> dict:
        async with self._lock:
            self.simulation.run(count)
            return await self._publish()

    async def command(self, action: Callable[[], object]) -> dict:
        async with self._lock:
            result = action()
            logger.info("%s accepted=%s", action.__name__, result is not False)
            state = await self._publish()
            state["accepted"] = result is not False
            return state

    async def set_scheduler(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            self.simulation.building.set_scheduler(name, **options)
            return await self._publish()

    async def _publish(self) -> dict:
        state = self.current_state()
        await self.broadcast(state)
        return state


manager = SimulationManager()
app = FastAPI(title="Elevator Dispatch Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/requests")
async def add_request(pickup: PickupRequest) -> dict:
    try:
        return await manager.add_request(pickup.origin, pickup.destination)
    except InvalidRequestError as exc:
        logger.info("Bad pickup %s->%s: %s", pickup.origin, pickup.destination, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except NotAcceptingRequestsError as exc:
        logger.info("Pickup %s->%s refused: %s", pickup.origin, pickup.destination, exc)
        raise HTTPException(status_code=409, detail=str(exc))


@app.post("/step")
async def step(request: StepRequest) -> dict:
    return await manager.step(request.count)


@app.post("/start")
async def start() -> dict:
    return await manager.command(manager.simulation.start)


@app.post("/stop")
async def stop() -> dict:
    return await manager.command(manager.simulation.stop)


@app.post("/restart")
async def restart() -> dict:
    return await manager.command(manager.simulation.restart)


@app.post("/algorithm")
async def set_algorithm(selection: AlgorithmSelection) -> dict:
    try:
        return await manager.set_scheduler(selection.name, selection.options)
    except ValueError as exc:
        logger.info("Unknown algorithm %r: %s", selection.name, exc)
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
