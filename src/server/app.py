from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from dataclasses import asdict
from typing import List, Mapping, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from simulation import MemoryTraceSink, RequestRejected, Simulation, SystemConfig, create_system

logger = logging.getLogger(__name__)

MIN_FLOORS, MAX_FLOORS = SystemConfig.FLOOR_RANGE
MIN_ELEVATORS, MAX_ELEVATORS = SystemConfig.ELEVATOR_RANGE
ENV_PREFIX = "ELEVATOR_SIM_"


class RideRequest(BaseModel):
    origin: int
    destination: int


class TickRequest(BaseModel):
    count: int = Field(1, ge=1, le=1000)


class ResetRequest(BaseModel):
    num_floors: int = Field(10, ge=MIN_FLOORS, le=MAX_FLOORS)
    elevator_count: int = Field(2, ge=MIN_ELEVATORS, le=MAX_ELEVATORS)


class ServerSettings(BaseModel):
    """Startup parameters, read from ELEVATOR_SIM_* environment variables."""

    num_floors: int = Field(10, ge=MIN_FLOORS, le=MAX_FLOORS)
    elevator_count: int = Field(2, ge=MIN_ELEVATORS, le=MAX_ELEVATORS)
    auto_tick_interval: Optional[float] = Field(None, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "ServerSettings":
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        return cls(**values)


class SimulationManager:
    """Owns one simulation and serializes every access to it with a single lock."""

    def __init__(
        self,
        num_floors: int = 10,
        elevator_count: int = 2,
        auto_tick_interval: Optional[float] = None,
        trace_lines: int = 500,
    ) -> None:
        self.trace_lines = trace_lines
        self.simulation = self._build(num_floors, elevator_count)
        self.auto_tick_interval = auto_tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: ServerSettings) -> "SimulationManager":
        return cls(
            num_floors=settings.num_floors,
            elevator_count=settings.elevator_count,
            auto_tick_interval=settings.auto_tick_interval,
        )

    def _build(self, num_floors: int, elevator_count: int) -> Simulation:
        self.trace = MemoryTraceSink(max_lines=self.trace_lines)
        return create_system(num_floors, elevator_count, trace_sink=self.trace)

    async def start(self) -> None:
        if self._task is None and self.auto_tick_interval:
            logger.info("Auto-tick every %.3fs", self.auto_tick_interval)
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
                self.simulation.tick()
                payload = self.current_state()
            await self.broadcast(payload)
            await asyncio.sleep(self.auto_tick_interval)

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
        state = asdict(self.simulation.snapshot())
        state["scheduler"] = self.simulation.building.scheduler_name
        return state

    async def state(self) -> dict:
        async with self._lock:
            return self.current_state()

    async def submit(self, origin: int, destination: int) -> dict:
        async with self._lock:
            request = self.simulation.submit_request(origin, destination)
            state = self.current_state()
        state["request"] = asdict(request)
        return state

    async def advance(self, count: int) -> dict:
        async with self._lock:
            self.simulation.run(count)
            state = self.current_state()
        await self.broadcast(state)
        return state

    async def reset(self, num_floors: int, elevator_count: int) -> dict:
        async with self._lock:
            self.simulation = self._build(num_floors, elevator_count)
            state = self.current_state()
        logger.info("Simulation reset: %d floors, %d elevators", num_floors, elevator_count)
        await self.broadcast(state)
        return state

    async def recent_trace(self) -> List[str]:
        async with self._lock:
            return list(self.trace.lines)


manager = SimulationManager.from_settings(ServerSettings.from_env())
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
    return await manager.state()


@app.post("/requests")
async def submit_request(request: RideRequest) -> dict:
    try:
        return await manager.submit(request.origin, request.destination)
    except RequestRejected as exc:
        raise HTTPException(status_code=400, detail={"error": exc.error.value, "message": str(exc)})


@app.post("/tick")
async def tick(request: TickRequest) -> dict:
    return await manager.advance(request.count)


@app.post("/reset")
async def reset(request: ResetRequest) -> dict:
    return await manager.reset(request.num_floors, request.elevator_count)


@app.get("/trace")
async def get_trace() -> dict:
    return {"lines": await manager.recent_trace()}


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

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
