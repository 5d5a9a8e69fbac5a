"""FastAPI server with REST API and WebSocket frame streaming.

Provides:
- WebSocket /ws/frames: Stream Frame objects at ~30 FPS
- WebSocket /ws/control: Receive play/pause/set_speed/step/reset commands
- REST API for world state, frames and control
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, Field

from chemotaxis import __version__
from chemotaxis.config import SimulationSettings, get_settings
from chemotaxis.engine.simulation import TickSnapshot, tick_world
from chemotaxis.model.world import World, create_world
from chemotaxis.projection.projector import Frame, frame_to_dict, project

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

MAX_STEP_TICKS = 10_000


class SimulationState:
    """Thread-safe simulation state manager.

    Owns the world and serializes every tick behind one lock, so the
    background loop and the REST/WebSocket handlers never interleave inside a
    tick.
    """

    def __init__(self, settings: SimulationSettings | None = None) -> None:
        self._settings = settings
        self._world = create_world(settings)
        self._last_snapshot: TickSnapshot | None = None
        self._latest_frame: Frame | None = None
        self._running = False
        self._speed = 1.0
        self._paused = True
        self._lock = threading.Lock()
        self._stop_event = threading.Event()

    @property
    def world(self) -> World:
        with self._lock:
            return self._world

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        with self._lock:
            self._paused = value

    @property
    def speed(self) -> float:
        with self._lock:
            return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        """Set simulation speed (clamped to 0.1-10.0)."""
        with self._lock:
            self._speed = max(0.1, min(10.0, value))

    @property
    def latest_frame(self) -> Frame | None:
        with self._lock:
            return self._latest_frame

    @property
    def last_snapshot(self) -> TickSnapshot | None:
        with self._lock:
            return self._last_snapshot

    def tick(self) -> TickSnapshot:
        """Execute one simulation tick and refresh the latest frame."""
        with self._lock:
            snapshot = tick_world(self._world)
            self._last_snapshot = snapshot
            self._latest_frame = project(self._world)
            return snapshot

    def step(self, ticks: int = 1) -> TickSnapshot:
        """Execute `ticks` ticks synchronously and return the last snapshot.

        Raises:
            ValueError: If ticks is outside 1..MAX_STEP_TICKS.
        """
        if not 1 <= ticks <= MAX_STEP_TICKS:
            raise ValueError(f"Tick count must be between 1 and {MAX_STEP_TICKS}, got {ticks}")
        snapshot = self.tick()
        for _ in range(ticks - 1):
            snapshot = self.tick()
        return snapshot

    def frame(self) -> Frame:
        """Return the cached frame, projecting the world if none exists yet."""
        with self._lock:
            if self._latest_frame is not None:
                return self._latest_frame
            return project(self._world)

    def summary(self) -> WorldStateResponse:
        """Summarize the world with every field read inside one tick boundary."""
        with self._lock:
            world = self._world
            return WorldStateResponse(
                tick=world.tick,
                paused=self._paused,
                speed=self._speed,
                live_count=len(world.information_particles),
                field_count=len(world.chemotactic_particles),
                bound_count=world.receiver.bound_count,
                free_receptors=world.receiver.free_receptors,
                max_receptors=world.receiver.max_receptors,
            )

    def reset(self, seed: int | None = None) -> None:
        """Rebuild the world from settings, optionally with a new seed."""
        settings = self._settings
        if seed is not None:
            base = settings if settings is not None else SimulationSettings()
            settings = base.model_copy(update={"seed": seed})
        with self._lock:
            self._world = create_world(settings)
            self._last_snapshot = None
            self._latest_frame = None

    def start(self) -> None:
        """Start the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._simulation_loop, daemon=True)
        self._thread.start()
        logger.info("Simulation thread started")

    def stop(self) -> None:
        """Stop the background simulation thread."""
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        if hasattr(self, "_thread"):
            self._thread.join(timeout=2.0)
        logger.info("Simulation thread stopped")

    def _simulation_loop(self) -> None:
        """Background loop ticking at ~60 ticks/second times the speed multiplier."""
        target_fps = 60.0
        while self._running and not self._stop_event.is_set():
            if not self.paused:
                try:
                    self.tick()
                except Exception:
                    logger.exception("Simulation tick failed; pausing")
                    self.paused = True

            effective_speed = self.speed if not self.paused else 1.0
            self._stop_event.wait(timeout=1.0 / (target_fps * effective_speed))


_sim_state: SimulationState | None = None


def get_sim_state() -> SimulationState:
    """Get or create the global simulation state."""
    global _sim_state
    if _sim_state is None:
        _sim_state = SimulationState(get_settings())
    return _sim_state


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager: start/stop simulation thread."""
    sim = get_sim_state()
    sim.start()
    yield
    sim.stop()


app = FastAPI(
    title="Chemotaxis",
    description="Run-and-tumble particle simulation with a bounded receptor pool",
    version=__version__,
    lifespan=lifespan,
)


class WorldStateResponse(BaseModel):
    """Response model for world state summary."""

    tick: int = Field(description="Ticks completed")
    paused: bool = Field(description="Whether simulation is paused")
    speed: float = Field(description="Simulation speed multiplier")
    live_count: int = Field(description="Live information particles")
    field_count: int = Field(description="Chemotactic particles")
    bound_count: int = Field(description="Occupied receptors")
    free_receptors: int = Field(description="Free receptors")
    max_receptors: int = Field(description="Receptor pool capacity")


class SnapshotResponse(BaseModel):
    """Response model for a tick snapshot."""

    tick: int = Field(description="Ticks completed")
    bound_count: int = Field(description="Occupied receptors")
    live_count: int = Field(description="Live information particles")
    free_receptors: int = Field(description="Free receptors")
    transmitted: int = Field(description="Particles emitted during the tick")
    terminated: int = Field(description="Particles dropped during the tick")


class StepRequest(BaseModel):
    """Request model for synchronous stepping."""

    ticks: int = Field(default=1, ge=1, le=MAX_STEP_TICKS, description="Ticks to run")


class ControlCommandResponse(BaseModel):
    """Response for control commands."""

    success: bool = Field(description="Whether command succeeded")
    message: str = Field(description="Status message")


def _snapshot_response(snapshot: TickSnapshot) -> SnapshotResponse:
    return SnapshotResponse(
        tick=snapshot.tick,
        bound_count=snapshot.bound_count,
        live_count=snapshot.live_count,
        free_receptors=snapshot.free_receptors,
        transmitted=snapshot.transmitted,
        terminated=snapshot.terminated,
    )


@app.get("/api/world", response_model=WorldStateResponse, tags=["world"])
async def get_world() -> WorldStateResponse:
    """Get current world state summary."""
    return get_sim_state().summary()


@app.get("/api/frame", tags=["world"])
async def get_frame() -> dict[str, Any]:
    """Get the current frame (projected on demand if none is cached)."""
    return frame_to_dict(get_sim_state().frame())


@app.post("/api/world/step", response_model=SnapshotResponse, tags=["world"])
async def step_world(request: StepRequest) -> SnapshotResponse:
    """Run a number of ticks synchronously and return the last snapshot."""
    sim = get_sim_state()
    try:
        snapshot = await asyncio.to_thread(sim.step, request.ticks)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return _snapshot_response(snapshot)


@app.post("/api/world/reset", response_model=ControlCommandResponse, tags=["world"])
async def reset_world(seed: int | None = None) -> ControlCommandResponse:
    """Reset world to initial state."""
    get_sim_state().reset(seed)
    logger.info("World reset to initial state (seed=%s)", seed)
    return ControlCommandResponse(success=True, message="World reset to initial state")


@app.post("/api/world/pause", response_model=ControlCommandResponse, tags=["world"])
async def pause_simulation() -> ControlCommandResponse:
    """Pause the simulation."""
    get_sim_state().paused = True
    return ControlCommandResponse(success=True, message="Simulation paused")


@app.post("/api/world/play", response_model=ControlCommandResponse, tags=["world"])
async def play_simulation() -> ControlCommandResponse:
    """Resume the simulation."""
    get_sim_state().paused = False
    return ControlCommandResponse(success=True, message="Simulation playing")


@app.post("/api/world/speed", response_model=ControlCommandResponse, tags=["world"])
async def set_speed(speed: float = 1.0) -> ControlCommandResponse:
    """Set simulation speed multiplier (clamped to 0.1-10.0)."""
    sim = get_sim_state()
    sim.speed = speed
    return ControlCommandResponse(success=True, message=f"Speed set to {sim.speed}")


class ControlCommand(StrEnum):
    """Valid control commands."""

    PLAY = "play"
    PAUSE = "pause"
    SET_SPEED = "set_speed"
    STEP = "step"
    RESET = "reset"


def handle_control_command(sim: SimulationState, data: dict[str, Any]) -> dict[str, Any]:
    """Apply one control message and build the reply."""
    cmd_type = str(data.get("type", "")).lower()

    if cmd_type == ControlCommand.PLAY:
        sim.paused = False
        return {"success": True, "message": "Simulation playing"}
    if cmd_type == ControlCommand.PAUSE:
        sim.paused = True
        return {"success": True, "message": "Simulation paused"}
    if cmd_type == ControlCommand.SET_SPEED:
        try:
            sim.speed = float(data.get("speed", 1.0))
        except (TypeError, ValueError):
            return {"success": False, "message": "Invalid speed value"}
        return {"success": True, "message": f"Speed set to {sim.speed}"}
    if cmd_type == ControlCommand.STEP:
        try:
            snapshot = sim.step(int(data.get("ticks", 1)))
        except (TypeError, ValueError) as e:
            return {"success": False, "message": str(e)}
        return {"success": True, "message": f"Stepped to tick {snapshot.tick}"}
    if cmd_type == ControlCommand.RESET:
        sim.reset(data.get("seed"))
        return {"success": True, "message": "World reset"}
    return {"success": False, "message": f"Unknown command: {cmd_type}"}


@app.websocket("/ws/frames")
async def websocket_frames(websocket: WebSocket) -> None:
    """Stream frames at ~30 FPS; sends {"tick": -1} until a frame exists."""
    await websocket.accept()
    sim = get_sim_state()
    interval = 1.0 / 30.0
    try:
        while True:
            frame = sim.latest_frame
            await websocket.send_json(frame_to_dict(frame) if frame is not None else {"tick": -1})
            await asyncio.sleep(interval)
    except WebSocketDisconnect:
        logger.info("Frame client disconnected")
    except Exception as e:
        logger.error("Frame streaming error: %s", str(e))


@app.websocket("/ws/control")
async def websocket_control(websocket: WebSocket) -> None:
    """Receive control commands, one JSON object per message."""
    await websocket.accept()
    sim = get_sim_state()
    try:
        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                await websocket.send_json({"success": False, "message": "Expected a JSON object"})
                continue
            reply = await asyncio.to_thread(handle_control_command, sim, data)
            await websocket.send_json(reply)
    except WebSocketDisconnect:
        logger.info("Control client disconnected")
    except Exception as e:
        logger.error("Control WebSocket error: %s", str(e))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
