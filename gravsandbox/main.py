"""
HTTP front end for a single live Simulation. A render/input client polls
``/api/state`` and drives time forward with ``/api/step`` once per frame.
"""

import logging
import os
import threading
from contextlib import contextmanager
from typing import Iterator, List, Literal, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import SimulationConfig
from .constants import DEFAULT_TIME_SCALE, DRAG_VELOCITY_SCALE, MAX_LAUNCH_SPEED
from .diagnostics import summary
from .errors import SimulationError
from .simulation import MergeEvent, Simulation
from .vector import Vector3

logger = logging.getLogger(__name__)


def launch_velocity(start: Vector3, end: Vector3) -> Vector3:
    """
    Convert a drag gesture into an initial velocity, scaled down and capped
    at MAX_LAUNCH_SPEED.
    """
    velocity = end.sub(start).scale(DRAG_VELOCITY_SCALE)
    speed = velocity.mag
    if speed > MAX_LAUNCH_SPEED:
        velocity = velocity.scale(MAX_LAUNCH_SPEED / speed)
    return velocity


class AddBodyRequest(BaseModel):
    type: str
    position: List[float] = Field(min_length=1, max_length=3)
    velocity: Optional[List[float]] = Field(default=None, min_length=1, max_length=3)


class LaunchRequest(BaseModel):
    type: str
    start: List[float] = Field(min_length=1, max_length=3)
    end: List[float] = Field(min_length=1, max_length=3)


class StepRequest(BaseModel):
    frameDelta: float = Field(ge=0.0)
    timeScale: float = Field(default=DEFAULT_TIME_SCALE, ge=0.0)


class SettingsRequest(BaseModel):
    G: Optional[float] = None
    maxTrailLength: Optional[int] = Field(default=None, ge=0)
    paused: Optional[bool] = None


class BodyState(BaseModel):
    id: int
    type: Literal["star", "planet", "moon"]
    mass: float
    radius: float
    position: List[float]
    velocity: List[float]
    trail: List[List[float]]
    age: int
    color: str
    glow: str
    trailColor: str


class SimulationState(BaseModel):
    bodies: List[BodyState]
    elapsed: float
    paused: bool
    G: float
    softening: float
    substeps: int
    maxTrailLength: int


class Merge(BaseModel):
    survivorId: int
    absorbedId: int
    mass: float
    position: List[float]
    promoted: bool


class StepResponse(BaseModel):
    state: SimulationState
    merges: List[Merge]


class Diagnostics(BaseModel):
    bodyCount: int
    totalMass: float
    centerOfMass: List[float]
    momentum: List[float]
    kineticEnergy: float
    potentialEnergy: float
    totalEnergy: float


def _merge_payload(event: MergeEvent) -> dict:
    return {
        "survivorId": event.survivor_id,
        "absorbedId": event.absorbed_id,
        "mass": event.mass,
        "position": event.position.to_list(),
        "promoted": event.promoted,
    }


def _to_vector(values: List[float]) -> Vector3:
    try:
        return Vector3.from_iterable(values)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def create_app(config: Optional[SimulationConfig] = None) -> FastAPI:
    app = FastAPI(title="gravsandbox")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=os.getenv("GRAVSANDBOX_CORS_ORIGINS", "http://localhost:5173").split(","),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.simulation = Simulation(config or SimulationConfig.from_env())
    # Plain def handlers run on a threadpool; the engine expects one caller at a time.
    app.state.lock = threading.Lock()

    @contextmanager
    def sim(request: Request) -> Iterator[Simulation]:
        with request.app.state.lock:
            yield request.app.state.simulation

    @app.get("/api/state", response_model=SimulationState)
    def get_state(request: Request):
        with sim(request) as simulation:
            return simulation.snapshot()

    @app.post("/api/bodies", response_model=BodyState)
    def add_body(req: AddBodyRequest, request: Request):
        position = _to_vector(req.position)
        velocity = _to_vector(req.velocity) if req.velocity is not None else None
        try:
            with sim(request) as simulation:
                return simulation.add_body(req.type, position, velocity).to_dict()
        except SimulationError as exc:
            logger.warning("Rejected body: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/api/launch", response_model=BodyState)
    def launch(req: LaunchRequest, request: Request):
        start = _to_vector(req.start)
        velocity = launch_velocity(start, _to_vector(req.end))
        try:
            with sim(request) as simulation:
                return simulation.add_body(req.type, start, velocity).to_dict()
        except SimulationError as exc:
            logger.warning("Rejected launch: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/api/step", response_model=StepResponse)
    def step(req: StepRequest, request: Request):
        with sim(request) as simulation:
            merges = simulation.step(req.frameDelta, req.timeScale)
            return {
                "state": simulation.snapshot(),
                "merges": [_merge_payload(m) for m in merges],
            }

    @app.post("/api/clear", response_model=SimulationState)
    def clear(request: Request):
        with sim(request) as simulation:
            simulation.clear()
            return simulation.snapshot()

    @app.post("/api/demo", response_model=SimulationState)
    def demo(request: Request):
        with sim(request) as simulation:
            simulation.create_demo_scene()
            return simulation.snapshot()

    @app.patch("/api/settings", response_model=SimulationState)
    def update_settings(req: SettingsRequest, request: Request):
        with sim(request) as simulation:
            if req.G is not None:
                simulation.G = req.G
            if req.maxTrailLength is not None:
                simulation.max_trail_length = req.maxTrailLength
            if req.paused is not None:
                simulation.paused = req.paused
            return simulation.snapshot()

    @app.get("/api/orbital-speed")
    def orbital_speed(
        request: Request,
        centralMass: float = Query(gt=0.0),
        distance: float = Query(gt=0.0),
    ):
        with sim(request) as simulation:
            return {"speed": simulation.orbital_speed(centralMass, distance)}

    @app.get("/api/diagnostics", response_model=Diagnostics)
    def diagnostics(request: Request):
        with sim(request) as simulation:
            return summary(simulation.bodies, simulation.G, simulation.softening)

    return app
