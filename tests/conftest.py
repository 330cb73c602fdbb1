"""Shared fixtures for pendulum_demo tests."""

from typing import Callable

import pytest

from pendulum_demo.models import PhysicsParameters
from pendulum_demo.sim_session import SimulationLoop


@pytest.fixture
def params() -> PhysicsParameters:
    """Default demo configuration: 2 kg bob on a 2 m string released at 30 degrees."""
    return PhysicsParameters(mass=2.0, length=2.0, gravity=9.8, initial_angle=30.0)


@pytest.fixture
def loop(params: PhysicsParameters) -> SimulationLoop:
    return SimulationLoop(params)


@pytest.fixture
def drive() -> Callable[[SimulationLoop, float], None]:
    """Feed a loop with 60 Hz frames for ``seconds`` of wall-clock time, starting at t=0."""

    def _drive(sim: SimulationLoop, seconds: float, fps: float = 60.0) -> None:
        n = int(round(seconds * fps))
        for i in range(n + 1):
            sim.on_frame(i / fps)

    return _drive
