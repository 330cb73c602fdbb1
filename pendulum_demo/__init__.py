"""Instructional simple-pendulum simulator: RK4 core, pause modes and derived quantities."""

import logging
import sys

from pendulum_demo.dynamics import Readout, derive, exact_period, small_angle_period, vectors
from pendulum_demo.models import AngularState, PhysicsParameters, SimulationMode, Vector2D, VectorConfig
from pendulum_demo.physics import step
from pendulum_demo.sim_session import SimulationLoop

# Configure library logger with default handler
_logger = logging.getLogger("pendulum_demo")
if not _logger.handlers:
    _handler = logging.StreamHandler(sys.stdout)
    _logger.addHandler(_handler)
    _logger.setLevel(logging.INFO)

__all__ = [
    "AngularState",
    "PhysicsParameters",
    "Readout",
    "SimulationLoop",
    "SimulationMode",
    "Vector2D",
    "VectorConfig",
    "derive",
    "exact_period",
    "small_angle_period",
    "step",
    "vectors",
]
