"""Value types shared by the integrator, the loop and the display layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum

from pendulum_demo.config import DEFAULT_LENGTH, DEFAULT_MASS, GRAVITY, MAX_ANGLE_DEG


@dataclass(frozen=True)
class AngularState:
    """Instantaneous state of the pendulum.

    ``theta`` is measured from the vertical (downwards is 0 rad, positive to the
    right). ``alpha`` is recomputed from ``theta`` after every step and is not
    part of the integrated vector.
    """

    theta: float
    omega: float
    alpha: float = 0.0
    time: float = 0.0


@dataclass(frozen=True)
class PhysicsParameters:
    """Snapshot of the user-editable physical parameters (SI units, angle in degrees)."""

    mass: float = DEFAULT_MASS
    length: float = DEFAULT_LENGTH
    gravity: float = GRAVITY
    initial_angle: float = MAX_ANGLE_DEG

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite, got {value!r}")
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if self.length <= 0:
            raise ValueError(f"length must be positive, got {self.length}")
        if self.gravity <= 0:
            raise ValueError(f"gravity must be positive, got {self.gravity}")

    @property
    def initial_theta(self) -> float:
        return math.radians(self.initial_angle)

    def initial_state(self) -> AngularState:
        return AngularState(theta=self.initial_theta, omega=0.0, alpha=0.0, time=0.0)


class SimulationMode(str, Enum):
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    PAUSE_AT_BOTTOM = "PAUSE_AT_BOTTOM"
    PAUSE_AT_TOP = "PAUSE_AT_TOP"

    @property
    def is_active(self) -> bool:
        """True for every mode in which the loop integrates."""
        return self is not SimulationMode.PAUSED


@dataclass(frozen=True)
class Vector2D:
    """2D vector in the drawing frame: x to the right, y downwards, pivot at the origin."""

    x: float
    y: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vector2D":
        return Vector2D(self.x * k, self.y * k)

    __rmul__ = __mul__

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def norm(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass
class VectorConfig:
    show_forces: bool = False
    show_velocity: bool = False
    show_acceleration: bool = False
