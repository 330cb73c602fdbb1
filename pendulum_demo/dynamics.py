"""
Kinematic and dynamic quantities derived from an AngularState.

Everything here is a pure function of ``(state, params)``. Vectors live in the
drawing frame (x right, y down, pivot at the origin) and carry physical units;
scaling them into arrows is the renderer's job.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from pendulum_demo.models import AngularState, PhysicsParameters, Vector2D
from pendulum_demo.physics import total_energy

logger = logging.getLogger(__name__)

AGM_MAX_ITER = 10
AGM_TOL = 1e-9


def speed(state: AngularState, params: PhysicsParameters) -> float:
    return abs(state.omega) * params.length


def tangential_acceleration(state: AngularState, params: PhysicsParameters) -> float:
    return abs(params.gravity * math.sin(state.theta))


def radial_acceleration(state: AngularState, params: PhysicsParameters) -> float:
    """Centripetal acceleration L * omega^2."""
    return params.length * state.omega * state.omega


def total_acceleration(state: AngularState, params: PhysicsParameters) -> float:
    return math.hypot(tangential_acceleration(state, params), radial_acceleration(state, params))


def tension(state: AngularState, params: PhysicsParameters) -> float:
    return params.mass * (params.gravity * math.cos(state.theta) + radial_acceleration(state, params))


def gravity_force(params: PhysicsParameters) -> float:
    return params.mass * params.gravity


def tangential_unit(theta: float) -> Vector2D:
    """Unit vector perpendicular to the string, pointing towards increasing theta."""
    return Vector2D(math.cos(theta), -math.sin(theta))


def radial_unit(theta: float) -> Vector2D:
    """Unit vector along the string, from the bob towards the pivot."""
    return Vector2D(-math.sin(theta), -math.cos(theta))


def gravity_components(state: AngularState, params: PhysicsParameters) -> Tuple[Vector2D, Vector2D]:
    """Split the weight into (G_n, G_t).

    G_n points radially outward with magnitude m*g*cos(theta); G_t is what is left
    of the weight after removing G_n.
    """
    g_vec = Vector2D(0.0, gravity_force(params))
    g_n = radial_unit(state.theta) * (-gravity_force(params) * math.cos(state.theta))
    return g_n, g_vec - g_n


def small_angle_period(length: float, gravity: float) -> float:
    return 2.0 * math.pi * math.sqrt(length / gravity)


def exact_period(length: float, gravity: float, amplitude_deg: float) -> float:
    """Period of the pendulum at a finite amplitude.

    Uses the arithmetic-geometric mean: T = 2*pi*sqrt(L/g) / AGM(1, cos(theta0/2)),
    which is the closed form of the complete elliptic integral K(sin(theta0/2)).
    """
    t0 = small_angle_period(length, gravity)
    if amplitude_deg == 0:
        return t0

    theta0 = math.radians(amplitude_deg)
    a = 1.0
    b = math.cos(theta0 / 2.0)
    for _ in range(AGM_MAX_ITER):
        if abs(a - b) < AGM_TOL:
            break
        a, b = 0.5 * (a + b), math.sqrt(a * b)
    if abs(a - b) >= AGM_TOL:
        logger.debug("AGM did not converge within %d iterations for amplitude %.3f deg", AGM_MAX_ITER, amplitude_deg)
    return t0 / a


@dataclass(frozen=True)
class ForceDiagram:
    velocity: Vector2D
    accel_tangential: Vector2D
    accel_radial: Vector2D
    accel_total: Vector2D
    tension: Vector2D
    gravity: Vector2D
    gravity_radial: Vector2D
    gravity_tangential: Vector2D


def vectors(state: AngularState, params: PhysicsParameters) -> ForceDiagram:
    """All arrows of the force/kinematics diagram, anchored at the bob."""
    tan = tangential_unit(state.theta)
    rad = radial_unit(state.theta)

    a_t = tan * (-params.gravity * math.sin(state.theta))
    a_n = rad * radial_acceleration(state, params)
    g_n, g_t = gravity_components(state, params)
    return ForceDiagram(
        velocity=tan * (state.omega * params.length),
        accel_tangential=a_t,
        accel_radial=a_n,
        accel_total=a_t + a_n,
        tension=rad * tension(state, params),
        gravity=Vector2D(0.0, gravity_force(params)),
        gravity_radial=g_n,
        gravity_tangential=g_t,
    )


@dataclass(frozen=True)
class Readout:
    """Scalar quantities shown in the data panel."""

    angle_deg: float
    speed: float
    tangential_acceleration: float
    radial_acceleration: float
    total_acceleration: float
    tension: float
    gravity_force: float
    period: float
    small_angle_period: float
    energy: float


def derive(state: AngularState, params: PhysicsParameters) -> Readout:
    return Readout(
        angle_deg=math.degrees(state.theta),
        speed=speed(state, params),
        tangential_acceleration=tangential_acceleration(state, params),
        radial_acceleration=radial_acceleration(state, params),
        total_acceleration=total_acceleration(state, params),
        tension=tension(state, params),
        gravity_force=gravity_force(params),
        period=exact_period(params.length, params.gravity, params.initial_angle),
        small_angle_period=small_angle_period(params.length, params.gravity),
        energy=total_energy(state, params),
    )
