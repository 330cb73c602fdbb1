"""
Numerical physics for the undamped simple pendulum.

This module provides:
- The derivative function of the pendulum ODE
- A classical RK4 step for an arbitrary state vector
- ``step``: one fixed-size integration step on an AngularState
- Energy and bob position helpers for display
"""

from __future__ import annotations

import math
from typing import Callable, List, Sequence

from pendulum_demo.models import AngularState, PhysicsParameters, Vector2D

State = List[float]


def pendulum_derivatives(state: Sequence[float], params: PhysicsParameters) -> State:
    """Return derivatives [dtheta, domega] for a simple pendulum.

    Angles are measured from the vertical (downwards is 0 rad). No damping.
    """
    theta, omega = state[:2]
    return [omega, angular_acceleration(theta, params)]


def angular_acceleration(theta: float, params: PhysicsParameters) -> float:
    return -(params.gravity / params.length) * math.sin(theta)


def rk4_step(
    state: Sequence[float],
    dt: float,
    params: PhysicsParameters,
    deriv_func: Callable[[Sequence[float], PhysicsParameters], State],
) -> State:
    """Perform one classical RK4 step for arbitrary state dimension.

    The four slopes are sampled at the start, twice at the midpoint and at the
    end of the step, then combined with weights 1-2-2-1.
    """
    y0 = list(state)

    def shifted(slope: State, h: float) -> State:
        return [y + h * k for y, k in zip(y0, slope)]

    k1 = deriv_func(y0, params)
    k2 = deriv_func(shifted(k1, 0.5 * dt), params)
    k3 = deriv_func(shifted(k2, 0.5 * dt), params)
    k4 = deriv_func(shifted(k3, dt), params)
    return [
        y + dt / 6.0 * (a + 2.0 * b + 2.0 * c + d)
        for y, a, b, c, d in zip(y0, k1, k2, k3, k4)
    ]


def step(state: AngularState, params: PhysicsParameters, dt: float) -> AngularState:
    """Advance ``state`` by exactly ``dt`` seconds.

    ``alpha`` of the result matches the new ``theta``; ``time`` advances by ``dt``.
    """
    theta, omega = rk4_step([state.theta, state.omega], dt, params, pendulum_derivatives)
    return AngularState(
        theta=theta,
        omega=omega,
        alpha=angular_acceleration(theta, params),
        time=state.time + dt,
    )


def total_energy(state: AngularState, params: PhysicsParameters) -> float:
    """Total mechanical energy (kinetic + potential).

    Reference height is the pivot, so the bob at rest at the bottom has -m*g*L.
    """
    m = params.mass
    l = params.length
    ke = 0.5 * m * (l * state.omega) ** 2
    pe = -m * params.gravity * l * math.cos(state.theta)
    return ke + pe


def bob_position(state: AngularState, params: PhysicsParameters) -> Vector2D:
    """Bob position in meters relative to the pivot at (0, 0), y downwards."""
    l = params.length
    return Vector2D(l * math.sin(state.theta), l * math.cos(state.theta))
