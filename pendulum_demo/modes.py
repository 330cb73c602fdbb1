"""Stopping conditions for the PAUSE_AT_* modes.

Both checks are inclusive on the post-step side only: the pre-step value must be
strictly signed, the post-step value may land exactly on zero. A snapped state
therefore starts the next step from zero and cannot trigger again.
"""

from __future__ import annotations

import dataclasses
from typing import Optional

from pendulum_demo.models import AngularState, SimulationMode

# omega changes sign at both extremes; only look for the turning point on the right
TOP_THRESHOLD = 0.1  # rad


def crossed_zero(before: float, after: float) -> bool:
    return (before > 0 and after <= 0) or (before < 0 and after >= 0)


def check_stop(
    mode: SimulationMode, before: AngularState, after: AngularState
) -> Optional[AngularState]:
    """Return the snapped post-step state if ``mode``'s condition fired, else None."""
    if mode is SimulationMode.PAUSE_AT_BOTTOM:
        if crossed_zero(before.theta, after.theta):
            return dataclasses.replace(after, theta=0.0)
    elif mode is SimulationMode.PAUSE_AT_TOP:
        if before.theta > TOP_THRESHOLD and crossed_zero(before.omega, after.omega):
            return dataclasses.replace(after, omega=0.0)
    return None
