"""
Constants and defaults for the pendulum demonstrator.

Physical defaults, integrator timing, UI slider ranges and the drawing
scales used when vectors are turned into arrows.
"""

from __future__ import annotations

GRAVITY = 9.8  # m/s^2
DT = 0.016  # fixed integration step (s), approx 60 fps
MAX_FRAME_DELTA = 0.1  # ceiling on a single wall-clock frame delta (s)
MAX_ANGLE_DEG = 30.0  # default initial amplitude (deg)

DEFAULT_MASS = 2.0  # kg
DEFAULT_LENGTH = 2.0  # m

# streamlit rerun cadence while the simulation is active
FRAME_INTERVAL = 1.0 / 30.0

# slider ranges: (min, max, step)
MASS_RANGE = (0.1, 5.0, 0.1)
LENGTH_RANGE = (0.5, 4.0, 0.1)
ANGLE_RANGE = (0.0, 90.0, 1.0)
GRAVITY_RANGE = (1.0, 30.0, 0.1)

# Arrow lengths in metres per physical unit. Accelerations are drawn relative
# to g, forces relative to the bob's weight, so arrows stay comparable when
# mass or gravity change.
SCALE_VELOCITY = 0.2  # m per (m/s)
SCALE_ACCEL = 1.5  # m per g
SCALE_FORCE = 0.8  # m per (m*g)

COLORS = {
    "bob": "#38bdf8",
    "bob_edge": "#0ea5e9",
    "string": "#94a3b8",
    "pivot": "#64748b",
    "reference": "#475569",
    "velocity": "#4ade80",
    "accel_total": "#fbbf24",
    "accel_radial": "#f87171",
    "accel_tangential": "#c084fc",
    "force_tension": "#f472b6",
    "force_gravity": "#60a5fa",
    "force_gravity_component": "#94a3b8",
    "projection": "#cbd5e1",
}
