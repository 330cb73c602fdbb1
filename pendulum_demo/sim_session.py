from __future__ import annotations

import logging
import math
from typing import Optional

from pendulum_demo.config import DT, MAX_FRAME_DELTA
from pendulum_demo.dynamics import Readout, derive
from pendulum_demo.models import AngularState, PhysicsParameters, SimulationMode
from pendulum_demo.modes import check_stop
from pendulum_demo.physics import step, total_energy

logger = logging.getLogger(__name__)


class SimulationLoop:
    """Fixed-step pendulum simulation driven by wall-clock frame timestamps.

    Irregular frame deltas are collected in an accumulator and drained in steps of
    exactly ``dt``. After each step the active mode's stopping condition is checked;
    when it fires the loop snaps the state, switches to PAUSED and drops whatever
    time is left in the accumulator.
    """

    def __init__(
        self,
        params: Optional[PhysicsParameters] = None,
        dt: float = DT,
        max_frame_delta: float = MAX_FRAME_DELTA,
    ) -> None:
        if not math.isfinite(dt) or dt <= 0:
            raise ValueError(f"dt must be positive and finite, got {dt!r}")
        if not math.isfinite(max_frame_delta) or max_frame_delta < 0:
            raise ValueError(f"max_frame_delta must be non-negative and finite, got {max_frame_delta!r}")
        self.dt = float(dt)
        self.max_frame_delta = float(max_frame_delta)
        self._params = params if params is not None else PhysicsParameters()
        self._mode = SimulationMode.PAUSED
        self._state = self._params.initial_state()
        self._last_timestamp: Optional[float] = None
        self._accumulator = 0.0
        self._energy_ref = total_energy(self._state, self._params)

    @property
    def state(self) -> AngularState:
        return self._state

    @property
    def params(self) -> PhysicsParameters:
        return self._params

    @property
    def mode(self) -> SimulationMode:
        return self._mode

    @property
    def accumulator(self) -> float:
        return self._accumulator

    @property
    def energy_drift(self) -> float:
        """Relative drift of total energy since the last reset or parameter change."""
        e = total_energy(self._state, self._params)
        return abs(e - self._energy_ref) / max(1e-9, abs(self._energy_ref))

    def on_frame(self, timestamp: float) -> AngularState:
        """Advance the simulation to wall-clock ``timestamp`` and return the published state."""
        if not math.isfinite(timestamp):
            logger.warning("Ignoring non-finite frame timestamp %r", timestamp)
            return self._state

        if self._last_timestamp is None:
            self._last_timestamp = timestamp
            return self._state

        delta = min(max(timestamp - self._last_timestamp, 0.0), self.max_frame_delta)
        self._last_timestamp = timestamp
        self._accumulator += delta

        if self._mode is SimulationMode.PAUSED:
            self._accumulator = 0.0
            return self._state

        state = self._state
        while self._accumulator >= self.dt:
            before = state
            state = step(before, self._params, self.dt)
            self._accumulator -= self.dt

            snapped = check_stop(self._mode, before, state)
            if snapped is not None:
                logger.info(
                    "%s fired at t=%.3f s (theta=%.4f, omega=%.4f)",
                    self._mode.value,
                    snapped.time,
                    snapped.theta,
                    snapped.omega,
                )
                state = snapped
                self._mode = SimulationMode.PAUSED
                self._accumulator = 0.0
                break

        self._state = state
        return state

    def set_mode(self, mode: SimulationMode) -> None:
        """Switch mode on external command; takes effect on the next frame."""
        mode = SimulationMode(mode)
        if mode is self._mode:
            return
        logger.info("Mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode

    def update_params(self, params: PhysicsParameters) -> None:
        """Replace the parameter snapshot without touching the state."""
        if params == self._params:
            return
        logger.debug("Parameters updated: %s", params)
        self._params = params
        self._energy_ref = total_energy(self._state, self._params)

    def reset(self, params: Optional[PhysicsParameters] = None) -> None:
        if params is not None:
            self._params = params
        self._state = self._params.initial_state()
        self._mode = SimulationMode.PAUSED
        self._last_timestamp = None
        self._accumulator = 0.0
        self._energy_ref = total_energy(self._state, self._params)
        logger.info(
            "Reset to %.1f deg (m=%.2f kg, L=%.2f m)",
            self._params.initial_angle,
            self._params.mass,
            self._params.length,
        )

    def readout(self) -> Readout:
        return derive(self._state, self._params)
