import math

import pytest

from pendulum_demo.dynamics import exact_period
from pendulum_demo.models import AngularState, PhysicsParameters
from pendulum_demo.physics import (
    angular_acceleration,
    bob_position,
    pendulum_derivatives,
    rk4_step,
    step,
    total_energy,
)


class TestDerivatives:
    def test_pendulum_ode(self, params: PhysicsParameters) -> None:
        d = pendulum_derivatives([0.5, 1.5], params)
        assert d[0] == 1.5
        assert d[1] == pytest.approx(-(9.8 / 2.0) * math.sin(0.5))

    def test_rk4_step_exact_for_linear_growth(self, params: PhysicsParameters) -> None:
        # y' = 1 is integrated exactly
        out = rk4_step([0.0], 0.25, params, lambda s, p: [1.0])
        assert out == [pytest.approx(0.25)]

    def test_rk4_step_matches_fourth_order_taylor_series(self, params: PhysicsParameters) -> None:
        # for y' = y one RK4 step reproduces exp(h) up to the h**4 term
        h = 0.1
        out = rk4_step([1.0, 2.0], h, params, lambda s, p: list(s))
        taylor = 1.0 + h + h**2 / 2 + h**3 / 6 + h**4 / 24
        assert out[0] == pytest.approx(taylor, rel=1e-12)
        assert out[1] == pytest.approx(2.0 * taylor, rel=1e-12)


class TestStep:
    def test_advances_time_and_recomputes_alpha(self, params: PhysicsParameters) -> None:
        s0 = params.initial_state()
        s1 = step(s0, params, 0.016)
        assert s1.time == pytest.approx(0.016)
        assert s1.alpha == angular_acceleration(s1.theta, params)
        assert s1.theta < s0.theta
        assert s1.omega < 0.0

    def test_does_not_mutate_input(self, params: PhysicsParameters) -> None:
        s0 = params.initial_state()
        step(s0, params, 0.016)
        assert s0 == params.initial_state()

    def test_is_deterministic(self, params: PhysicsParameters) -> None:
        s0 = AngularState(theta=0.2, omega=-0.7)
        assert step(s0, params, 0.016) == step(s0, params, 0.016)

    def test_rest_at_bottom_stays_at_rest(self, params: PhysicsParameters) -> None:
        s = AngularState(theta=0.0, omega=0.0)
        for _ in range(100):
            s = step(s, params, 0.016)
        assert s.theta == 0.0
        assert s.omega == 0.0
        assert s.time == pytest.approx(1.6)

    def test_small_amplitude_matches_harmonic_solution(self, params: PhysicsParameters) -> None:
        theta0 = 0.01
        s = AngularState(theta=theta0, omega=0.0)
        dt = 0.001
        for _ in range(1000):
            s = step(s, params, dt)
        w0 = math.sqrt(params.gravity / params.length)
        assert s.theta == pytest.approx(theta0 * math.cos(w0 * s.time), abs=1e-6)

    def test_returns_to_release_point_after_one_exact_period(self, params: PhysicsParameters) -> None:
        s0 = params.initial_state()
        period = exact_period(params.length, params.gravity, params.initial_angle)
        n = 2000
        dt = period / n
        s = s0
        for _ in range(n):
            s = step(s, params, dt)
        assert s.theta == pytest.approx(s0.theta, abs=1e-6)
        assert s.omega == pytest.approx(0.0, abs=1e-6)
        assert s.time == pytest.approx(period)

    def test_conserves_energy_at_demo_step_size(self, params: PhysicsParameters) -> None:
        s = params.initial_state()
        e0 = total_energy(s, params)
        for _ in range(1000):
            s = step(s, params, 0.016)
        assert abs(total_energy(s, params) - e0) / abs(e0) < 1e-5


class TestHelpers:
    def test_total_energy_at_rest_on_bottom(self, params: PhysicsParameters) -> None:
        e = total_energy(AngularState(theta=0.0, omega=0.0), params)
        assert e == pytest.approx(-params.mass * params.gravity * params.length)

    def test_bob_position(self, params: PhysicsParameters) -> None:
        pos = bob_position(AngularState(theta=math.pi / 2, omega=0.0), params)
        assert pos.x == pytest.approx(2.0)
        assert pos.y == pytest.approx(0.0, abs=1e-12)
