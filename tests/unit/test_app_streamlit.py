import pytest

from pendulum_demo.app_streamlit import _build_figure
from pendulum_demo.models import SimulationMode, VectorConfig
from pendulum_demo.physics import bob_position
from pendulum_demo.sim_session import SimulationLoop


class TestBuildFigure:
    def test_draws_bob_at_current_position(self, loop: SimulationLoop) -> None:
        fig = _build_figure(loop)
        bob = bob_position(loop.state, loop.params)
        bob_trace = fig.data[3]
        assert bob_trace.x[0] == pytest.approx(bob.x)
        assert bob_trace.y[0] == pytest.approx(-bob.y)

    def test_no_arrows_when_vectors_hidden(self, loop: SimulationLoop) -> None:
        fig = _build_figure(loop, VectorConfig())
        assert len(fig.layout.annotations) == 0

    def test_force_arrows(self, loop: SimulationLoop) -> None:
        fig = _build_figure(loop, VectorConfig(show_forces=True))
        labels = {a.text for a in fig.layout.annotations if a.text}
        assert {"<b>G</b>", "<b>T</b>", "<b>Gₙ</b>", "<b>Gₜ</b>"} <= labels

    def test_zero_velocity_is_not_drawn(self, loop: SimulationLoop) -> None:
        fig = _build_figure(loop, VectorConfig(show_velocity=True))
        assert len(fig.layout.annotations) == 0

    def test_velocity_drawn_while_swinging(self, loop: SimulationLoop) -> None:
        loop.set_mode(SimulationMode.RUNNING)
        loop.on_frame(0.0)
        for i in range(1, 20):
            loop.on_frame(i * 0.05)
        fig = _build_figure(loop, VectorConfig(show_velocity=True))
        labels = {a.text for a in fig.layout.annotations if a.text}
        assert labels == {"<b>v</b>"}
