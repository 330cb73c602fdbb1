from __future__ import annotations

import logging
import time
from typing import Optional

import plotly.graph_objects as go
import streamlit as st

from pendulum_demo.config import (
    ANGLE_RANGE,
    COLORS,
    FRAME_INTERVAL,
    GRAVITY_RANGE,
    LENGTH_RANGE,
    MASS_RANGE,
    SCALE_ACCEL,
    SCALE_FORCE,
    SCALE_VELOCITY,
)
from pendulum_demo.dynamics import vectors
from pendulum_demo.models import PhysicsParameters, SimulationMode, Vector2D, VectorConfig
from pendulum_demo.physics import bob_position
from pendulum_demo.sim_session import SimulationLoop

logger = logging.getLogger(__name__)

# arrows shorter than this (in metres on screen) are not drawn
MIN_ARROW = 0.01


def _ensure_session() -> SimulationLoop:
    if "sim" not in st.session_state:
        st.session_state.sim = SimulationLoop()
    if "vectors" not in st.session_state:
        st.session_state.vectors = VectorConfig()
    return st.session_state.sim


def _slider(label: str, bounds, value: float) -> float:
    lo, hi, step = bounds
    return float(st.sidebar.slider(label, min_value=lo, max_value=hi, value=float(value), step=step))


def _update_params_from_sidebar(sim: SimulationLoop) -> None:
    st.sidebar.header("Modellparameter")
    p = sim.params
    mass = _slider("Masse m (kg)", MASS_RANGE, p.mass)
    length = _slider("Fadenlänge L (m)", LENGTH_RANGE, p.length)
    angle = _slider("Anfangsauslenkung θ₀ (°)", ANGLE_RANGE, p.initial_angle)
    g = _slider("Gravitation g (m/s²)", GRAVITY_RANGE, p.gravity)

    try:
        new_params = PhysicsParameters(mass=mass, length=length, gravity=g, initial_angle=angle)
    except ValueError as exc:
        st.sidebar.error(str(exc))
    else:
        # a new amplitude only makes sense from the release position
        if new_params.initial_angle != p.initial_angle:
            sim.reset(new_params)
        else:
            sim.update_params(new_params)

    st.sidebar.header("Vektoren")
    cfg: VectorConfig = st.session_state.vectors
    cfg.show_forces = st.sidebar.checkbox("Kräfte", value=cfg.show_forces)
    cfg.show_velocity = st.sidebar.checkbox("Geschwindigkeit", value=cfg.show_velocity)
    cfg.show_acceleration = st.sidebar.checkbox("Beschleunigung", value=cfg.show_acceleration)


def _playback_controls(sim: SimulationLoop) -> None:
    col_a, col_b, col_c, col_d = st.columns([1, 1, 1, 1])
    with col_a:
        if sim.mode.is_active:
            if st.button("Pause", type="secondary"):
                sim.set_mode(SimulationMode.PAUSED)
        else:
            if st.button("Start / Weiter", type="primary"):
                sim.set_mode(SimulationMode.RUNNING)
    with col_b:
        if st.button("Halt am Tiefpunkt", disabled=sim.mode is SimulationMode.PAUSE_AT_BOTTOM):
            sim.set_mode(SimulationMode.PAUSE_AT_BOTTOM)
    with col_c:
        if st.button("Halt am Umkehrpunkt (rechts)", disabled=sim.mode is SimulationMode.PAUSE_AT_TOP):
            sim.set_mode(SimulationMode.PAUSE_AT_TOP)
    with col_d:
        if st.button("Reset"):
            sim.reset()


def _add_arrow(
    fig: go.Figure,
    start: Vector2D,
    vec: Vector2D,
    color: str,
    label: str,
    dashed: bool = False,
) -> None:
    if vec.norm() < MIN_ARROW:
        return
    end = start + vec
    # Invert y for plotting (upwards positive)
    if dashed:
        fig.add_trace(go.Scatter(x=[start.x, end.x], y=[-start.y, -end.y], mode="lines", line=dict(color=color, width=3, dash="dash"), hoverinfo="skip", showlegend=False))
        tail = end - vec * (MIN_ARROW / vec.norm())
    else:
        tail = start
    fig.add_annotation(
        x=end.x, y=-end.y, ax=tail.x, ay=-tail.y,
        xref="x", yref="y", axref="x", ayref="y",
        showarrow=True, arrowhead=2, arrowsize=1.2, arrowwidth=3, arrowcolor=color, text="",
    )
    fig.add_annotation(
        x=end.x, y=-end.y, text=f"<b>{label}</b>", showarrow=False,
        xshift=12 if vec.x >= 0 else -12, yshift=-12 if vec.y >= 0 else 12,
        font=dict(color=color, size=14),
    )


def _add_projection(fig: go.Figure, start: Vector2D, a: Vector2D, b: Vector2D) -> None:
    p, q = start + a, start + b
    fig.add_trace(go.Scatter(x=[p.x, q.x], y=[-p.y, -q.y], mode="lines", line=dict(color=COLORS["projection"], width=1, dash="dot"), hoverinfo="skip", showlegend=False))


def _build_figure(sim: SimulationLoop, cfg: Optional[VectorConfig] = None) -> go.Figure:
    cfg = cfg or VectorConfig()
    params = sim.params
    bob = bob_position(sim.state, params)
    diagram = vectors(sim.state, params)
    max_len = max(1.0, params.length)
    pad = max_len * 0.5

    fig = go.Figure()

    # vertical reference
    fig.add_trace(go.Scatter(x=[0.0, 0.0], y=[0.0, -(params.length + 0.4)], mode="lines", line=dict(color=COLORS["reference"], width=2, dash="dash"), hoverinfo="skip", showlegend=False))
    # string
    fig.add_trace(go.Scatter(x=[0.0, bob.x], y=[0.0, -bob.y], mode="lines", line=dict(color=COLORS["string"], width=3), hoverinfo="skip", showlegend=False))
    # pivot
    fig.add_trace(go.Scatter(x=[0.0], y=[0.0], mode="markers", marker=dict(size=10, color=COLORS["pivot"]), hoverinfo="skip", showlegend=False))
    # bob
    fig.add_trace(go.Scatter(x=[bob.x], y=[-bob.y], mode="markers", marker=dict(size=12 * params.mass ** (1.0 / 3.0) + 6, color=COLORS["bob"], line=dict(color=COLORS["bob_edge"], width=2)), hoverinfo="skip", showlegend=False))

    accel_scale = SCALE_ACCEL / params.gravity
    force_scale = SCALE_FORCE / (params.mass * params.gravity)

    if cfg.show_acceleration:
        a_n = diagram.accel_radial * accel_scale
        a_t = diagram.accel_tangential * accel_scale
        a = diagram.accel_total * accel_scale
        _add_projection(fig, bob, a_n, a)
        _add_projection(fig, bob, a_t, a)
        _add_arrow(fig, bob, a_n, COLORS["accel_radial"], "aₙ", dashed=True)
        _add_arrow(fig, bob, a_t, COLORS["accel_tangential"], "aₜ", dashed=True)
        _add_arrow(fig, bob, a, COLORS["accel_total"], "a")

    if cfg.show_velocity:
        _add_arrow(fig, bob, diagram.velocity * SCALE_VELOCITY, COLORS["velocity"], "v")

    if cfg.show_forces:
        g_vec = diagram.gravity * force_scale
        g_n = diagram.gravity_radial * force_scale
        g_t = diagram.gravity_tangential * force_scale
        _add_projection(fig, bob, g_n, g_vec)
        _add_projection(fig, bob, g_t, g_vec)
        _add_arrow(fig, bob, g_n, COLORS["force_gravity_component"], "Gₙ", dashed=True)
        _add_arrow(fig, bob, g_t, COLORS["force_gravity_component"], "Gₜ", dashed=True)
        _add_arrow(fig, bob, g_vec, COLORS["force_gravity"], "G")
        _add_arrow(fig, bob, diagram.tension * force_scale, COLORS["force_tension"], "T")

    fig.update_layout(
        template="plotly_dark",
        margin=dict(l=20, r=20, t=20, b=20),
        xaxis=dict(scaleanchor="y", scaleratio=1.0, range=[-max_len - pad, max_len + pad], showgrid=False, zeroline=False),
        yaxis=dict(range=[-max_len - pad, 0.4], showgrid=False, zeroline=False),
        dragmode=False,
    )
    return fig


def _data_panel(sim: SimulationLoop) -> None:
    r = sim.readout()
    st.subheader("Messwerte")
    st.metric("Auslenkung |θ|", f"{abs(r.angle_deg):.1f} °")
    st.metric("Periode T (exakt)", f"{r.period:.2f} s", delta=f"{r.period - r.small_angle_period:+.3f} s ggü. Kleinwinkel", delta_color="off")

    st.caption("Dynamik")
    st.metric("Gewichtskraft G", f"{r.gravity_force:.2f} N")
    st.metric("Fadenkraft F_T", f"{r.tension:.2f} N")

    st.caption("Kinematik")
    st.metric("Bahngeschwindigkeit v", f"{r.speed:.2f} m/s")
    st.metric("Beschleunigung a", f"{r.total_acceleration:.2f} m/s²")
    st.metric("Tangential aₜ", f"{r.tangential_acceleration:.2f} m/s²")
    st.metric("Radial aₙ", f"{r.radial_acceleration:.2f} m/s²")

    st.caption(f"t = {sim.state.time:.2f} s · ΔE/E = {sim.energy_drift * 100.0:.4f}%")


def main() -> None:
    st.set_page_config(page_title="Fadenpendel", layout="wide")
    sim = _ensure_session()

    st.title("Fadenpendel – Lehrdemo")
    st.caption("RK4 mit festem Zeitschritt, exakte Periode über das arithmetisch-geometrische Mittel")

    _update_params_from_sidebar(sim)

    # Every rerun is a frame, paused or not, so the clock stays anchored and a
    # mode command from the buttons below applies from the next frame on.
    try:
        sim.on_frame(time.monotonic())
    except Exception:
        # on any runtime error, pause to avoid tight loop
        logger.exception("Frame update failed, pausing simulation")
        sim.set_mode(SimulationMode.PAUSED)

    _playback_controls(sim)

    col_plot, col_data = st.columns([3, 1])
    with col_plot:
        fig = _build_figure(sim, st.session_state.vectors)
        st.plotly_chart(fig, use_container_width=True, config={"staticPlot": False, "displayModeBar": False})
    with col_data:
        _data_panel(sim)

    if sim.mode.is_active:
        time.sleep(FRAME_INTERVAL)
        st.rerun()


if __name__ == "__main__":
    main()
