import numpy as np
import pytest

from pycsf.commands import (
    DEFAULT_DT,
    FlowSession,
    Reset,
    ScaleDt,
    SelectCurvatureType,
    Step,
    ToggleRun,
)
from pycsf.curvature import CurvatureType
from pycsf.curve import CurveModel, example_curve
from pycsf.flow import step


def test_step_command_matches_step():
    a = CurveModel(example_curve("ellipse", sections=30))
    b = a.copy()
    session = FlowSession(a, dt=0.01)
    session.dispatch(Step())
    step(b, 0.01)
    assert np.array_equal(a.current_vertices(0), b.current_vertices(0))


def test_toggle_run_and_tick():
    model = CurveModel(example_curve("circle", sections=24))
    session = FlowSession(model)
    assert session.dt == DEFAULT_DT
    assert session.tick() is False
    assert np.array_equal(model.current_vertices(0), model.original_vertices(0))

    session.dispatch(ToggleRun())
    assert session.running
    assert session.tick() is True
    assert not np.array_equal(model.current_vertices(0), model.original_vertices(0))

    session.dispatch(ToggleRun())
    moved = model.current_vertices(0).copy()
    assert session.tick() is False
    assert np.array_equal(model.current_vertices(0), moved)


def test_reset_command():
    model = CurveModel(example_curve("square"))
    session = FlowSession(model, dt=0.05)
    session.dispatch(Step())
    session.dispatch(Step())
    session.dispatch(Reset())
    assert np.array_equal(model.current_vertices(0), model.original_vertices(0))


def test_scale_dt():
    session = FlowSession(CurveModel(example_curve("square")), dt=0.1)
    session.dispatch(ScaleDt(1.2))
    assert session.dt == pytest.approx(0.12)
    session.dispatch(ScaleDt(1 / 1.2))
    assert session.dt == pytest.approx(0.1)
    for bad in (0.0, -2.0, float("inf"), float("nan")):
        with pytest.raises(ValueError):
            session.dispatch(ScaleDt(bad))
    assert session.dt == pytest.approx(0.1)


def test_select_curvature_type_and_samples():
    model = CurveModel(example_curve("circle", sections=36))
    session = FlowSession(model)
    assert session.curvature_samples(0) == []

    session.dispatch(SelectCurvatureType(CurvatureType.KC))
    assert session.curvature_type is CurvatureType.KC
    samples = session.curvature_samples(0)
    assert [s.index for s in samples] == [0, 10, 20, 30]
    assert len(session.curvature_samples(0, stride=1)) == 36

    session.dispatch(SelectCurvatureType(CurvatureType.NONE))
    assert session.curvature_samples(0) == []

    with pytest.raises(IndexError):
        session.curvature_samples(3)


def test_unknown_command():
    session = FlowSession(CurveModel(example_curve("square")))
    with pytest.raises(TypeError):
        session.dispatch("step")


def test_sample_stride_is_validated():
    session = FlowSession(CurveModel(example_curve("circle", sections=36)))
    session.dispatch(SelectCurvatureType(CurvatureType.KA))
    with pytest.raises(ValueError):
        session.curvature_samples(0, stride=0)
    with pytest.raises(ValueError):
        session.frame_samples(0, stride=0)


def test_frame_samples_carry_tangent_and_normal():
    model = CurveModel(example_curve("circle", sections=36))
    session = FlowSession(model)
    samples = session.frame_samples(0)
    assert [s.index for s in samples] == list(range(0, 36, 5))
    for s in samples:
        t, n = np.array(s.tangent), np.array(s.normal)
        assert np.isclose(np.linalg.norm(t), 1.0)
        assert np.allclose(n, [-t[1], t[0]])
        # counter-clockwise circle: left normal points to the centre
        assert np.dot(n, s.position) < 0
        assert s.value == 0.0

    session.dispatch(SelectCurvatureType(CurvatureType.KD))
    samples = session.frame_samples(0)
    assert [s.index for s in samples] == [0, 10, 20, 30]
    assert all(s.value == pytest.approx(-1.0) for s in samples)
