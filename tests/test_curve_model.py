import numpy as np
import pytest

from pycsf.curve import CurveModel, example_curve
from pycsf.errors import InvalidInputError


def test_load_copies_input():
    src = [[(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]]
    arr = np.array(src[0])
    model = CurveModel([arr])
    arr[0, 0] = 99.0
    assert model.current_vertices(0)[0, 0] == 0.0
    assert model.original_vertices(0)[0, 0] == 0.0
    assert model.component_count() == 1
    assert model.vertex_counts() == [3]


def test_accepts_empty_and_short_components():
    model = CurveModel([[], [(1.0, 2.0)], [(0.0, 0.0), (1.0, 1.0)]])
    assert model.vertex_counts() == [0, 1, 2]
    assert model.current_vertices(0).shape == (0, 2)


@pytest.mark.parametrize(
    "bad",
    [
        [[(0.0, 0.0), (1.0,)]],
        [[(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)]],
        [[("a", "b")]],
        [[(0.0, np.nan), (1.0, 1.0)]],
        [[0.0, 1.0]],
        [[()]],
        [[(), ()]],
        None,
        "0 0 1 1",
    ],
)
def test_load_rejects_malformed_without_mutation(bad):
    model = CurveModel(example_curve("square"))
    with pytest.raises(InvalidInputError):
        model.load(bad)
    assert model.component_count() == 1
    assert np.array_equal(model.current_vertices(0), example_curve("square")[0])


def test_current_vertices_index_errors():
    model = CurveModel(example_curve("square"))
    with pytest.raises(IndexError):
        model.current_vertices(1)
    with pytest.raises(IndexError):
        model.current_vertices(-1)
    with pytest.raises(IndexError):
        CurveModel([]).current_vertices(0)
    with pytest.raises(IndexError):
        model.current_vertices(0.7)
    with pytest.raises(IndexError):
        model.current_vertices("0")
    assert model.current_vertices(np.int64(0)).shape == (4, 2)


def test_current_vertices_is_read_only():
    model = CurveModel(example_curve("square"))
    V = model.current_vertices(0)
    with pytest.raises(ValueError):
        V[0, 0] = 5.0


def test_reset_is_idempotent():
    model = CurveModel(example_curve("circle", sections=10))
    model.reset()
    model.reset()
    assert np.array_equal(model.current_vertices(0), model.original_vertices(0))


def test_bounds_and_copy():
    model = CurveModel(example_curve("square", center=(2.0, -1.0)))
    assert model.bounds() == {"x": (2.0, 3.0), "y": (-1.0, 0.0)}
    assert CurveModel([[]]).bounds() is None

    other = model.copy()
    assert other.component_count() == model.component_count()
    assert np.array_equal(other.current_vertices(0), model.current_vertices(0))


def test_example_curve_kinds():
    (c,) = example_curve("circle", radius=2.0, sections=36)
    assert c.shape == (36, 2)
    assert np.allclose(np.linalg.norm(c, axis=1), 2.0)
    (e,) = example_curve("ellipse", semi_axes=(3.0, 1.0), sections=20)
    assert np.allclose((e[:, 0] / 3.0) ** 2 + e[:, 1] ** 2, 1.0)
    with pytest.raises(ValueError):
        example_curve("torus")
