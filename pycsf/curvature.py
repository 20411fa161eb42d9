from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .errors import Degenerate


class CurvatureType(enum.Enum):
    """Discrete curvature estimators evaluated from the signed turning angle."""

    NONE = 0
    KA = 1  # theta
    KB = 2  # 2 sin(theta/2)
    KC = 3  # 2 tan(theta/2)
    KD = 4  # 2 sin(theta) / |chord|


@dataclass(frozen=True)
class LocalFrame:
    tangent: tuple[float, float]
    normal: tuple[float, float]
    theta: float
    chord_length: float


@dataclass
class ComponentFrames:
    tangent: np.ndarray  # (n,2) unit tangents, zero where degenerate
    normal: np.ndarray  # (n,2) unit left normals, zero where degenerate
    theta: np.ndarray  # (n,) signed turning angles, zero where degenerate
    chord_length: np.ndarray  # (n,) |p_{i+1} - p_{i-1}|
    degenerate: np.ndarray  # (n,) bool


@dataclass(frozen=True)
class CurvatureSample:
    index: int
    position: tuple[float, float]
    tangent: tuple[float, float]
    normal: tuple[float, float]
    value: float


def _signed_angle(ax: float, ay: float, bx: float, by: float, la: float, lb: float) -> float:
    dot = (ax * bx + ay * by) / (la * lb)
    theta = math.acos(max(-1.0, min(1.0, dot)))
    # negative turn when the outgoing edge lies to the left of the incoming one
    if ax * by - ay * bx > 0:
        theta = -theta
    return theta


def turning_angle(pm, p, pp) -> float:
    """Signed turning angle at ``p`` between edges ``pm->p`` and ``p->pp``.

    Raises
    ------
    Degenerate
        If either edge has zero length.
    """
    ax, ay = p[0] - pm[0], p[1] - pm[1]
    bx, by = pp[0] - p[0], pp[1] - p[1]
    la = math.hypot(ax, ay)
    lb = math.hypot(bx, by)
    if la == 0 or lb == 0:
        raise Degenerate("zero-length edge at vertex")
    return _signed_angle(ax, ay, bx, by, la, lb)


def local_frame(pm, p, pp) -> LocalFrame:
    """Tangent, left normal, signed turning angle and chord length at ``p``.

    The tangent is taken along the chord ``pp - pm`` joining the two
    neighbours of ``p``; the normal is its 90 degree counter-clockwise
    rotation ``(-t.y, t.x)``.

    Raises
    ------
    Degenerate
        If the chord or either adjacent edge has zero length.
    """
    wx = pp[0] - pm[0]
    wy = pp[1] - pm[1]
    wlen = math.hypot(wx, wy)
    if wlen == 0:
        raise Degenerate("zero-length chord at vertex")
    tx, ty = wx / wlen, wy / wlen
    theta = turning_angle(pm, p, pp)
    return LocalFrame(tangent=(tx, ty), normal=(-ty, tx), theta=theta, chord_length=wlen)


def curvature_from_theta(theta, chord_length, kind: CurvatureType):
    """Evaluate estimator ``kind`` from a signed turning angle.

    Works on floats and on numpy arrays alike. ``KD`` is 0 where the chord
    length is 0; ``NONE`` is always 0.
    """
    if kind is CurvatureType.KA:
        return theta
    if kind is CurvatureType.KB:
        return 2.0 * np.sin(theta / 2.0) if isinstance(theta, np.ndarray) else 2.0 * math.sin(theta / 2.0)
    if kind is CurvatureType.KC:
        return 2.0 * np.tan(theta / 2.0) if isinstance(theta, np.ndarray) else 2.0 * math.tan(theta / 2.0)
    if kind is CurvatureType.KD:
        if isinstance(theta, np.ndarray) or isinstance(chord_length, np.ndarray):
            theta = np.asarray(theta, dtype=float)
            w = np.asarray(chord_length, dtype=float)
            safe = np.where(w == 0, 1.0, w)
            return np.where(w == 0, 0.0, 2.0 * np.sin(theta) / safe)
        if chord_length == 0:
            return 0.0
        return 2.0 * math.sin(theta) / chord_length
    if kind is CurvatureType.NONE:
        return np.zeros_like(theta, dtype=float) if isinstance(theta, np.ndarray) else 0.0
    raise ValueError(f"Unknown curvature type: {kind!r}")


def _neighbours(vertices, i: int):
    V = np.asarray(vertices, dtype=float)
    n = V.shape[0]
    if n < 3:
        raise ValueError(f"curvature needs at least 3 vertices, got {n}")
    i = int(i) % n
    return V[(i - 1 + n) % n], V[i], V[(i + 1) % n]


def frame_at(vertices, i: int) -> LocalFrame:
    """:func:`local_frame` at index ``i`` of a closed polyline (cyclic neighbours)."""
    pm, p, pp = _neighbours(vertices, i)
    return local_frame(pm, p, pp)


def curvature_at(vertices, i: int, kind: CurvatureType = CurvatureType.KD) -> float:
    """Curvature of type ``kind`` at index ``i``; raises :class:`Degenerate`."""
    frame = frame_at(vertices, i)
    return float(curvature_from_theta(frame.theta, frame.chord_length, kind))


def component_frames(V: np.ndarray) -> ComponentFrames:
    """Local frames at every vertex of one closed component, from a single snapshot.

    Parameters
    ----------
    V : (n,2) float array, n >= 3

    Returns
    -------
    ComponentFrames
        Per-vertex tangent, normal, signed theta and chord length, plus the
        ``degenerate`` mask (zero chord or zero adjacent edge). Degenerate
        rows carry zeros in tangent/normal/theta.
    """
    V = np.asarray(V, dtype=float)
    if V.ndim != 2 or V.shape[1] != 2:
        raise ValueError("vertices must have shape (n,2)")
    if V.shape[0] < 3:
        raise ValueError(f"curvature needs at least 3 vertices, got {V.shape[0]}")

    pm = np.roll(V, 1, axis=0)
    pp = np.roll(V, -1, axis=0)

    w = pp - pm
    wlen = np.hypot(w[:, 0], w[:, 1])
    a = V - pm
    b = pp - V
    la = np.hypot(a[:, 0], a[:, 1])
    lb = np.hypot(b[:, 0], b[:, 1])

    degenerate = (wlen == 0) | (la == 0) | (lb == 0)
    ok = ~degenerate

    tangent = np.zeros_like(V)
    tangent[ok] = w[ok] / wlen[ok, None]
    normal = np.stack([-tangent[:, 1], tangent[:, 0]], axis=1)

    theta = np.zeros(V.shape[0], dtype=float)
    dot = (a[ok, 0] * b[ok, 0] + a[ok, 1] * b[ok, 1]) / (la[ok] * lb[ok])
    theta0 = np.arccos(np.clip(dot, -1.0, 1.0))
    cross = a[ok, 0] * b[ok, 1] - a[ok, 1] * b[ok, 0]
    theta[ok] = np.where(cross > 0, -theta0, theta0)

    return ComponentFrames(
        tangent=tangent,
        normal=normal,
        theta=theta,
        chord_length=wlen,
        degenerate=degenerate,
    )


def component_curvature(V: np.ndarray, kind: CurvatureType = CurvatureType.KD) -> np.ndarray:
    """Curvature of type ``kind`` at every vertex; NaN at degenerate vertices."""
    frames = component_frames(V)
    k = np.asarray(curvature_from_theta(frames.theta, frames.chord_length, kind), dtype=float)
    k = k.copy()
    k[frames.degenerate] = np.nan
    return k


def curvature_samples(
    vertices,
    kind: CurvatureType,
    *,
    stride: int = 10,
) -> Iterator[CurvatureSample]:
    """Yield curvature values at every ``stride``-th vertex for display.

    Degenerate vertices are skipped. Components with fewer than 3 vertices
    yield nothing.
    """
    if stride < 1:
        raise ValueError("stride must be >= 1")
    V = np.asarray(vertices, dtype=float)
    if V.shape[0] < 3:
        return
    for i in range(0, V.shape[0], stride):
        try:
            frame = frame_at(V, i)
        except Degenerate:
            continue
        value = float(curvature_from_theta(frame.theta, frame.chord_length, kind))
        yield CurvatureSample(
            index=i,
            position=(float(V[i, 0]), float(V[i, 1])),
            tangent=frame.tangent,
            normal=frame.normal,
            value=value,
        )
