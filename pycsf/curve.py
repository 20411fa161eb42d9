"""
Closed polygonal curve container
"""

import logging
import operator
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .errors import InvalidInputError

# Module-level logger
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def example_curve(
    kind: str = "circle",
    *,
    # Circle / ellipse params
    radius: float = 1.0,
    semi_axes: Tuple[float, float] = (2.0, 1.0),
    sections: int = 64,
    center: Tuple[float, float] = (0.0, 0.0),
) -> List[np.ndarray]:
    """Create a single-component demo curve set.

    Parameters
    ----------
    kind : {"circle", "ellipse", "square"}
        Shape to generate. Default "circle".
    radius : float
        Circle radius (when kind="circle"). Default 1.0.
    semi_axes : (float, float)
        Ellipse semi-axes along x and y (when kind="ellipse"). Default (2, 1).
    sections : int
        Number of vertices for circle and ellipse. Default 64.
    center : (float, float)
        Translation applied to the shape.

    Returns
    -------
    list of (n,2) float arrays
        One counter-clockwise component, ready for :class:`CurveModel`.

    Examples
    --------
    >>> c = example_curve("circle", radius=2.0, sections=36)
    >>> s = example_curve("square")
    """
    k = (kind or "circle").lower()
    cx, cy = float(center[0]), float(center[1])
    if k in ("circle", "ellipse"):
        n = int(sections)
        if n < 3:
            raise ValueError("sections must be >= 3")
        ang = 2.0 * np.pi * np.arange(n) / n
        if k == "circle":
            rx = ry = float(radius)
        else:
            rx, ry = float(semi_axes[0]), float(semi_axes[1])
        V = np.column_stack([cx + rx * np.cos(ang), cy + ry * np.sin(ang)])
    elif k == "square":
        V = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]) + [cx, cy]
    else:
        raise ValueError("example_curve kind must be 'circle', 'ellipse' or 'square'")
    return [V]


def _as_component(comp, index: int) -> np.ndarray:
    try:
        V = np.array(comp, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Component {index} is not a sequence of (x, y) pairs: {e}") from e
    if V.ndim == 1 and V.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if V.ndim != 2 or V.shape[1] != 2:
        raise InvalidInputError(f"Component {index} must have shape (n,2), got {V.shape}")
    if not np.all(np.isfinite(V)):
        raise InvalidInputError(f"Component {index} contains non-finite coordinates")
    return V


class CurveModel:
    """
    Original and evolving vertex data for a set of closed curves.

    ``original`` is written once by :meth:`load`; ``current`` is advanced by
    :func:`pycsf.flow.step` and restored by :meth:`reset`. Both always hold
    the same number of components with the same vertex counts.
    """

    def __init__(self, components: Optional[Iterable] = None, verbose: bool = False):
        self.verbose = verbose
        self._original: List[np.ndarray] = []
        self._current: List[np.ndarray] = []
        if components is not None:
            self.load(components)

    # =================================================================
    # LOADING AND RESET
    # =================================================================

    def load(self, components: Iterable) -> None:
        """
        Load a curve set, replacing any previous data.

        Args:
            components: Ordered collection of components, each an ordered
                sequence of (x, y) pairs. Empty and short components are accepted.

        Raises:
            InvalidInputError: If any component is malformed. The model is
                left unchanged in that case.
        """
        if components is None or isinstance(components, (str, bytes)):
            raise InvalidInputError("components must be a collection of vertex sequences")
        try:
            items = list(components)
        except TypeError as e:
            raise InvalidInputError(f"components is not iterable: {e}") from e

        original = [_as_component(c, i) for i, c in enumerate(items)]

        self._original = original
        self._current = [V.copy() for V in original]

        if self.verbose:
            logger.info(
                "Loaded curve set: %d components, %d vertices",
                len(original),
                sum(V.shape[0] for V in original),
            )

    def reset(self) -> None:
        """Restore ``current`` to an exact copy of the loaded data."""
        self._current = [V.copy() for V in self._original]
        if self.verbose:
            logger.info("Reset %d components to original", len(self._original))

    def copy(self) -> "CurveModel":
        """Independent model whose original and current match this one."""
        other = CurveModel(verbose=self.verbose)
        other._original = [V.copy() for V in self._original]
        other._current = [V.copy() for V in self._current]
        return other

    # =================================================================
    # READ ACCESS
    # =================================================================

    def component_count(self) -> int:
        return len(self._current)

    def vertex_counts(self) -> List[int]:
        return [V.shape[0] for V in self._current]

    def _check_index(self, component_index: int) -> int:
        try:
            i = operator.index(component_index)
        except TypeError:
            raise IndexError(f"component index must be an integer, got {component_index!r}") from None
        if not 0 <= i < len(self._current):
            raise IndexError(
                f"component index {component_index} out of range for {len(self._current)} components"
            )
        return i

    def current_vertices(self, component_index: int) -> np.ndarray:
        """Read-only (n,2) view of the evolving vertices of one component."""
        view = self._current[self._check_index(component_index)].view()
        view.flags.writeable = False
        return view

    def original_vertices(self, component_index: int) -> np.ndarray:
        """Read-only (n,2) view of the loaded vertices of one component."""
        view = self._original[self._check_index(component_index)].view()
        view.flags.writeable = False
        return view

    def bounds(self) -> Optional[Dict[str, Tuple[float, float]]]:
        """Bounding box of the original data, or None when there are no vertices."""
        nonempty = [V for V in self._original if V.shape[0] > 0]
        if not nonempty:
            return None
        P = np.vstack(nonempty)
        min_coords = P.min(axis=0)
        max_coords = P.max(axis=0)
        return {
            "x": (float(min_coords[0]), float(max_coords[0])),
            "y": (float(min_coords[1]), float(max_coords[1])),
        }

    # =================================================================
    # STEPPER ACCESS
    # =================================================================

    def _replace_current(self, component_index: int, vertices: np.ndarray) -> None:
        # single assignment; readers never see a half-written component
        if vertices.shape != self._current[component_index].shape:
            raise ValueError("replacement must keep the component shape")
        self._current[component_index] = vertices
