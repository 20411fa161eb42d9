"""Host-facing command surface for driving a flow interactively.

A host (GUI, notebook, script) translates its own input events into the
commands below and feeds them to :class:`FlowSession`. Periodic running is
modelled by the host calling :meth:`FlowSession.tick` at whatever cadence it
likes; the session never reads the clock.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from .curvature import CurvatureSample, CurvatureType, curvature_samples
from .curve import CurveModel
from .flow import step

DEFAULT_DT = 0.1
DT_SCALE_FACTOR = 1.2
TEXT_SAMPLE_STRIDE = 10
VECTOR_SAMPLE_STRIDE = 5


@dataclass(frozen=True)
class Step:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class ToggleRun:
    pass


@dataclass(frozen=True)
class ScaleDt:
    factor: float


@dataclass(frozen=True)
class SelectCurvatureType:
    kind: CurvatureType


Command = Union[Step, Reset, ToggleRun, ScaleDt, SelectCurvatureType]


class FlowSession:
    """Run/pause state, time step and display curvature type for one model."""

    def __init__(
        self,
        model: CurveModel,
        *,
        dt: float = DEFAULT_DT,
        curvature_type: CurvatureType = CurvatureType.NONE,
    ):
        self.model = model
        self.dt = float(dt)
        self.curvature_type = curvature_type
        self.running = False

    def dispatch(self, command: Command) -> None:
        if isinstance(command, Step):
            step(self.model, self.dt)
        elif isinstance(command, Reset):
            self.model.reset()
        elif isinstance(command, ToggleRun):
            self.running = not self.running
        elif isinstance(command, ScaleDt):
            factor = float(command.factor)
            if not math.isfinite(factor) or factor <= 0:
                raise ValueError(f"dt scale factor must be finite and > 0, got {command.factor!r}")
            self.dt *= factor
        elif isinstance(command, SelectCurvatureType):
            self.curvature_type = CurvatureType(command.kind)
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def tick(self) -> bool:
        """One periodic tick: step once if running. Returns whether a step ran."""
        if not self.running:
            return False
        step(self.model, self.dt)
        return True

    def curvature_samples(
        self, component_index: int, stride: Optional[int] = None
    ) -> list[CurvatureSample]:
        """Display values of the selected curvature type along one component."""
        V = self.model.current_vertices(component_index)
        if self.curvature_type is CurvatureType.NONE:
            return []
        if stride is None:
            stride = TEXT_SAMPLE_STRIDE
        return list(curvature_samples(V, self.curvature_type, stride=stride))

    def frame_samples(
        self, component_index: int, stride: Optional[int] = None
    ) -> list[CurvatureSample]:
        """Tangent/normal display samples along one component.

        Denser (every 5th vertex) while no curvature type is selected, every
        10th otherwise. ``value`` holds the selected curvature, 0.0 for NONE.
        """
        V = self.model.current_vertices(component_index)
        if stride is None:
            if self.curvature_type is CurvatureType.NONE:
                stride = VECTOR_SAMPLE_STRIDE
            else:
                stride = TEXT_SAMPLE_STRIDE
        return list(curvature_samples(V, self.curvature_type, stride=stride))
