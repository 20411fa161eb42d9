"""pycsf: discrete curve-shortening flow for closed polygonal curves.

Public API:
- CurveModel(components=None, verbose=False)
- step(model, dt)
- curve_shortening_flow(model, dt=0.1, iterations=1, record_history=False)
- curvature_at(vertices, i, kind=CurvatureType.KD)
- component_curvature(V, kind=CurvatureType.KD)
- load_vert_file(path) / parse_vert(text)

"""
from .errors import Degenerate, InvalidInputError, ParseError
from .curvature import (
    CurvatureType,
    component_curvature,
    component_frames,
    curvature_at,
    curvature_from_theta,
    curvature_samples,
    frame_at,
    local_frame,
    turning_angle,
)
from .curve import CurveModel, example_curve
from .flow import FlowResult, curve_shortening_flow, step
from .io import format_vert, load_vert_file, parse_vert, save_vert_file
from .commands import FlowSession, Reset, ScaleDt, SelectCurvatureType, Step, ToggleRun

__all__ = [
    "Degenerate",
    "InvalidInputError",
    "ParseError",
    "CurvatureType",
    "component_curvature",
    "component_frames",
    "curvature_at",
    "curvature_from_theta",
    "curvature_samples",
    "frame_at",
    "local_frame",
    "turning_angle",
    "CurveModel",
    "example_curve",
    "FlowResult",
    "curve_shortening_flow",
    "step",
    "format_vert",
    "load_vert_file",
    "parse_vert",
    "save_vert_file",
    "FlowSession",
    "Reset",
    "ScaleDt",
    "SelectCurvatureType",
    "Step",
    "ToggleRun",
]
