#!/usr/bin/env python3
"""
Demo script for pycsf: load a .vert curve set, run curve-shortening flow,
print curvature samples and optionally plot the evolution with matplotlib.

Usage:
  python scripts/demo_flow.py [--vert PATH] [--shape circle|ellipse|square]
                              [--dt DT] [--steps N] [--curvature ka|kb|kc|kd]
                              [--plot] [--outdir PATH]

If --vert is not provided, an example ellipse is generated.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from pycsf.commands import FlowSession, SelectCurvatureType
from pycsf.curvature import CurvatureType
from pycsf.curve import CurveModel, example_curve
from pycsf.errors import InvalidInputError, ParseError
from pycsf.flow import curve_shortening_flow
from pycsf.io import load_vert_file


def ensure_outdir(path: str) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def plot_history(history, original, out_png: Path) -> None:
    try:
        import matplotlib.pyplot as plt
    except Exception:
        print("matplotlib not available; skipping plot")
        return
    fig, ax = plt.subplots()
    ax.set_aspect("equal")
    for V in original:
        if V.shape[0] >= 2:
            closed = np.vstack([V, V[:1]])
            ax.plot(closed[:, 0], closed[:, 1], color="black", linewidth=1.5)
    every = max(1, len(history) // 10)
    for snapshot in history[every - 1::every]:
        for V in snapshot:
            if V.shape[0] >= 2:
                closed = np.vstack([V, V[:1]])
                ax.plot(closed[:, 0], closed[:, 1], color="crimson", linewidth=0.8, alpha=0.6)
    fig.savefig(str(out_png), dpi=150)
    print(f"Wrote plot: {out_png}")


def main():
    ap = argparse.ArgumentParser(description="pycsf demo: curve-shortening flow + curvature samples")
    ap.add_argument("--vert", type=str, default=None, help="Path to a .vert file. If omitted, use --shape")
    ap.add_argument("--shape", type=str, default="ellipse", choices=["circle", "ellipse", "square"])
    ap.add_argument("--dt", type=float, default=1e-3, help="Time step")
    ap.add_argument("--steps", type=int, default=200, help="Number of flow steps")
    ap.add_argument("--curvature", type=str, default="kd", choices=["ka", "kb", "kc", "kd"])
    ap.add_argument("--plot", action="store_true", help="Save a matplotlib plot of the evolution")
    ap.add_argument("--outdir", type=str, default="outputs/demo", help="Directory to write outputs")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    try:
        components = load_vert_file(args.vert) if args.vert else example_curve(args.shape)
        model = CurveModel(components, verbose=True)
    except (OSError, ParseError, InvalidInputError) as e:
        print(f"Failed to load curves: {e}")
        sys.exit(1)

    res = curve_shortening_flow(
        model, dt=args.dt, iterations=args.steps, record_history=args.plot, verbose=True
    )

    session = FlowSession(model, dt=args.dt)
    session.dispatch(SelectCurvatureType(CurvatureType[args.curvature.upper()]))
    for ci in range(model.component_count()):
        samples = session.curvature_samples(ci)
        print(f"Component {ci}: {len(samples)} samples ({session.curvature_type.name})")
        for s in samples:
            print(f"  [{s.index:4d}] ({s.position[0]: .4f}, {s.position[1]: .4f})  {s.value: .3f}")

    if args.plot and res.history:
        outdir = ensure_outdir(args.outdir)
        original = [model.original_vertices(i) for i in range(model.component_count())]
        plot_history(res.history, original, outdir / "flow_matplotlib.png")


if __name__ == "__main__":
    main()
