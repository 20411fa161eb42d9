from __future__ import annotations

import logging
import os
from typing import Iterable, Union

import numpy as np

from .errors import ParseError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

PathLike = Union[str, "os.PathLike[str]"]


class _Tokens:
    def __init__(self, text: str):
        self._tokens = text.split()
        self._pos = 0

    def _next(self, what: str) -> str:
        if self._pos >= len(self._tokens):
            raise ParseError(f"Unexpected end of input while reading {what} (token {self._pos})")
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def remaining(self) -> int:
        return len(self._tokens) - self._pos

    def next_count(self, what: str) -> int:
        tok = self._next(what)
        try:
            value = int(tok)
        except ValueError:
            raise ParseError(f"Expected integer {what} at token {self._pos - 1}, got {tok!r}") from None
        if value < 0:
            raise ParseError(f"Negative {what} at token {self._pos - 1}: {value}")
        return value

    def next_float(self, what: str) -> float:
        tok = self._next(what)
        try:
            return float(tok)
        except ValueError:
            raise ParseError(f"Expected number for {what} at token {self._pos - 1}, got {tok!r}") from None


def parse_vert(text: str) -> list[np.ndarray]:
    """Parse ``.vert`` text into a list of (n,2) float arrays.

    Format (whitespace or newline separated)::

        <component count>
        <vertex count> x0 y0 x1 y1 ...
        ...

    Tokens after the last declared component are ignored.

    Raises
    ------
    ParseError
        On truncated input, non-integer or negative counts, or non-numeric
        coordinates.
    """
    toks = _Tokens(text)
    ncomp = toks.next_count("component count")
    components: list[np.ndarray] = []
    for c in range(ncomp):
        nverts = toks.next_count(f"vertex count of component {c}")
        if 2 * nverts > toks.remaining():
            raise ParseError(
                f"Unexpected end of input: component {c} declares {nverts} vertices, "
                f"only {toks.remaining()} coordinate tokens left"
            )
        V = np.empty((nverts, 2), dtype=np.float64)
        for j in range(nverts):
            V[j, 0] = toks.next_float(f"x of vertex {j} in component {c}")
            V[j, 1] = toks.next_float(f"y of vertex {j} in component {c}")
        components.append(V)
    return components


def load_vert_file(path: PathLike) -> list[np.ndarray]:
    """Read and parse a ``.vert`` file."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        components = parse_vert(text)
    except ParseError as e:
        raise ParseError(f"Failed to parse {os.fspath(path)}: {e}") from e
    logger.debug("Loaded %s: %d components", os.fspath(path), len(components))
    return components


def format_vert(components: Iterable) -> str:
    """Serialize components to ``.vert`` text, one vertex per line."""
    comps = [np.asarray(c, dtype=float).reshape(-1, 2) for c in components]
    lines = [str(len(comps))]
    for V in comps:
        lines.append(str(V.shape[0]))
        lines.extend(f"{x!r} {y!r}" for x, y in V.tolist())
    return "\n".join(lines) + "\n"


def save_vert_file(path: PathLike, components: Iterable) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_vert(components))
