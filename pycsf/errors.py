"""Exception types raised by pycsf."""


class InvalidInputError(ValueError):
    """Curve data handed to :meth:`CurveModel.load` is malformed."""


class ParseError(ValueError):
    """A ``.vert`` text stream could not be parsed."""


class Degenerate(ArithmeticError):
    """Chord or an adjacent edge at a vertex has zero length.

    Not a failure: the flow leaves such vertices in place.
    """
