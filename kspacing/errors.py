"""
Domain Errors

Precondition violations raised by the clustering core. Each one aborts the
invocation before any union is issued.
"""


class InvalidClusterTarget(ValueError):
    """Requested cluster count k lies outside [2, M)."""


class InvalidDistanceParameter(ValueError):
    """Spacing threshold or Hamming distance is below 1."""


class IndexOutOfRange(IndexError):
    """Element identifier lies outside [0, n)."""


class InsufficientEdges(ValueError):
    """The edge sequence ran out before the requested clustering was reached."""
