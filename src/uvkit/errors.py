"""Error taxonomy for uvkit.

Construction functions raise one of the two concrete error kinds below.
Both derive from ``ValueError`` so callers that already guard geometry
calls with ``except ValueError`` keep working.  Query predicates such as
``geom.pointInPolygon`` never raise; they answer ``False`` instead.
"""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for all uvkit geometry failures."""

    kind = "geometry"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"


class InvalidArgument(GeometryError):
    """A ``None``, empty, NaN or otherwise malformed argument."""

    kind = "invalid-argument"


class PreconditionViolation(GeometryError):
    """Well-formed input that violates an operation's precondition,
    such as a wrong point count, degenerate geometry or a mesh without
    faces or UV data."""

    kind = "precondition-violation"


__all__ = ["GeometryError", "InvalidArgument", "PreconditionViolation"]
