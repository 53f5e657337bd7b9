"""Exceptions raised when an operation's inputs violate its preconditions."""


class NdStrideError(ValueError):
    """Base class for all ndstride precondition violations."""


class InvalidShape(NdStrideError):
    """Shape is empty, has non-positive extents, or does not match ndim."""


class InvalidRange(NdStrideError):
    """Malformed start/end/step (or low/high) bounds."""


class InvalidReshape(NdStrideError):
    """Target shape holds a different number of elements than the source."""


class BroadcastIncompatible(NdStrideError):
    """Two shapes have no common broadcast shape."""


class RankTooLow(NdStrideError):
    """Matmul operand has fewer than two dimensions."""


class DimensionMismatch(NdStrideError):
    """Matmul inner dimensions differ."""


class UnsupportedDtype(NdStrideError, TypeError):
    """Element type is not a numeric numpy dtype."""
