"""
Domain Exceptions

Configuration problems are raised when a topology is built. Invariant
violations signal a caller or algorithm bug and are never recovered from.
Network disconnection is NOT an exception: path finding reports it as a
``False`` value and the simulator turns it into a halted state.
"""


class TopologyError(ValueError):
    """Malformed or degenerate topology description."""

    def __init__(self, message="Invalid topology description."):
        super().__init__(message)


class InvariantViolationError(RuntimeError):
    """Internal invariant broken (dead node deleted twice, bad index, ...)."""

    def __init__(self, message="Simulation invariant violated."):
        super().__init__(message)


class DiagonalAccessError(InvariantViolationError, IndexError):
    """Access to the self-pair (i, i) of a pair matrix."""

    def __init__(self, message="You cannot access the diagonal of a pair matrix."):
        super().__init__(message)


class DegenerateNetworkError(InvariantViolationError):
    """Metric undefined for the current number of alive nodes."""

    def __init__(self, message="Metric is undefined for this network size."):
        super().__init__(message)
