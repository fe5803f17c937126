"""Exception types raised by the hydro2d flux core."""

from collections import OrderedDict


class InvalidStateError(ValueError):
    """Raised when a thermodynamic state has non-positive density or energy."""


class NumericalError(ArithmeticError):
    """Raised when a closed-form EOS inverse has no real solution."""


class EOSConvergenceError(RuntimeError):
    """
    Raised when an iterative EOS inversion fails its consistency check.

    Diagnostic values are collected in ``entries`` (insertion ordered) and
    rendered into the message.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.entries = OrderedDict()

    def add_entry(self, name: str, value: float):
        self.entries[name] = value

    def __str__(self):
        lines = [self.message]
        lines.extend(f"  {name} = {value!r}" for name, value in self.entries.items())
        return "\n".join(lines)


class InvalidTopologyError(IndexError):
    """Raised when an edge references a cell outside the interior range."""


class UnmatchedEdgeError(RuntimeError):
    """Raised when no condition of a flux dispatch sequence matches an edge."""

    def __init__(self, edge_index: int):
        super().__init__(f"No condition matched edge {edge_index}")
        self.edge_index = edge_index


class UnsupportedOperationError(NotImplementedError):
    """Raised by equations of state for conversions they do not provide."""
