"""Exceptions raised by the solver core."""


class ChompSolverError(Exception):
    """Base class for all errors raised by chomp_solver."""


class InvalidStateError(ChompSolverError, ValueError):
    """A board state is out of range or violates the Ferrers invariant."""


class DecodeMismatchError(ChompSolverError, ValueError):
    """
    On-chain account bytes do not decode to a valid board.

    Signals either corrupted account data or a mismatch between this codec
    and the deployed program's row packing.
    """


class IllegalMoveError(ChompSolverError, ValueError):
    """A move is out of range or cannot be played in the given state."""


class GameOverError(ChompSolverError):
    """The board has no cells left, so there is nothing to evaluate."""


class PolicyFormatError(ChompSolverError, ValueError):
    """An exported policy artifact is malformed or for another board."""
