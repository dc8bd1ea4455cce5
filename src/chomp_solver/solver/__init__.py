"""Perfect-play solving algorithms."""

from .evaluation import Evaluation, Outcome
from .memo import MemoSolver
from .bfs import enumerate_reachable_states
from .retrograde import RetrogradeSolver

__all__ = [
    "Evaluation",
    "Outcome",
    "MemoSolver",
    "enumerate_reachable_states",
    "RetrogradeSolver",
]
