"""
Memoized perfect-play solver.

Evaluates a single position by recursing over its successors. The state
graph is a DAG with heavy path sharing, so every result is cached by
state value.
"""

from typing import Dict

from ..core import (
    BoardState,
    GameOverError,
    apply_move,
    generate_legal_moves,
    is_game_over,
    is_terminal_loss,
)
from .evaluation import Evaluation


class MemoSolver:
    """
    Memoizing solver for the 5x8 board.

    The cache belongs to the instance. Share a solver (or a PolicyTable)
    explicitly when results should be reused across queries.
    """

    def __init__(self):
        self._cache: Dict[BoardState, Evaluation] = {}

    @property
    def cache_size(self) -> int:
        """Number of memoized positions."""
        return len(self._cache)

    def evaluate(self, state: BoardState) -> Evaluation:
        """
        Label a position and collect all of its winning moves.

        Recursion depth is bounded by the number of cells on the board.

        Args:
            state: Position with the player to move

        Returns:
            Evaluation; winning moves are in generation order

        Raises:
            GameOverError: if the poison has already been eaten
        """
        cached = self._cache.get(state)
        if cached is not None:
            return cached

        if is_game_over(state):
            raise GameOverError(f"No cells left in {state.to_text()}; the game is over")

        if is_terminal_loss(state):
            result = Evaluation.loss()
        else:
            winning_moves = [
                move
                for move in generate_legal_moves(state)
                if not self.evaluate(apply_move(state, move)).winning
            ]
            result = Evaluation.win(winning_moves) if winning_moves else Evaluation.loss()

        self._cache[state] = result
        return result
