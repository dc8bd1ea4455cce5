"""
Retrograde solver.

Computes labels for a whole state set by working backwards from the
terminal position, without recursion. Every move removes at least one
cell, so processing states by ascending cells_remaining guarantees all
children are solved before their parents.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from tqdm import tqdm

from ..core import (
    BoardState,
    GameOverError,
    apply_move,
    generate_legal_moves,
    is_game_over,
    is_terminal_loss,
)
from .evaluation import Evaluation

logger = logging.getLogger(__name__)


class RetrogradeSolver:
    """
    Layered backward induction over an explicit state set.

    The state set must be closed under legal moves (for example the output
    of enumerate_reachable_states).
    """

    def __init__(self, states: Iterable[BoardState], progress: bool = False):
        """
        Initialize retrograde solver.

        Args:
            states: Closed set of positions to solve
            progress: Show a tqdm bar over cell layers
        """
        self.states = frozenset(states)
        self.progress = progress

    def solve(self) -> Dict[BoardState, Evaluation]:
        """
        Solve every position in the state set.

        Returns:
            Mapping of state to Evaluation

        Raises:
            RuntimeError: if a child position is missing from the state set
            GameOverError: if the set contains the fully eaten board
        """
        logger.info(f"Starting retrograde analysis of {len(self.states):,} positions")

        layers: Dict[int, List[BoardState]] = defaultdict(list)
        for state in self.states:
            if is_game_over(state):
                raise GameOverError(
                    f"No cells left in {state.to_text()}; the game is over"
                )
            layers[state.cells_remaining].append(state)

        solved: Dict[BoardState, Evaluation] = {}
        with tqdm(total=len(layers), desc="Retrograde", unit=" layer", disable=not self.progress) as pbar:
            for cells in sorted(layers):
                positions = layers[cells]
                pbar.set_description(f"Cells {cells} ({len(positions):,} positions)")

                for state in positions:
                    solved[state] = self._solve_position(state, solved)

                logger.debug(f"Cells remaining {cells}: solved {len(positions):,} positions")
                pbar.update(1)

        wins = sum(1 for evaluation in solved.values() if evaluation.winning)
        logger.info(
            f"Retrograde complete: {wins:,} winning, {len(solved) - wins:,} losing positions"
        )
        return solved

    def _solve_position(
        self, state: BoardState, solved: Dict[BoardState, Evaluation]
    ) -> Evaluation:
        """
        Label one position.

        Assumes all child positions are already solved.
        """
        if is_terminal_loss(state):
            return Evaluation.loss()

        winning_moves = []
        for move in generate_legal_moves(state):
            next_state = apply_move(state, move)
            child = solved.get(next_state)

            if child is None:
                raise RuntimeError(
                    f"Child position not solved: {next_state.to_text()} "
                    f"(parent {state.to_text()}, move {move})"
                )

            if not child.winning:
                winning_moves.append(move)

        return Evaluation.win(winning_moves) if winning_moves else Evaluation.loss()
