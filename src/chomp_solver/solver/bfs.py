"""
Breadth-First Search over the reachable state space.
"""

import logging
from typing import FrozenSet, Optional, Set

from tqdm import tqdm

from ..core import (
    BoardState,
    apply_move,
    create_starting_state,
    generate_legal_moves,
)

logger = logging.getLogger(__name__)


def enumerate_reachable_states(
    initial_state: Optional[BoardState] = None, progress: bool = False
) -> FrozenSet[BoardState]:
    """
    Discover every state reachable from `initial_state`.

    Explores level-by-level (by number of moves played). Every move strictly
    increases the number of eaten cells, so the frontier eventually empties.

    Args:
        initial_state: Root of the search (default: untouched board)
        progress: Show a tqdm bar over depth layers

    Returns:
        All reachable states, root included
    """
    start = initial_state if initial_state is not None else create_starting_state()
    logger.info(f"Starting BFS from {start.to_text()}")

    seen: Set[BoardState] = {start}
    frontier = [start]
    depth = 0

    with tqdm(desc="BFS", unit=" depth", disable=not progress) as pbar:
        while frontier:
            pbar.set_description(f"Depth {depth} ({len(frontier):,} positions)")

            next_frontier = []
            for state in frontier:
                for move in generate_legal_moves(state):
                    next_state = apply_move(state, move)
                    if next_state in seen:
                        continue
                    seen.add(next_state)
                    next_frontier.append(next_state)

            logger.debug(
                f"Depth {depth}: {len(frontier):,} positions -> "
                f"{len(next_frontier):,} new -> total {len(seen):,}"
            )

            frontier = next_frontier
            depth += 1
            pbar.update(1)

    logger.info(f"BFS complete! Total positions: {len(seen):,}")
    logger.info(f"Maximum depth: {depth - 1}")

    return frozenset(seen)
