"""Read-only policy table covering every reachable position."""

import logging
from collections.abc import Mapping
from typing import Dict, Iterator, Optional

from ..core import BoardState
from ..solver import Evaluation, MemoSolver, RetrogradeSolver, enumerate_reachable_states

logger = logging.getLogger(__name__)

METHODS = ("memo", "retrograde")


class PolicyTable(Mapping):
    """
    Immutable mapping of BoardState -> Evaluation.

    Iterates in canonical order (ascending eaten tuples), independent of the
    order entries were supplied in. Build it once and pass it to consumers.
    """

    def __init__(self, entries: Mapping):
        self._entries: Dict[BoardState, Evaluation] = {
            state: entries[state] for state in sorted(entries)
        }

    def __getitem__(self, state: BoardState) -> Evaluation:
        return self._entries[state]

    def __iter__(self) -> Iterator[BoardState]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PolicyTable({len(self._entries)} positions)"

    @property
    def winning_count(self) -> int:
        return sum(1 for evaluation in self._entries.values() if evaluation.winning)

    @property
    def losing_count(self) -> int:
        return len(self._entries) - self.winning_count


def build_policy_table(
    initial_state: Optional[BoardState] = None,
    method: str = "memo",
    progress: bool = False,
) -> PolicyTable:
    """
    Enumerate every reachable state and label it.

    Args:
        initial_state: Root of the enumeration (default: untouched board)
        method: "memo" (memoized recursion) or "retrograde" (layered worklist)
        progress: Show tqdm progress bars

    Returns:
        PolicyTable covering the full reachable set
    """
    if method not in METHODS:
        raise ValueError(f"Unknown solve method {method!r}, expected one of {METHODS}")

    states = enumerate_reachable_states(initial_state, progress=progress)

    if method == "retrograde":
        entries = RetrogradeSolver(states, progress=progress).solve()
    else:
        solver = MemoSolver()
        entries = {state: solver.evaluate(state) for state in states}

    table = PolicyTable(entries)
    logger.info(
        f"Policy table built ({method}): {len(table):,} positions, "
        f"{table.winning_count:,} winning, {table.losing_count:,} losing"
    )
    return table
