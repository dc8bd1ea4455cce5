"""Game-value labels produced by the solvers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..core import Move


class Outcome(Enum):
    """Game-theoretic value for the player to move."""

    WIN = "win"  # N-position
    LOSS = "loss"  # P-position


@dataclass(frozen=True)
class Evaluation:
    """
    Solved position.

    A WIN always carries at least one winning move; a LOSS carries none.
    "No winning move" is therefore a LOSS, never an empty WIN.
    """

    outcome: Outcome
    winning_moves: Tuple[Move, ...] = ()

    def __post_init__(self) -> None:
        """Validate the tag against the move list."""
        object.__setattr__(self, "winning_moves", tuple(self.winning_moves))
        if self.outcome is Outcome.WIN and not self.winning_moves:
            raise ValueError("Winning evaluation needs at least one winning move")
        if self.outcome is Outcome.LOSS and self.winning_moves:
            raise ValueError("Losing evaluation cannot carry winning moves")

    @classmethod
    def loss(cls) -> "Evaluation":
        return cls(Outcome.LOSS)

    @classmethod
    def win(cls, moves) -> "Evaluation":
        return cls(Outcome.WIN, tuple(moves))

    @property
    def winning(self) -> bool:
        return self.outcome is Outcome.WIN

    @property
    def recommended(self) -> Optional[Move]:
        """First winning move in generation order, or None when losing."""
        return self.winning_moves[0] if self.winning_moves else None
