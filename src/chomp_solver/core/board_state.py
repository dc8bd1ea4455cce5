"""
Board state representation for Chomping Glass.

The 5x8 board is stored as column heights (a Ferrers shape):
- One integer per column, left to right
- Each value is the index of the lowest eaten row in that column
  (-1 = untouched, 4 = fully eaten; rows are 0..4 from the top)
- Values never increase from left to right

Board layout (1-indexed rows/columns, poison at bottom-right):

         1  2  3  4  5  6  7  8
    1    o  o  o  o  o  o  o  o
    2    o  o  o  o  o  o  o  o
    3    o  o  o  o  o  o  o  o
    4    o  o  o  o  o  o  o  o
    5    o  o  o  o  o  o  o  X
"""

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Tuple

from .errors import IllegalMoveError, InvalidStateError

ROWS = 5
COLS = 8

UNTOUCHED = -1
FULLY_EATEN = ROWS - 1

TOTAL_CELLS = ROWS * COLS


class Move(NamedTuple):
    """A chomp at (row, col), both 1-indexed."""

    row: int
    col: int

    @classmethod
    def of(cls, row: int, col: int) -> "Move":
        """Build a move, rejecting coordinates outside the board."""
        if not 1 <= row <= ROWS:
            raise IllegalMoveError(f"row must be between 1 and {ROWS}, got {row}")
        if not 1 <= col <= COLS:
            raise IllegalMoveError(f"column must be between 1 and {COLS}, got {col}")
        return cls(row, col)

    def to_zero_indexed(self) -> Tuple[int, int]:
        """(row, col) with 0-indexed coordinates."""
        return self.row - 1, self.col - 1

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


POISON = Move(ROWS, COLS)

TERMINAL_LOSS_EATEN = (FULLY_EATEN,) * (COLS - 1) + (FULLY_EATEN - 1,)
GAME_OVER_EATEN = (FULLY_EATEN,) * COLS


def is_valid(eaten: Iterable[int]) -> bool:
    """
    Check the Ferrers invariant on a raw column sequence.

    Valid iff there are exactly COLS integers, each in [-1, 4], and the
    sequence is non-increasing from left to right.
    """
    values = tuple(eaten)
    if len(values) != COLS:
        return False
    if any(isinstance(v, bool) or not isinstance(v, int) for v in values):
        return False
    if any(v < UNTOUCHED or v > FULLY_EATEN for v in values):
        return False
    return all(left >= right for left, right in zip(values, values[1:]))


@dataclass(frozen=True, order=True)
class BoardState:
    """
    Immutable board position.

    Ordering compares the `eaten` tuples, which is the canonical order used
    for exports.
    """

    eaten: Tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate state invariants."""
        eaten = tuple(self.eaten)
        object.__setattr__(self, "eaten", eaten)

        if len(eaten) != COLS:
            raise InvalidStateError(f"expected {COLS} columns, got {len(eaten)}")
        for col, value in enumerate(eaten, start=1):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidStateError(f"column {col} is not an integer: {value!r}")
            if value < UNTOUCHED or value > FULLY_EATEN:
                raise InvalidStateError(
                    f"column {col} value {value} outside [{UNTOUCHED}, {FULLY_EATEN}]"
                )
        for col in range(1, COLS):
            if eaten[col - 1] < eaten[col]:
                raise InvalidStateError(
                    f"not a Ferrers shape: column {col} ({eaten[col - 1]}) is below "
                    f"column {col + 1} ({eaten[col]}) in {list(eaten)}"
                )

    @property
    def cells_eaten(self) -> int:
        """Number of cells already chomped."""
        return sum(value + 1 for value in self.eaten)

    @property
    def cells_remaining(self) -> int:
        """Cells still on the board, poison included."""
        return TOTAL_CELLS - self.cells_eaten

    def is_cell_present(self, row: int, col: int) -> bool:
        """Whether cell (row, col), 1-indexed, has not been eaten yet."""
        return self.eaten[col - 1] < row - 1

    def to_text(self) -> str:
        """Canonical comma-separated form, e.g. "0,0,-1,-1,-1,-1,-1,-1"."""
        return ",".join(str(value) for value in self.eaten)

    def __str__(self) -> str:
        """Human-readable board: o = present, . = eaten, X = poison."""
        lines = ["     " + "".join(f"{col:>3}" for col in range(1, COLS + 1))]
        for row in range(1, ROWS + 1):
            cells = []
            for col in range(1, COLS + 1):
                if (row, col) == POISON:
                    symbol = "X" if self.is_cell_present(row, col) else "."
                else:
                    symbol = "o" if self.is_cell_present(row, col) else "."
                cells.append(f"{symbol:>3}")
            lines.append(f"{row:>5}" + "".join(cells))
        return "\n".join(lines)


def is_terminal_loss(state: BoardState) -> bool:
    """True iff only the poison cell remains."""
    return state.eaten == TERMINAL_LOSS_EATEN


def is_game_over(state: BoardState) -> bool:
    """True iff the poison has been eaten and nothing is left."""
    return state.eaten == GAME_OVER_EATEN


def parse_state(raw: str) -> BoardState:
    """
    Parse a manual state such as "0,0,-1,-1,-1,-1,-1,-1".

    Raises:
        InvalidStateError: wrong column count, non-integer value, or a
            shape that breaks the Ferrers invariant
    """
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != COLS:
        raise InvalidStateError(f"expected {COLS} columns, got {len(parts)}")

    values = []
    for col, part in enumerate(parts, start=1):
        try:
            values.append(int(part))
        except ValueError:
            raise InvalidStateError(
                f"column {col} is not an integer: {part!r}"
            ) from None

    return BoardState(tuple(values))
