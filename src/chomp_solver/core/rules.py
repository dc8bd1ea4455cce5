"""
Chomping Glass rules implementation.

Implements the fixed 5x8 rules:
- Chomping a cell eats it plus every cell above it and to its left
- The poison cell (5, 8) is never offered as a move; eating it forfeits
- The player facing a board with only the poison left has lost
"""

from typing import Iterator

from .board_state import (
    COLS,
    POISON,
    ROWS,
    UNTOUCHED,
    BoardState,
    Move,
)
from .errors import IllegalMoveError


def create_starting_state() -> BoardState:
    """
    Create the initial, untouched board.

    Returns:
        Starting BoardState
    """
    return BoardState((UNTOUCHED,) * COLS)


def generate_legal_moves(state: BoardState) -> Iterator[Move]:
    """
    Generate all legal moves, lazily.

    A move is legal if its cell is still present and is not the poison.
    Order is column-major: columns left to right, rows top to bottom within
    each column. Callers that need to restart simply call again.

    Args:
        state: Current board state

    Yields:
        Legal moves in generation order
    """
    for col in range(1, COLS + 1):
        top_eaten = state.eaten[col - 1]
        # Rows at or above top_eaten are gone; row index is 0-based here
        for row_index in range(top_eaten + 1, ROWS):
            move = Move(row_index + 1, col)
            if move == POISON:
                continue
            yield move


def is_legal_move(state: BoardState, move: Move) -> bool:
    """Check a single move without enumerating the rest."""
    row, col = move
    if not (1 <= row <= ROWS and 1 <= col <= COLS):
        return False
    if move == POISON:
        return False
    return state.is_cell_present(row, col)


def apply_move(state: BoardState, move: Move) -> BoardState:
    """
    Apply a move and return the resulting state.

    Every column up to and including the chosen one is eaten down to at
    least the chosen row. Columns to the right are untouched.

    Args:
        state: Current board state
        move: Legal move to play

    Returns:
        New BoardState after the chomp

    Raises:
        IllegalMoveError: if the move is not legal in this state
    """
    move = Move(*move)
    if not is_legal_move(state, move):
        raise IllegalMoveError(f"Illegal move {move} for state {state.to_text()}")

    target = move.row - 1
    eaten = list(state.eaten)
    for col_index in range(move.col):
        if target > eaten[col_index]:
            eaten[col_index] = target

    return BoardState(tuple(eaten))
