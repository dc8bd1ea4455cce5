"""Core board state representation and rules."""

from .board_state import (
    BoardState,
    Move,
    ROWS,
    COLS,
    POISON,
    TERMINAL_LOSS_EATEN,
    is_valid,
    is_terminal_loss,
    is_game_over,
    parse_state,
)
from .errors import (
    ChompSolverError,
    InvalidStateError,
    DecodeMismatchError,
    IllegalMoveError,
    GameOverError,
    PolicyFormatError,
)
from .rules import (
    create_starting_state,
    generate_legal_moves,
    is_legal_move,
    apply_move,
)

__all__ = [
    "BoardState",
    "Move",
    "ROWS",
    "COLS",
    "POISON",
    "TERMINAL_LOSS_EATEN",
    "is_valid",
    "is_terminal_loss",
    "is_game_over",
    "parse_state",
    "ChompSolverError",
    "InvalidStateError",
    "DecodeMismatchError",
    "IllegalMoveError",
    "GameOverError",
    "PolicyFormatError",
    "create_starting_state",
    "generate_legal_moves",
    "is_legal_move",
    "apply_move",
]
