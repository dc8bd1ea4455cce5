"""
On-chain board and move encoding.

Account layout read by the deployed program's client:
- Bytes 0..4 are row bitmasks, top row first
- Within a row byte, column 1 is the most significant bit
- A set bit means that cell has been eaten

A move is a single instruction byte: 1-indexed row in the high nibble,
1-indexed column in the low nibble. Example: (1, 2) -> 0x12.
"""

from typing import Optional

from ..core import (
    COLS,
    ROWS,
    BoardState,
    DecodeMismatchError,
    IllegalMoveError,
    InvalidStateError,
    Move,
    create_starting_state,
)

BOARD_BYTES = ROWS


def _column_mask(col_index: int) -> int:
    """Bit for a 0-indexed column within a row byte."""
    return 1 << (7 - col_index)


def decode_board(data: bytes) -> BoardState:
    """
    Decode row bitmasks into a BoardState.

    Each column's height is the number of contiguous eaten rows from the
    top. Trailing bytes after the board are ignored.

    Args:
        data: Raw account bytes

    Returns:
        Decoded BoardState

    Raises:
        DecodeMismatchError: data too short, an eaten cell below an uneaten
            one in the same column, or a non-Ferrers shape
    """
    if len(data) < BOARD_BYTES:
        raise DecodeMismatchError(
            f"Board needs {BOARD_BYTES} row bytes, got {len(data)}"
        )

    eaten = []
    for col_index in range(COLS):
        mask = _column_mask(col_index)
        height = -1
        for row_index in range(ROWS):
            if data[row_index] & mask:
                if height != row_index - 1:
                    raise DecodeMismatchError(
                        f"Column {col_index + 1} has eaten row {row_index + 1} "
                        f"below an uneaten cell (rows: {data[:BOARD_BYTES].hex()})"
                    )
                height = row_index
        eaten.append(height)

    try:
        return BoardState(tuple(eaten))
    except InvalidStateError as e:
        raise DecodeMismatchError(
            f"Row bytes {data[:BOARD_BYTES].hex()} decode to an invalid board: {e}"
        ) from e


def decode_account(data: Optional[bytes]) -> BoardState:
    """Decode account data; a missing account means a fresh board."""
    if data is None:
        return create_starting_state()
    return decode_board(data)


def encode_board(state: BoardState) -> bytes:
    """
    Encode a BoardState into row bitmasks.

    Exact inverse of decode_board for valid boards.
    """
    rows = bytearray(BOARD_BYTES)
    for col_index, height in enumerate(state.eaten):
        for row_index in range(height + 1):
            rows[row_index] |= _column_mask(col_index)
    return bytes(rows)


def move_opcode(move: Move) -> int:
    """Instruction byte for a move as an int."""
    move = Move.of(*move)
    return ((move.row & 0xF) << 4) | (move.col & 0xF)


def encode_move(move: Move) -> bytes:
    """
    Encode a move as instruction data.

    Raises:
        IllegalMoveError: if the move is off the board
    """
    return bytes([move_opcode(move)])


def decode_move(data: bytes) -> Move:
    """
    Decode one instruction byte back into a move.

    Raises:
        IllegalMoveError: wrong length or coordinates off the board
    """
    if len(data) != 1:
        raise IllegalMoveError(f"Move instruction is 1 byte, got {len(data)}")
    opcode = data[0]
    return Move.of(opcode >> 4, opcode & 0xF)
