"""Binary encodings shared with the on-chain program."""

from .onchain import (
    BOARD_BYTES,
    decode_board,
    decode_account,
    encode_board,
    encode_move,
    decode_move,
    move_opcode,
)

__all__ = [
    "BOARD_BYTES",
    "decode_board",
    "decode_account",
    "encode_board",
    "encode_move",
    "decode_move",
    "move_opcode",
]
