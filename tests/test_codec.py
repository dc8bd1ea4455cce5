"""Tests for the on-chain codec."""

from itertools import combinations_with_replacement

import pytest
from chomp_solver.codec import (
    decode_account,
    decode_board,
    decode_move,
    encode_board,
    encode_move,
    move_opcode,
)
from chomp_solver.core import (
    BoardState,
    DecodeMismatchError,
    IllegalMoveError,
    InvalidStateError,
    Move,
    TERMINAL_LOSS_EATEN,
    create_starting_state,
)


def all_ferrers_shapes():
    """Every non-increasing sequence of 8 values in [-1, 4]."""
    for eaten in combinations_with_replacement(range(4, -2, -1), 8):
        yield BoardState(eaten)


def test_decode_fresh_board():
    assert decode_board(bytes(5)) == create_starting_state()


def test_decode_column_one_is_msb():
    """0xC0 in the top row means columns 1 and 2 lost their top cell."""
    state = decode_board(bytes([0xC0, 0, 0, 0, 0]))

    assert state.eaten == (0, 0, -1, -1, -1, -1, -1, -1)


def test_decode_terminal_loss():
    state = decode_board(bytes([0xFF, 0xFF, 0xFF, 0xFF, 0xFE]))

    assert state.eaten == TERMINAL_LOSS_EATEN


def test_decode_ignores_trailing_bytes():
    state = decode_board(bytes([0xC0, 0, 0, 0, 0, 0xFF, 0x01]))

    assert state.eaten == (0, 0, -1, -1, -1, -1, -1, -1)


def test_decode_too_short():
    with pytest.raises(DecodeMismatchError, match="row bytes"):
        decode_board(bytes(4))


def test_decode_rejects_gap_in_column():
    """An eaten cell under an uneaten one cannot come from chomping."""
    with pytest.raises(DecodeMismatchError, match="below an uneaten cell"):
        decode_board(bytes([0x00, 0x80, 0, 0, 0]))


def test_decode_rejects_non_ferrers():
    """Column 2 eaten while column 1 is untouched."""
    with pytest.raises(DecodeMismatchError, match="invalid board"):
        decode_board(bytes([0x40, 0, 0, 0, 0]))


def test_decode_mismatch_is_not_invalid_state():
    """The two error kinds stay distinguishable."""
    with pytest.raises(DecodeMismatchError) as excinfo:
        decode_board(bytes([0x01, 0, 0, 0, 0]))

    assert not isinstance(excinfo.value, InvalidStateError)


def test_decode_account_missing_is_fresh_board():
    assert decode_account(None) == create_starting_state()
    assert decode_account(bytes([0xC0, 0, 0, 0, 0])).eaten[0] == 0


def test_encode_board():
    state = BoardState((2, 1, 1, 0, -1, -1, -1, -1))

    assert encode_board(state) == bytes([0xF0, 0xE0, 0x80, 0, 0])


def test_board_round_trip():
    """decode(encode(s)) == s and encode(decode(b)) == b on every valid shape."""
    count = 0
    for state in all_ferrers_shapes():
        data = encode_board(state)
        assert len(data) == 5
        assert decode_board(data) == state
        assert encode_board(decode_board(data)) == data
        count += 1

    assert count == 1287


@pytest.mark.parametrize(
    "move,opcode",
    [
        (Move(1, 2), 0x12),
        (Move(1, 1), 0x11),
        (Move(4, 6), 0x46),
        (Move(5, 8), 0x58),
    ],
)
def test_encode_move(move, opcode):
    """Row in the high nibble, column in the low nibble, both 1-indexed."""
    assert move_opcode(move) == opcode
    assert encode_move(move) == bytes([opcode])
    assert decode_move(bytes([opcode])) == move


def test_encode_move_rejects_off_board():
    with pytest.raises(IllegalMoveError):
        encode_move(Move(0, 1))
    with pytest.raises(IllegalMoveError):
        encode_move(Move(1, 9))


def test_decode_move_rejects_bad_data():
    with pytest.raises(IllegalMoveError):
        decode_move(bytes([0x09]))
    with pytest.raises(IllegalMoveError):
        decode_move(bytes([0x19]))
    with pytest.raises(IllegalMoveError, match="1 byte"):
        decode_move(bytes([0x12, 0x00]))
