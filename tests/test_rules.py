"""Tests for game rules."""

import pytest
from chomp_solver.core import (
    BoardState,
    IllegalMoveError,
    Move,
    POISON,
    TERMINAL_LOSS_EATEN,
    apply_move,
    create_starting_state,
    generate_legal_moves,
    is_legal_move,
)


def test_create_starting_state():
    """Test starting state creation."""
    state = create_starting_state()

    assert state.eaten == (-1,) * 8
    assert state.cells_remaining == 40


def test_legal_moves_at_start():
    """Every cell but the poison is playable at the start."""
    moves = list(generate_legal_moves(create_starting_state()))

    assert len(moves) == 39
    assert POISON not in moves
    assert moves[:6] == [
        Move(1, 1),
        Move(2, 1),
        Move(3, 1),
        Move(4, 1),
        Move(5, 1),
        Move(1, 2),
    ]
    assert moves[-1] == Move(4, 8)


def test_legal_moves_skip_eaten_cells():
    state = BoardState((2, 0, 0, -1, -1, -1, -1, -1))
    moves = list(generate_legal_moves(state))

    assert Move(1, 1) not in moves
    assert Move(3, 1) not in moves
    assert Move(4, 1) in moves
    assert Move(1, 2) not in moves
    assert Move(2, 2) in moves
    assert Move(1, 4) in moves


def test_legal_moves_restartable():
    """Calling again yields the same sequence."""
    state = BoardState((1, 0, -1, -1, -1, -1, -1, -1))

    assert list(generate_legal_moves(state)) == list(generate_legal_moves(state))


def test_terminal_loss_has_no_moves():
    assert list(generate_legal_moves(BoardState(TERMINAL_LOSS_EATEN))) == []


def test_is_legal_move():
    state = BoardState((0, 0, -1, -1, -1, -1, -1, -1))

    assert is_legal_move(state, Move(2, 1))
    assert not is_legal_move(state, Move(1, 1))
    assert not is_legal_move(state, POISON)
    assert not is_legal_move(state, Move(6, 1))
    assert not is_legal_move(state, Move(1, 9))


def test_simple_move():
    """Chomping (1, 2) eats the top cell of columns 1 and 2."""
    next_state = apply_move(create_starting_state(), Move(1, 2))

    assert next_state.eaten == (0, 0, -1, -1, -1, -1, -1, -1)


def test_move_raises_left_prefix():
    """Columns left of the chomp are eaten down to at least its row."""
    state = BoardState((0, 0, -1, -1, -1, -1, -1, -1))

    next_state = apply_move(state, Move(3, 4))

    assert next_state.eaten == (2, 2, 2, 2, -1, -1, -1, -1)


def test_move_keeps_deeper_columns():
    state = BoardState((3, 1, 1, -1, -1, -1, -1, -1))

    next_state = apply_move(state, Move(2, 4))

    assert next_state.eaten == (3, 1, 1, 1, -1, -1, -1, -1)


def test_move_leaves_original_untouched():
    state = create_starting_state()
    apply_move(state, Move(4, 6))

    assert state == create_starting_state()


def test_illegal_move_rejected():
    state = BoardState((0, 0, -1, -1, -1, -1, -1, -1))

    with pytest.raises(IllegalMoveError, match="Illegal move"):
        apply_move(state, Move(1, 1))
    with pytest.raises(IllegalMoveError):
        apply_move(state, POISON)
    with pytest.raises(IllegalMoveError):
        apply_move(state, Move(0, 3))


def test_moves_strictly_increase_eaten_cells(policy_table):
    """Every legal move eats at least one cell and keeps the shape valid."""
    for state in policy_table:
        for move in generate_legal_moves(state):
            next_state = apply_move(state, move)
            assert next_state.cells_eaten > state.cells_eaten


def test_apply_move_accepts_plain_pair():
    """A (row, col) tuple is played like a Move."""
    next_state = apply_move(create_starting_state(), (1, 2))

    assert next_state.eaten == (0, 0, -1, -1, -1, -1, -1, -1)
    with pytest.raises(IllegalMoveError):
        apply_move(next_state, (1, 1))
