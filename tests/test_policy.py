"""Tests for the policy table and its export."""

import json

import pytest
from chomp_solver.core import (
    BoardState,
    GameOverError,
    InvalidStateError,
    Move,
    PolicyFormatError,
    TERMINAL_LOSS_EATEN,
    create_starting_state,
)
from chomp_solver.policy import (
    PolicyTable,
    build_policy_table,
    dump_policy,
    load_policy,
    policy_from_dict,
    policy_to_dict,
    policy_to_json,
)
from chomp_solver.solver import Evaluation, MemoSolver


def test_table_covers_reachable_states(policy_table):
    assert len(policy_table) == 1286
    assert policy_table.winning_count + policy_table.losing_count == 1286
    assert policy_table[create_starting_state()].winning_moves == (Move(1, 2),)


def test_table_iterates_in_canonical_order(policy_table):
    states = list(policy_table)

    assert states == sorted(states)
    assert states[0] == create_starting_state()
    assert states[-1] == BoardState(TERMINAL_LOSS_EATEN)


def test_table_order_independent_of_input():
    a = BoardState((0, 0, -1, -1, -1, -1, -1, -1))
    b = BoardState((1, 0, -1, -1, -1, -1, -1, -1))
    evaluation = Evaluation.loss()

    assert list(PolicyTable({b: evaluation, a: evaluation})) == [a, b]


def test_table_is_read_only(policy_table):
    with pytest.raises(TypeError):
        policy_table[create_starting_state()] = Evaluation.loss()


def test_retrograde_table_matches(policy_table):
    assert build_policy_table(method="retrograde") == policy_table


def test_unknown_method():
    with pytest.raises(ValueError, match="Unknown solve method"):
        build_policy_table(method="guess")


def test_export_entries_agree_with_solver(policy_table):
    """Re-solving each exported entry gives the same label and moves."""
    data = policy_to_dict(policy_table)
    solver = MemoSolver()

    assert len(data["states"]) == 1286
    for key, entry in data["states"].items():
        state = BoardState(tuple(int(v) for v in key.split(",")))
        evaluation = solver.evaluate(state)
        assert entry["winning"] == evaluation.winning
        assert entry["winning_moves"] == [[m.row, m.col] for m in evaluation.winning_moves]


def test_export_layout(policy_table):
    data = json.loads(policy_to_json(policy_table))

    assert data["board"] == {"rows": 5, "cols": 8}
    assert data["states"]["-1,-1,-1,-1,-1,-1,-1,-1"] == {
        "winning": True,
        "winning_moves": [[1, 2]],
    }
    assert data["states"]["4,4,4,4,4,4,4,3"] == {"winning": False, "winning_moves": []}
    assert list(data["states"])[0] == "-1,-1,-1,-1,-1,-1,-1,-1"


def test_export_is_byte_stable(policy_table, tmp_path):
    first = dump_policy(policy_table, tmp_path / "a.json")
    second = dump_policy(build_policy_table(), tmp_path / "nested" / "b.json")

    assert first.read_bytes() == second.read_bytes()
    assert first.read_text().endswith("}\n")


def test_load_round_trip(policy_table, tmp_path):
    path = dump_policy(policy_table, tmp_path / "policy.json")

    assert load_policy(path) == policy_table


def test_load_rejects_bad_key():
    data = {
        "board": {"rows": 5, "cols": 8},
        "states": {"0,1,-1,-1,-1,-1,-1,-1": {"winning": False, "winning_moves": []}},
    }
    with pytest.raises(InvalidStateError):
        policy_from_dict(data)


def test_load_rejects_inconsistent_label():
    data = {
        "board": {"rows": 5, "cols": 8},
        "states": {"-1,-1,-1,-1,-1,-1,-1,-1": {"winning": True, "winning_moves": []}},
    }
    with pytest.raises(ValueError):
        policy_from_dict(data)


def test_load_rejects_other_board_size():
    with pytest.raises(ValueError, match="board"):
        policy_from_dict({"board": {"rows": 4, "cols": 7}, "states": {}})


@pytest.mark.parametrize("method", ["memo", "retrograde"])
def test_game_over_root_rejected_by_both_methods(method):
    """Neither solver silently drops the fully eaten board."""
    with pytest.raises(GameOverError):
        build_policy_table(BoardState((4,) * 8), method=method)


@pytest.mark.parametrize(
    "data,message",
    [
        ({"states": {}}, "'board'"),
        ({"board": {"rows": 5, "cols": 8}}, "'states'"),
        ([], "JSON object"),
    ],
)
def test_load_reports_missing_sections(data, message):
    with pytest.raises(PolicyFormatError, match=message):
        policy_from_dict(data)


def test_load_rejects_malformed_entry():
    data = {
        "board": {"rows": 5, "cols": 8},
        "states": {"-1,-1,-1,-1,-1,-1,-1,-1": {"winning_moves": [[1, 2]]}},
    }
    with pytest.raises(PolicyFormatError, match="Malformed policy entry"):
        policy_from_dict(data)


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PolicyFormatError, match="not valid JSON"):
        load_policy(path)
