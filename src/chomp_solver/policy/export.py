"""
Policy table export.

The JSON artifact is canonical: entries ordered by state tuple, fixed
indentation and a trailing newline, so regenerating it from the same rules
gives byte-identical files.

Layout:
    {
      "board": {"rows": 5, "cols": 8},
      "states": {
        "-1,-1,-1,-1,-1,-1,-1,-1": {"winning": true, "winning_moves": [[1, 2]]},
        ...
      }
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..core import COLS, ROWS, InvalidStateError, Move, PolicyFormatError, parse_state
from ..solver import Evaluation, Outcome
from .table import PolicyTable

logger = logging.getLogger(__name__)


def evaluation_to_dict(evaluation: Evaluation) -> Dict[str, Any]:
    return {
        "winning": evaluation.winning,
        "winning_moves": [[move.row, move.col] for move in evaluation.winning_moves],
    }


def policy_to_dict(table: PolicyTable) -> Dict[str, Any]:
    """Structured form of the artifact (entries in canonical order)."""
    return {
        "board": {"rows": ROWS, "cols": COLS},
        "states": {
            state.to_text(): evaluation_to_dict(evaluation)
            for state, evaluation in table.items()
        },
    }


def policy_to_json(table: PolicyTable) -> str:
    return json.dumps(policy_to_dict(table), indent=2) + "\n"


def dump_policy(table: PolicyTable, path: Union[str, Path]) -> Path:
    """
    Write the JSON artifact.

    Args:
        table: Solved policy table
        path: Output file (parent directories are created)

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(policy_to_json(table), encoding="utf-8")
    logger.info(f"Policy written to {path} ({len(table):,} positions)")
    return path


def policy_from_dict(data: Dict[str, Any]) -> PolicyTable:
    """
    Rebuild a PolicyTable from its structured form.

    Raises:
        InvalidStateError: if a key is not a valid board state
        PolicyFormatError: missing sections, another board size, or a
            malformed or inconsistent entry
    """
    if not isinstance(data, dict):
        raise PolicyFormatError("Policy artifact must be a JSON object")
    for section in ("board", "states"):
        if not isinstance(data.get(section), dict):
            raise PolicyFormatError(f"Policy artifact has no {section!r} object")

    board = data["board"]
    if board.get("rows") != ROWS or board.get("cols") != COLS:
        raise PolicyFormatError(
            f"Policy is for a {board.get('rows')}x{board.get('cols')} board, "
            f"expected {ROWS}x{COLS}"
        )

    entries = {}
    for key, value in data["states"].items():
        state = parse_state(key)
        if state in entries:
            raise InvalidStateError(f"Duplicate policy entry for {key}")

        try:
            moves = tuple(Move.of(row, col) for row, col in value["winning_moves"])
            outcome = Outcome.WIN if value["winning"] else Outcome.LOSS
            entries[state] = Evaluation(outcome, moves)
        except (KeyError, TypeError, ValueError) as e:
            raise PolicyFormatError(f"Malformed policy entry for {key}: {e}") from e

    return PolicyTable(entries)


def load_policy(path: Union[str, Path]) -> PolicyTable:
    """Read a JSON artifact written by dump_policy."""
    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as e:
            raise PolicyFormatError(f"{path} is not valid JSON: {e}") from e
    table = policy_from_dict(data)
    logger.info(f"Loaded policy from {path} ({len(table):,} positions)")
    return table
