"""
Main CLI for the Chomping Glass solver.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.markup import escape

from ..chain import build_move_instruction
from ..codec import decode_account
from ..config import (
    DEFAULT_DB_PATH,
    DEFAULT_FEE_COLLECTOR,
    DEFAULT_POLICY_PATH,
    DEFAULT_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    ChainConfig,
)
from ..core import (
    BoardState,
    POISON,
    ChompSolverError,
    DecodeMismatchError,
    IllegalMoveError,
    Move,
    is_legal_move,
    parse_state,
)
from ..policy import build_policy_table, dump_policy, load_policy
from ..solver import Evaluation, MemoSolver
from ..storage import SQLitePolicyStore
from ..utils.rich_display import SolverDisplay, setup_rich_logging

EXIT_USAGE = 1
EXIT_INVALID_INPUT = 2

STATE_OPTIONS = ("--state",)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_state(args) -> BoardState:
    """Board from --state, --account-hex or --account-file (fresh board if none)."""
    if args.state is not None:
        return parse_state(args.state)

    if args.account_hex is not None:
        try:
            data = bytes.fromhex(args.account_hex)
        except ValueError:
            raise DecodeMismatchError(
                f"Account data is not valid hex: {args.account_hex!r}"
            ) from None
        return decode_account(data)

    if args.account_file is not None:
        if args.account_file == "-":
            data = sys.stdin.buffer.read()
        else:
            try:
                data = Path(args.account_file).read_bytes()
            except OSError as e:
                raise ChompSolverError(
                    f"Cannot read account file {args.account_file}: {e.strerror}"
                ) from e
        return decode_account(data)

    return decode_account(None)


def evaluate_state(state: BoardState, policy_path) -> Evaluation:
    """Look the state up in an exported policy, or solve it directly."""
    if policy_path:
        try:
            table = load_policy(policy_path)
        except OSError as e:
            raise ChompSolverError(f"Cannot read policy {policy_path}: {e.strerror}") from e
        if state not in table:
            raise ChompSolverError(f"State {state.to_text()} is not in {policy_path}")
        return table[state]
    return MemoSolver().evaluate(state)


def evaluation_report(state: BoardState, evaluation: Evaluation) -> dict:
    recommended = evaluation.recommended
    return {
        "state": state.to_text(),
        "winning": evaluation.winning,
        "winning_moves": [[move.row, move.col] for move in evaluation.winning_moves],
        "recommended": [recommended.row, recommended.col] if recommended else None,
    }


def suggest_command(args, display: SolverDisplay) -> int:
    """Suggest winning moves for a board state."""
    state = resolve_state(args)
    evaluation = evaluate_state(state, args.policy)

    if args.json:
        print(json.dumps(evaluation_report(state, evaluation), indent=2))
        return 0

    display.show_header("Chomping Glass - Suggest")
    display.show_board(state)
    display.show_evaluation(evaluation)
    return 0


def export_command(args, display: SolverDisplay) -> int:
    """Build the full policy table and write it out."""
    logger = logging.getLogger(__name__)

    table = build_policy_table(method=args.method, progress=args.progress)

    if args.verify:
        solver = MemoSolver()
        mismatches = [
            state for state, evaluation in table.items()
            if solver.evaluate(state) != evaluation
        ]
        if mismatches:
            display.log_error(
                escape(
                    f"{len(mismatches)} positions disagree with the memoized solver, "
                    f"first: {mismatches[0].to_text()}"
                )
            )
            return EXIT_USAGE
        logger.info("Verified policy against the memoized solver")

    if args.format == "sqlite":
        output = args.output or DEFAULT_DB_PATH
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        with SQLitePolicyStore(str(output)) as store:
            store.write_table(table)
    else:
        output = args.output or DEFAULT_POLICY_PATH
        dump_policy(table, output)

    display.show_header("Chomping Glass - Policy Export")
    display.show_policy_summary(len(table), table.winning_count, str(output))
    return 0


def query_command(args, display: SolverDisplay) -> int:
    """Query a stored SQLite policy."""
    state = parse_state(args.state)

    if not Path(args.db_path).exists():
        display.log_error(escape(f"Policy database not found: {args.db_path}"))
        return EXIT_USAGE

    with SQLitePolicyStore(args.db_path) as store:
        total = store.count_positions()
        evaluation = store.get(state)

    if evaluation is None:
        display.log_error(
            escape(f"State {state.to_text()} not found in {args.db_path} ({total:,} positions)")
        )
        return EXIT_USAGE

    if args.json:
        print(json.dumps(evaluation_report(state, evaluation), indent=2))
        return 0

    display.show_board(state)
    display.show_evaluation(evaluation)
    return 0


def encode_move_command(args, display: SolverDisplay) -> int:
    """Lay out the instruction for an explicit or recommended move."""
    if (args.row is None) != (args.col is None):
        display.log_error("--row and --col must be given together")
        return EXIT_USAGE

    if args.row is not None:
        move = Move.of(args.row, args.col)
        if has_state_source(args):
            check_playable(resolve_state(args), move)
    else:
        state = resolve_state(args)
        evaluation = evaluate_state(state, args.policy)
        if not evaluation.winning:
            display.log_error(
                escape(f"Position {state.to_text()} is losing; specify --row/--col to move anyway")
            )
            return EXIT_USAGE
        move = evaluation.recommended

    config = ChainConfig(
        program_id=args.program,
        fee_collector=args.fee_collector,
        system_program=args.system_program,
    )
    plan = build_move_instruction(move, args.player, args.game_account, config)

    if args.json:
        report = {"move": [move.row, move.col], **plan.to_dict()}
        print(json.dumps(report, indent=2))
        return 0

    display.log_info(f"Move {move} encodes to opcode 0x{plan.data.hex().upper()}")
    display.show_instruction(plan)
    return 0


def has_state_source(args) -> bool:
    return any(
        value is not None for value in (args.state, args.account_hex, args.account_file)
    )


def check_playable(state: BoardState, move: Move) -> None:
    """Reject a move on an eaten cell. Chomping a present poison is allowed."""
    if move == POISON and state.is_cell_present(*POISON):
        return
    if not is_legal_move(state, move):
        raise IllegalMoveError(f"Move {move} cannot be played in state {state.to_text()}")


def join_state_values(argv):
    """
    Rewrite "--state VALUE" as "--state=VALUE".

    argparse reads a value starting with "-1," as an option flag.
    """
    joined = []
    args = iter(argv)
    for arg in args:
        if arg in STATE_OPTIONS:
            value = next(args, None)
            joined.append(arg if value is None else f"{arg}={value}")
        else:
            joined.append(arg)
    return joined


def add_state_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--state", help='Manual column heights, e.g. "0,0,-1,-1,-1,-1,-1,-1"'
    )
    source.add_argument(
        "--account-hex", help="Raw game account bytes as hex (row bitmasks)"
    )
    source.add_argument(
        "--account-file", help="File with raw game account bytes ('-' for stdin)"
    )
    parser.add_argument(
        "--policy", default=None, help="Exported JSON policy to read instead of solving"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chomp-solver", description="Chomping Glass solver and on-chain codec"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--rich-logs", action="store_true", help="Render log records with rich"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Suggest command
    suggest_parser = subparsers.add_parser("suggest", help="Suggest winning moves for a board state")
    add_state_arguments(suggest_parser)
    suggest_parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    suggest_parser.set_defaults(func=suggest_command)

    # Export command
    export_parser = subparsers.add_parser("export-policy", help="Export the full policy table")
    export_parser.add_argument("output", nargs="?", default=None, help="Output path")
    export_parser.add_argument(
        "--format", choices=["json", "sqlite"], default="json", help="Artifact format"
    )
    export_parser.add_argument(
        "--method",
        choices=["memo", "retrograde"],
        default="memo",
        help="Solver used to label positions (memo=memoized recursion, retrograde=layered worklist)",
    )
    export_parser.add_argument(
        "--verify", action="store_true", help="Cross-check every entry against the memoized solver"
    )
    export_parser.add_argument("--progress", action="store_true", help="Show progress bars")
    export_parser.set_defaults(func=export_command)

    # Query command
    query_parser = subparsers.add_parser("query", help="Query a stored SQLite policy")
    query_parser.add_argument("--state", required=True, help="Manual column heights")
    query_parser.add_argument("--db-path", default=DEFAULT_DB_PATH, help="Path to SQLite database file")
    query_parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    query_parser.set_defaults(func=query_command)

    # Encode-move command
    encode_parser = subparsers.add_parser(
        "encode-move", help="Lay out the move instruction for the transaction signer"
    )
    add_state_arguments(encode_parser)
    encode_parser.add_argument("--row", type=int, default=None, help="Explicit row (1-indexed)")
    encode_parser.add_argument("--col", type=int, default=None, help="Explicit column (1-indexed)")
    encode_parser.add_argument("--player", required=True, help="Player public key (signer)")
    encode_parser.add_argument("--game-account", required=True, help="Player's derived game account")
    encode_parser.add_argument("--program", default=DEFAULT_PROGRAM_ID, help="Program ID to target")
    encode_parser.add_argument("--fee-collector", default=DEFAULT_FEE_COLLECTOR, help="Fee collector account")
    encode_parser.add_argument("--system-program", default=SYSTEM_PROGRAM_ID, help=argparse.SUPPRESS)
    encode_parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    encode_parser.set_defaults(func=encode_move_command)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(join_state_values(argv))

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    if args.rich_logs:
        setup_rich_logging(args.log_level)
    else:
        setup_logging(args.log_level)

    display = SolverDisplay()
    try:
        return args.func(args, display)
    except ChompSolverError as e:
        display.log_error(escape(str(e)))
        return EXIT_INVALID_INPUT


if __name__ == "__main__":
    sys.exit(main())
