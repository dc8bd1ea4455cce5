"""
Rich-based output for the CLI.

Provides clean, formatted output with:
- Board rendering
- Evaluation and instruction tables
- Policy summaries
"""

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..chain import InstructionPlan
from ..core import COLS, POISON, ROWS, BoardState
from ..solver import Evaluation

console = Console()
logger = logging.getLogger(__name__)


class SolverDisplay:
    """
    Rich-based display for solver results.

    Shows:
    - Current board
    - Win/loss label and winning moves
    - Instruction layouts and policy statistics
    """

    def __init__(self, output: Optional[Console] = None):
        """
        Initialize solver display.

        Args:
            output: Console to print to (default: shared stdout console)
        """
        self.console = output or console

    def log(self, message: str, style: str = ""):
        """Log a message using rich console."""
        self.console.print(message, style=style)

    def log_info(self, message: str):
        """Log info message."""
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def log_success(self, message: str):
        """Log success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def log_warning(self, message: str):
        """Log warning message."""
        self.console.print(f"[yellow]⚠[/yellow]  {message}")

    def log_error(self, message: str):
        """Log error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def show_header(self, title: str):
        """Show command header."""
        self.console.rule(f"[bold blue]{title}[/bold blue]")

    def board_table(self, state: BoardState) -> Table:
        """Create a grid for the board: o present, . eaten, X poison."""
        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("", style="dim", justify="right")
        for col in range(1, COLS + 1):
            table.add_column(str(col), justify="center")

        for row in range(1, ROWS + 1):
            cells = []
            for col in range(1, COLS + 1):
                if not state.is_cell_present(row, col):
                    cells.append("[dim].[/dim]")
                elif (row, col) == POISON:
                    cells.append("[bold red]X[/bold red]")
                else:
                    cells.append("[green]o[/green]")
            table.add_row(str(row), *cells)

        return table

    def show_board(self, state: BoardState):
        """Show the board inside a panel titled with its canonical text."""
        self.console.print(
            Panel(self.board_table(state), title=state.to_text(), expand=False)
        )

    def show_evaluation(self, evaluation: Evaluation):
        """Show the label and the winning moves."""
        if evaluation.winning:
            moves = ", ".join(str(move) for move in evaluation.winning_moves)
            self.log_success("Winning position")
            self.log(f"Winning moves: {moves}")
            self.log(f"Recommended move: [bold]{evaluation.recommended}[/bold]")
        else:
            self.log_warning(
                "No forced win from this position; play for asymmetry and hope "
                "the opponent errs."
            )

    def show_instruction(self, plan: InstructionPlan):
        """Show an instruction layout."""
        table = Table(title=f"Program {plan.program_id}")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Account", style="cyan")
        table.add_column("Signer")
        table.add_column("Writable")

        for index, meta in enumerate(plan.accounts):
            table.add_row(
                str(index),
                meta.pubkey,
                "yes" if meta.is_signer else "no",
                "yes" if meta.is_writable else "no",
            )

        self.console.print(table)
        self.log(f"Instruction data: [bold]0x{plan.data.hex().upper()}[/bold]")

    def show_policy_summary(self, total: int, winning: int, destination: str):
        """Show where a policy was written and its label counts."""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Positions", f"{total:,}")
        table.add_row("Winning", f"{winning:,}")
        table.add_row("Losing", f"{total - winning:,}")
        table.add_row("Written to", destination)
        self.console.print(table)


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add rich handler
    rich_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
