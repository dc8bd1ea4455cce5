"""Abstract base class for policy stores."""

from abc import ABC, abstractmethod
from typing import Optional

from ..core import BoardState
from ..policy import PolicyTable
from ..solver import Evaluation


class PolicyStore(ABC):
    """Abstract interface for persisted policy tables."""

    @abstractmethod
    def write_table(self, table: PolicyTable) -> int:
        """
        Store every entry of a policy table, replacing existing rows.

        Args:
            table: Solved policy table

        Returns:
            Number of positions written
        """
        pass

    @abstractmethod
    def get(self, state: BoardState) -> Optional[Evaluation]:
        """
        Retrieve the evaluation for a state.

        Args:
            state: Position to look up

        Returns:
            Evaluation or None if not stored
        """
        pass

    @abstractmethod
    def count_positions(self, winning: Optional[bool] = None) -> int:
        """
        Count stored positions, optionally filtered by label.

        Args:
            winning: Optional label filter

        Returns:
            Position count
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Ensure all pending writes are persisted."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Cleanup and close connection."""
        pass
