"""Shared fixtures."""

import pytest

from chomp_solver.policy import build_policy_table
from chomp_solver.solver import MemoSolver


@pytest.fixture(scope="session")
def solver():
    """One memoized solver shared across the session."""
    return MemoSolver()


@pytest.fixture(scope="session")
def policy_table():
    """Full policy table from the untouched board."""
    return build_policy_table()
