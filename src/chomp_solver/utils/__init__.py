"""Utility modules for the Chomping Glass solver."""

from .rich_display import SolverDisplay, setup_rich_logging

__all__ = [
    "SolverDisplay",
    "setup_rich_logging",
]
