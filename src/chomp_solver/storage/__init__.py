"""Storage backends for exported policy tables."""

from .base import PolicyStore
from .sqlite import SQLitePolicyStore

__all__ = ["PolicyStore", "SQLitePolicyStore"]
