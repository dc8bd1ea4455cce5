"""Policy table construction and export."""

from .table import PolicyTable, build_policy_table
from .export import (
    dump_policy,
    load_policy,
    policy_to_dict,
    policy_to_json,
    policy_from_dict,
)

__all__ = [
    "PolicyTable",
    "build_policy_table",
    "dump_policy",
    "load_policy",
    "policy_to_dict",
    "policy_to_json",
    "policy_from_dict",
]
