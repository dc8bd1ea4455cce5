"""Instruction layout handed to the transaction builder."""

from .instruction import AccountMeta, InstructionPlan, build_move_instruction

__all__ = ["AccountMeta", "InstructionPlan", "build_move_instruction"]
