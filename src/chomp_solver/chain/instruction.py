"""
Move instruction layout for the external transaction signer.

Signing, address derivation and broadcasting happen outside this package;
this module only fixes the account order and the data bytes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..codec import encode_move
from ..config import ChainConfig
from ..core import Move


@dataclass(frozen=True)
class AccountMeta:
    pubkey: str
    is_signer: bool
    is_writable: bool


@dataclass(frozen=True)
class InstructionPlan:
    """Program id, ordered accounts and data for one move."""

    program_id: str
    accounts: Tuple[AccountMeta, ...]
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "program_id": self.program_id,
            "accounts": [
                {
                    "pubkey": meta.pubkey,
                    "is_signer": meta.is_signer,
                    "is_writable": meta.is_writable,
                }
                for meta in self.accounts
            ],
            "data": self.data.hex(),
        }


def build_move_instruction(
    move: Move,
    player: str,
    game_account: str,
    config: Optional[ChainConfig] = None,
) -> InstructionPlan:
    """
    Lay out the instruction that plays `move`.

    Account order: system program, player (signer), per-player game
    account, fee collector.

    Args:
        move: Move to play (1-indexed)
        player: Player's public key (base58)
        game_account: Player's derived game account (base58)
        config: Deployment addresses (default: mainnet deployment)

    Returns:
        InstructionPlan ready for signing

    Raises:
        IllegalMoveError: if the move is off the board
        ValueError: if an address is empty
    """
    config = config or ChainConfig()
    for name, value in (("player", player), ("game_account", game_account)):
        if not value:
            raise ValueError(f"{name} address is required")

    accounts = (
        AccountMeta(config.system_program, is_signer=False, is_writable=False),
        AccountMeta(player, is_signer=True, is_writable=True),
        AccountMeta(game_account, is_signer=False, is_writable=True),
        AccountMeta(config.fee_collector, is_signer=False, is_writable=True),
    )
    return InstructionPlan(
        program_id=config.program_id,
        accounts=accounts,
        data=encode_move(move),
    )
