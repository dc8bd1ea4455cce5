"""Deployment identifiers and CLI defaults."""

from dataclasses import dataclass

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_PROGRAM_ID = "ChompZg47TcVy5fk2LxPEpW6SytFYBES5SHoqgrm8A4D"
DEFAULT_FEE_COLLECTOR = "EGJnqcxVbhJFJ6Xnchtaw8jmPSvoLXfN2gWsY9Etz5SZ"
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

DEFAULT_POLICY_PATH = "data/policy.json"
DEFAULT_DB_PATH = "data/databases/policy.db"


@dataclass(frozen=True)
class ChainConfig:
    """Addresses of the deployed game. Owned by the transaction builder."""

    program_id: str = DEFAULT_PROGRAM_ID
    fee_collector: str = DEFAULT_FEE_COLLECTOR
    system_program: str = SYSTEM_PROGRAM_ID
    rpc_url: str = DEFAULT_RPC_URL
