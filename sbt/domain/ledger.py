"""
Ledger capability used by the funding guard and the SBT service.

SolanaLedger (solana_client.py) is the real implementation; tests use an
in-memory fake with the same methods.
"""
from typing import Any, Protocol


class LedgerClient(Protocol):
    # Raw RPC handle passed to the token scripts for create / burn / transfer
    client: Any

    def get_balance(self, address: str) -> int:
        """Current balance in lamports."""
        ...

    def request_funds(self, address: str, lamports: int) -> str:
        """Request a faucet airdrop and wait for confirmation. Returns the signature."""
        ...

    def account_exists(self, address: str) -> bool:
        ...

    def token_balance(self, owner: str, mint: str) -> int:
        """Tokens of `mint` in the owner's associated token account (0 if the account is gone)."""
        ...
