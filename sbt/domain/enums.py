"""
Domain enums (minimal set used for clarity in services).
"""

from enum import Enum


class Cluster(str, Enum):
    DEVNET = "devnet"
    TESTNET = "testnet"
    MAINNET = "mainnet-beta"

    @property
    def rpc_url(self) -> str:
        return f"https://api.{self.value}.solana.com"

    @property
    def label(self) -> str:
        """Human-readable network name, as written in the metadata attributes."""
        return {
            Cluster.DEVNET: "Solana Devnet",
            Cluster.TESTNET: "Solana Testnet",
            Cluster.MAINNET: "Solana Mainnet",
        }[self]

    @property
    def explorer_suffix(self) -> str:
        if self is Cluster.MAINNET:
            return ""
        return f"?cluster={self.value}"

    @property
    def supports_airdrop(self) -> bool:
        return self is not Cluster.MAINNET


class TransferOutcome(str, Enum):
    REJECTED = "REJECTED"          # expected: the token is soul-bound
    ACCEPTED = "ACCEPTED"          # contract violation: the token moved
    INCONCLUSIVE = "INCONCLUSIVE"  # failed for an unrelated reason


class Operation(str, Enum):
    CREATE = "create"
    BURN = "burn"
    VERIFY = "verify"
