"""
Result objects handed from the SBT service to the outcome reporter.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from domain.constants import LAMPORTS_PER_SOL
from domain.enums import TransferOutcome


@dataclass(frozen=True)
class BalanceSnapshot:
    """A balance read at one point in time; never cached."""
    lamports: int
    label: str = "Balance"

    @property
    def sol(self) -> float:
        return self.lamports / LAMPORTS_PER_SOL

    def __str__(self) -> str:
        return f"{self.label}: {self.sol:.4f} SOL ({self.lamports} lamports)"


@dataclass(frozen=True)
class CreationResult:
    mint_address: str
    token_account: str
    signature: str
    metadata_address: str
    metadata_uri: str
    name: str
    symbol: str


@dataclass(frozen=True)
class BurnResult:
    mint_address: str
    signature: str
    reason: str
    metadata_address: Optional[str] = None
    burned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class VerificationResult:
    sbt_address: str
    outcome: TransferOutcome
    error_message: Optional[str] = None
    recipient: Optional[str] = None

    @property
    def is_soul_bound(self) -> bool:
        return self.outcome is TransferOutcome.REJECTED
