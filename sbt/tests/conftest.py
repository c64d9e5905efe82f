"""
Pytest configuration and shared fixtures for the SBT tests.

Provides an in-memory fake ledger, a recording sleep, zero-delay retry
policies and a Settings instance that never reads .env.
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import json

import pytest
from unittest.mock import MagicMock
from solders.keypair import Keypair

from config import Settings
from domain.constants import LAMPORTS_PER_SOL
from services.retry import RetryPolicy

# Wrapped SOL mint: a well-known valid address
SAMPLE_SBT_ADDRESS = "So11111111111111111111111111111111111111112"


class FakeLedger:
    """In-memory LedgerClient: each successful airdrop credits `credit_sol`."""

    def __init__(self, balance_sol: float = 0.0, credit_sol: float = 1.0,
                 failing_requests: int = 0, existing: tuple = (), burned: tuple = ()):
        self.lamports = int(balance_sol * LAMPORTS_PER_SOL)
        self.credit_sol = credit_sol
        self.failing_requests = failing_requests
        self.existing = set(existing)
        # Mints whose token account has been closed by a burn
        self.burned = set(burned)
        self.funding_requests: list[int] = []
        self.client = MagicMock(name="rpc_client")

    @property
    def balance_sol(self) -> float:
        return self.lamports / LAMPORTS_PER_SOL

    def get_balance(self, address: str) -> int:
        return self.lamports

    def request_funds(self, address: str, lamports: int) -> str:
        self.funding_requests.append(lamports)
        if len(self.funding_requests) <= self.failing_requests:
            raise RuntimeError("429 Too Many Requests: airdrop limit reached")
        self.lamports += int(self.credit_sol * LAMPORTS_PER_SOL)
        return f"airdrop_sig_{len(self.funding_requests)}"

    def account_exists(self, address: str) -> bool:
        return address in self.existing

    def token_balance(self, owner: str, mint: str) -> int:
        return 1 if mint in self.existing and mint not in self.burned else 0


class RecordingSleep:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def make_ledger():
    return FakeLedger


@pytest.fixture
def sleep_recorder() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def immediate_policy() -> RetryPolicy:
    return RetryPolicy.immediate(max_attempts=3)


@pytest.fixture
def issuer_keypair() -> Keypair:
    return Keypair.from_seed(bytes([7] * 32))


@pytest.fixture
def sample_sbt_address() -> str:
    return SAMPLE_SBT_ADDRESS


@pytest.fixture
def test_settings(issuer_keypair: Keypair) -> Settings:
    """Settings with a configured issuer and target, no .env and no pauses."""
    return Settings(
        _env_file=None,
        solana_cluster="devnet",
        solana_rpc_url="",
        issuer_secret_key=json.dumps(list(bytes(issuer_keypair))),
        issuer_keypair_path="",
        sbt_address=SAMPLE_SBT_ADDRESS,
        metadata_uri_override="",
        network_sync_seconds=0,
        burn_countdown_seconds=0,
    )
