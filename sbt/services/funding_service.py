"""
Funding guard — makes sure the payer can cover transaction fees.

Flow:
    1. Read the balance; return immediately when it already meets the minimum
    2. Otherwise request faucet airdrops (bounded count, fixed delay between them)
    3. Re-read the balance once and report whether the minimum is now met

A failed airdrop never raises; it is logged and the next attempt proceeds.
"""
import logging
import math

from domain.constants import LAMPORTS_PER_SOL
from domain.ledger import LedgerClient
from domain.results import BalanceSnapshot
from services.retry import RetryPolicy

logger = logging.getLogger(__name__)


def default_funding_policy(settings) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=max(1, settings.airdrop_max_requests),
        delay_seconds=settings.airdrop_delay_seconds,
    )


def check_balance(ledger: LedgerClient, address: str, label: str = "Balance") -> BalanceSnapshot:
    """
    Read and log an account balance.

    A failed read is logged and reported as zero so the caller falls through
    to funding instead of crashing.
    """
    try:
        snapshot = BalanceSnapshot(lamports=ledger.get_balance(address), label=label)
        logger.info(f"💰 {snapshot}")
    except Exception as e:
        logger.warning(f"⚠️  Could not check {label.lower()}: {e}")
        snapshot = BalanceSnapshot(lamports=0, label=label)
    return snapshot


def airdrops_needed(balance_sol: float, required_sol: float, airdrop_sol: float, cap: int) -> int:
    """Number of airdrops to request, never more than `cap`."""
    if balance_sol >= required_sol or cap <= 0:
        return 0
    return min(math.ceil((required_sol - balance_sol) / airdrop_sol), cap)


def ensure_sufficient_balance(
    ledger: LedgerClient,
    address: str,
    required_sol: float,
    policy: RetryPolicy,
    airdrop_sol: float = 1.0,
    allow_funding: bool = True,
) -> bool:
    """
    Ensure `address` holds at least `required_sol`, airdropping if needed.

    Args:
        ledger: Ledger capability (balance + faucet)
        address: Base58 payer address
        required_sol: Minimum balance in SOL
        policy: max_attempts caps the number of airdrops; delay between them
        airdrop_sol: SOL requested per airdrop
        allow_funding: False on networks without a faucet (mainnet-beta)

    Returns:
        bool: True if the account now holds at least required_sol
    """
    if airdrop_sol <= 0:
        raise ValueError(f"airdrop_sol must be positive, got {airdrop_sol}")

    logger.info(f"🔍 Ensuring wallet has at least {required_sol} SOL...")
    current = check_balance(ledger, address, "Current Balance")

    if current.sol >= required_sol:
        logger.info("✅ Sufficient balance available")
        return True

    logger.warning(
        f"⚠️  Insufficient balance. Need {required_sol} SOL, have {current.sol:.4f} SOL"
    )

    if not allow_funding:
        logger.warning("Airdrops are not available on this network; fund the wallet manually")
        return False

    count = airdrops_needed(current.sol, required_sol, airdrop_sol, policy.max_attempts)
    lamports = int(airdrop_sol * LAMPORTS_PER_SOL)
    logger.info("💰 Requesting additional airdrops...")

    for i in range(count):
        try:
            logger.info(f"   📡 Airdrop attempt {i + 1}/{count}...")
            ledger.request_funds(address, lamports)
            logger.info(f"   ✅ Airdrop {i + 1} confirmed")
        except Exception as e:
            logger.warning(f"   ❌ Airdrop {i + 1} failed: {e}")

        if i < count - 1:
            policy.wait(i + 1)

    final = check_balance(ledger, address, "Final Balance")
    if final.sol >= required_sol:
        logger.info("✅ Successfully obtained sufficient balance")
        return True

    logger.error("❌ Still insufficient balance after airdrops")
    return False
