"""
SBT Service — sequences the token scripts into complete operations.

Each operation is linear:
    1. Check the payer balance and top it up if needed (funding guard)
    2. Perform the ledger action inside the bounded retry loop
    3. Return a result object for the outcome reporter

Only one token model is used: an SPL mint with Metaplex metadata whose single
token sits in a token account frozen by the issuer.
"""
import logging
import time
from typing import Callable, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from domain.ledger import LedgerClient
from domain.results import BurnResult, CreationResult, VerificationResult
from exceptions import AssetNotFoundError, FundingError, OperationExhausted, VerificationError
from services.funding_service import check_balance, default_funding_policy, ensure_sufficient_balance
from services.retry import RetryPolicy, run_with_retry
from services.verification_service import classify_transfer_error, is_transfer_rejection
from token_scripts.burn_soulbound import burn_soulbound
from token_scripts.metadata_instruction import find_metadata_pda
from token_scripts.mint_soulbound import mint_soulbound
from token_scripts.transfer_token import transfer_token
from token_scripts.utils import parse_pubkey

logger = logging.getLogger(__name__)


def _fund_payer(
    ledger: LedgerClient,
    payer: Keypair,
    required_sol: float,
    settings,
    funding_policy: Optional[RetryPolicy],
) -> None:
    """Run the funding guard; raise FundingError when it gives up."""
    address = str(payer.pubkey())
    funded = ensure_sufficient_balance(
        ledger,
        address,
        required_sol,
        funding_policy or default_funding_policy(settings),
        airdrop_sol=settings.airdrop_sol,
        allow_funding=settings.airdrop_enabled,
    )
    if not funded:
        balance = check_balance(ledger, address, "Balance")
        raise FundingError(address, required_sol, balance.sol)


def _require_asset(ledger: LedgerClient, holder: Keypair, sbt_address: str) -> Pubkey:
    """
    Check the mint exists and the holder still holds the token.

    Burning closes the token account but leaves the mint, so a burned SBT is
    caught by the balance check rather than by the mint lookup.
    """
    mint = parse_pubkey(sbt_address, field="SBT_ADDRESS")
    logger.info("🔍 Verifying SBT exists...")
    if not ledger.account_exists(sbt_address):
        raise AssetNotFoundError(sbt_address)
    if ledger.token_balance(str(holder.pubkey()), sbt_address) < 1:
        raise AssetNotFoundError(
            sbt_address,
            f"SBT {sbt_address} is no longer held by {holder.pubkey()} (already burned)",
        )
    logger.info("✅ SBT exists and is valid")
    return mint


def create_sbt(
    ledger: LedgerClient,
    issuer: Keypair,
    settings,
    policy: Optional[RetryPolicy] = None,
    funding_policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> CreationResult:
    """
    Mint a Proof of Governance SBT to the issuer's wallet.

    Args:
        ledger: Ledger capability; ledger.client is handed to the token scripts
        issuer: Issuer keypair (payer and every authority)
        settings: Settings (metadata, minimum balances, retry knobs)
        policy: Retry policy for the mint; defaults to the configured one
        funding_policy: Airdrop cap/delay; defaults to the configured one
        sleep: Used for the network synchronization pause

    Returns:
        CreationResult

    Raises:
        FundingError: payer could not be funded
        OperationExhausted: every mint attempt failed
    """
    policy = policy or RetryPolicy.from_settings(settings)
    check_balance(ledger, str(issuer.pubkey()), "Initial Balance")
    _fund_payer(ledger, issuer, settings.create_min_balance_sol, settings, funding_policy)

    if settings.network_sync_seconds > 0:
        logger.info("⏳ Waiting for network synchronization...")
        sleep(settings.network_sync_seconds)

    minted = run_with_retry(
        lambda: mint_soulbound(
            ledger.client,
            issuer,
            name=settings.token_name,
            symbol=settings.token_symbol,
            uri=settings.metadata_uri,
        ),
        policy,
        label="create the Soul-Bound Token",
    )

    return CreationResult(
        mint_address=minted["mint"],
        token_account=minted["token_account"],
        signature=minted["signature"],
        metadata_address=minted["metadata"],
        metadata_uri=settings.metadata_uri,
        name=settings.token_name,
        symbol=settings.token_symbol,
    )


def burn_sbt(
    ledger: LedgerClient,
    issuer: Keypair,
    sbt_address: str,
    settings,
    reason: Optional[str] = None,
    policy: Optional[RetryPolicy] = None,
    funding_policy: Optional[RetryPolicy] = None,
) -> BurnResult:
    """
    Revoke an SBT: thaw, burn and close the issuer's token account.

    Raises:
        FundingError: authority cannot pay the fee
        AssetNotFoundError: no mint at sbt_address, or already burned
        OperationExhausted: every burn attempt failed
    """
    policy = policy or RetryPolicy.from_settings(settings)
    _fund_payer(ledger, issuer, settings.burn_min_balance_sol, settings, funding_policy)
    mint = _require_asset(ledger, issuer, sbt_address)

    signature = run_with_retry(
        lambda: burn_soulbound(ledger.client, issuer, mint),
        policy,
        label="burn the Soul-Bound Token",
    )
    return BurnResult(
        mint_address=sbt_address,
        signature=signature,
        reason=reason or settings.burn_reason,
        metadata_address=str(find_metadata_pda(mint)),
    )


def verify_sbt(
    ledger: LedgerClient,
    holder: Keypair,
    sbt_address: str,
    settings,
    policy: Optional[RetryPolicy] = None,
    funding_policy: Optional[RetryPolicy] = None,
    recipient: Optional[Pubkey] = None,
) -> VerificationResult:
    """
    Try to transfer the SBT to a fresh wallet; the ledger must refuse.

    A freeze rejection ends the retry loop at once. Other failures are
    retried, and if they persist the result is INCONCLUSIVE.

    Returns:
        VerificationResult with outcome REJECTED or INCONCLUSIVE

    Raises:
        VerificationError: the transfer went through (token is not soul-bound)
    """
    policy = policy or RetryPolicy.from_settings(settings)
    _fund_payer(ledger, holder, settings.verify_min_balance_sol, settings, funding_policy)
    mint = _require_asset(ledger, holder, sbt_address)

    recipient = recipient or Keypair().pubkey()
    logger.info(f"🎯 Recipient address: {recipient}")
    logger.info("🔄 Attempting to transfer the SBT (this should fail)...")

    try:
        signature = run_with_retry(
            lambda: transfer_token(ledger.client, holder, mint, recipient),
            policy,
            label="transfer the SBT",
            retry_on=lambda e: not is_transfer_rejection(e),
        )
    except OperationExhausted as e:
        message = str(e.last_error)
        outcome = classify_transfer_error(message)
        logger.info(f"🔍 Transfer attempt result: {outcome.value} ({message})")
        return VerificationResult(
            sbt_address=sbt_address,
            outcome=outcome,
            error_message=message,
            recipient=str(recipient),
        )

    logger.critical(f"❌ CRITICAL: transfer of {sbt_address} succeeded, TX: {signature}")
    raise VerificationError(sbt_address, signature=signature)


def asset_exists(ledger: LedgerClient, sbt_address: str) -> bool:
    """Post-creation check that the mint account is visible on the ledger."""
    try:
        return ledger.account_exists(sbt_address)
    except Exception as e:
        logger.warning(f"⚠️  Could not verify asset status: {e}")
        return False

