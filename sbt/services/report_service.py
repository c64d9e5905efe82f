"""
Outcome reporter — turns results and errors into terminal reports.

Purely presentational: every function returns a string and has no side
effects. Scripts print what these return.
"""
from domain.enums import Operation, TransferOutcome
from domain.results import BurnResult, CreationResult, VerificationResult
from exceptions import (
    AssetNotFoundError,
    ConfigurationError,
    FundingError,
    OperationExhausted,
    SBTError,
    VerificationError,
)

def section(title: str, char: str = "=") -> str:
    return f"{title}\n{char * max(len(title), 20)}"


def _lines(*lines: str) -> str:
    return "\n".join(lines)


def format_configuration(settings, operation: Operation) -> str:
    """Banner printed before any network call."""
    lines = [section(f"🔧 Soul-Bound Token: {operation.value}")]
    lines.append(f"🌐 Network: {settings.solana_cluster.label} ({settings.rpc_url})")
    if operation is Operation.CREATE:
        lines += [
            f"📁 GitHub Username: {settings.github_username}",
            f"📁 Repository: {settings.github_repo}",
            f"🌐 Metadata URL: {settings.metadata_uri}",
            f"🏷️  Token: {settings.token_name} ({settings.token_symbol})",
            "🔥 Soul-Bound: Yes (freeze authority controlled)",
            "🔥 Burnable: Yes (by authority only)",
            "📊 Standard: Token Metadata",
        ]
    else:
        lines.append(f"🎯 SBT Address: {settings.sbt_address or '(not set)'}")
    if operation is Operation.BURN:
        lines.append(f"📋 Reason: {settings.burn_reason}")
    return _lines(*lines, "")


def format_issuer(address: str, secret_key: list[int], generated: bool) -> str:
    """Issuer banner; the secret key is only echoed for a freshly generated wallet."""
    if not generated:
        return _lines(f"💳 Issuer address: {address}", "🔄 Reusing configured wallet")
    return _lines(
        f"💳 Issuer address: {address}",
        f"🔑 Issuer secret key: {secret_key}",
        "⚠️  Save the secret key above - you need it to burn tokens!",
    )


def format_creation_report(
    result: CreationResult,
    issuer_address: str,
    settings,
    verified: bool = True,
) -> str:
    lines = [
        section("🎉 Soul-Bound Token created successfully!"),
        f"🏷️  Token Name: {result.name} ({result.symbol})",
        f"🆔 SBT Address: {result.mint_address}",
        f"🪪 Token Account: {result.token_account}",
        f"📄 Metadata URI: {result.metadata_uri}",
        f"🔐 Transaction: {result.signature}",
        f"🌐 SBT Explorer: {settings.explorer_address_url(result.mint_address)}",
        f"🌐 Tx Explorer: {settings.explorer_tx_url(result.signature)}",
        "",
        section("📋 IMPORTANT INFORMATION - SAVE THIS:"),
        f"🔑 Issuer Address: {issuer_address}",
        f"🎯 SBT Address: {result.mint_address}",
        "",
        "⚠️  NEXT STEPS:",
        "1. Save the issuer secret key - needed for burning tokens",
        "2. Save the SBT address - needed for verification tests",
        "3. View the transaction on Solana Explorer using the link above",
        f"4. Run verification: SBT_ADDRESS={result.mint_address} python scripts/verify_sbt.py",
        "5. To revoke/burn: python scripts/burn_sbt.py with the same SBT_ADDRESS",
        "",
    ]
    if verified:
        lines.append("✅ SUCCESS: the SBT exists and its token account is frozen (Soul-Bound)")
    else:
        lines.append("⚠️  WARNING: Could not verify token creation - check the Explorer link")
    return _lines(*lines)


def format_burn_report(result: BurnResult, settings) -> str:
    lines = [
        section("✅ Soul-Bound Token burned successfully!"),
        f"🔥 Burned SBT: {result.mint_address}",
        f"🔐 Transaction: {result.signature}",
        f"🌐 Explorer: {settings.explorer_tx_url(result.signature)}",
        f"📋 Reason: {result.reason}",
        f"⏰ Burned at: {result.burned_at.isoformat()}",
        "",
        "📋 Action completed:",
        "   ✅ SBT permanently destroyed",
        "   ✅ Governance rights revoked",
        "   ✅ Token account closed and rent returned to the issuer",
    ]
    if result.metadata_address:
        lines += [
            "",
            "ℹ️  The Metaplex metadata account stays on chain (name, symbol and creator remain visible):",
            f"   {settings.explorer_address_url(result.metadata_address)}",
        ]
    return _lines(*lines)


def format_verification_report(result: VerificationResult) -> str:
    if result.outcome is TransferOutcome.REJECTED:
        return _lines(
            "✅ SUCCESS: The SBT is properly non-transferable!",
            "",
            section("🎉 Verification Results:"),
            "✅ SBT exists and is accessible",
            "✅ Transfer attempt was properly rejected",
            "✅ Token account is frozen (Soul-Bound)",
            f"   Ledger response: {result.error_message}",
        )
    if result.outcome is TransferOutcome.ACCEPTED:
        return format_contract_violation(result.sbt_address)
    return _lines(
        "⚠️  Unexpected error during transfer attempt:",
        f"   {result.error_message}",
        "",
        "💡 This might indicate a different issue. Common causes:",
        "   - Network connectivity problems",
        "   - Incorrect SBT address",
        "   - Insufficient SOL for transaction fees",
        "",
        "🔍 Please verify the SBT address and try again.",
    )


def format_contract_violation(sbt_address: str, signature: str | None = None) -> str:
    lines = [
        section("❌ CRITICAL ERROR: Transfer was successful!"),
        f"🎯 SBT Address: {sbt_address}",
    ]
    if signature:
        lines.append(f"🔐 Transfer Transaction: {signature}")
    lines += [
        "",
        "🚨 This means the SBT is NOT properly configured as non-transferable.",
        "   The token should have failed to transfer.",
        "   Check that the token account was frozen by the creation script.",
    ]
    return _lines(*lines)


def format_config_error(error: ConfigurationError, operation: Operation) -> str:
    lines = [section("❌ Configuration Error:"), f"❌ {error.message}", "", "📋 Steps to fix:"]
    invalid_values = error.details.get("invalid_values")
    if invalid_values:
        lines += [
            "1. Correct these values in .env or the environment:",
            *[f"   - {problem}" for problem in invalid_values],
            "2. SOLANA_CLUSTER must be one of: devnet, testnet, mainnet-beta",
        ]
    elif operation is Operation.CREATE:
        lines += [
            "1. Set ISSUER_SECRET_KEY (or ISSUER_KEYPAIR_PATH) in .env, or leave both empty to generate a wallet",
            "2. Check GITHUB_USERNAME / GITHUB_REPO / METADATA_URI_OVERRIDE",
        ]
    else:
        lines += [
            "1. Run the creation script first: python scripts/create_sbt.py",
            "2. Copy the SBT address from its output into SBT_ADDRESS",
            "3. Copy the issuer secret key array into ISSUER_SECRET_KEY",
        ]
    return _lines(*lines)


def troubleshooting_steps(error: Exception, operation: Operation, settings) -> list[str]:
    """Guidance tailored to the operation and to recognizable error text."""
    cluster = settings.solana_cluster.value
    message = str(error.last_error if isinstance(error, OperationExhausted) else error).lower()

    if isinstance(error, FundingError) or "insufficient" in message:
        steps = [
            f"Fund {getattr(error, 'address', 'the issuer wallet')} manually: https://faucet.solana.com/",
            "Faucet airdrops are rate limited; wait 5-10 minutes and retry",
        ]
        if not settings.airdrop_enabled:
            steps.append(f"Airdrops are unavailable on {cluster}; transfer SOL to the wallet")
        return steps

    if isinstance(error, AssetNotFoundError) or "account not found" in message:
        return [
            "SBT address is incorrect",
            "SBT has already been burned",
            f"SBT doesn't exist on {cluster}",
        ]

    if "authority" in message or "owner does not match" in message:
        return [
            "You are not the freeze/burn authority for this SBT",
            "Secret key is incorrect",
            "Only the original issuer can burn the token",
        ]

    if operation is Operation.CREATE:
        return [
            "Check that your metadata URLs are working: python scripts/check_metadata_urls.py",
            "Verify your metadata.json is valid JSON",
            f"Check Solana {cluster} status: https://status.solana.com/",
            f"Try running the script again ({cluster} can be unstable)",
            "If balance issues persist, wait 5-10 minutes and retry",
        ]
    if operation is Operation.BURN:
        return [
            "Verify the ISSUER_SECRET_KEY is correct",
            "Verify the SBT_ADDRESS is correct",
            "Ensure you have sufficient SOL for the transaction",
            "Check that you are the freeze/burn authority for this SBT",
            "Verify the SBT still exists and hasn't been burned already",
        ]
    return [
        "Check your network connection: python scripts/check_devnet_config.py",
        "Verify the SBT_ADDRESS is correct",
        "Ensure the holder wallet has SOL for fees",
    ]


def format_failure_report(error: Exception, operation: Operation, settings) -> str:
    if isinstance(error, VerificationError):
        return format_contract_violation(error.sbt_address, error.signature)

    title = {
        Operation.CREATE: "💥 Error creating Soul-Bound Token:",
        Operation.BURN: "💥 Error burning Soul-Bound Token:",
        Operation.VERIFY: "💥 Error verifying Soul-Bound Token:",
    }[operation]
    message = error.message if isinstance(error, SBTError) else str(error)

    lines = [section(title), f"❌ {message}", "", "💡 Troubleshooting Steps:"]
    for i, step in enumerate(troubleshooting_steps(error, operation, settings), start=1):
        lines.append(f"{i}. {step}")
    return _lines(*lines)
