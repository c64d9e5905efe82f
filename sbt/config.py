"""
Configuration management for the Soul-Bound Token scripts.

Loads settings from .env via pydantic-settings; get_settings() builds them on
first use so a bad value is reported as a ConfigurationError.

Security notes:
    - The issuer secret key is never embedded in source; it comes from
      ISSUER_SECRET_KEY or ISSUER_KEYPAIR_PATH.
    - issuer_keypair is parsed once and cached for the process lifetime.
"""
import logging
from functools import cached_property, lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.keypair import Keypair

from domain.constants import (
    DEFAULT_METADATA_FILENAME,
    PLACEHOLDER_MARKERS,
    TOKEN_NAME,
    TOKEN_SYMBOL,
)
from domain.enums import Cluster
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Script settings loaded from environment variables."""

    # ── Solana network ──────────────────────────────────────────────
    solana_cluster: Cluster = Cluster.DEVNET
    solana_rpc_url: str = ""              # overrides the public cluster endpoint
    commitment: str = "confirmed"

    # ── Issuer wallet (mint / freeze / burn authority) ──────────────
    issuer_secret_key: str = ""           # JSON int array or base58
    issuer_keypair_path: str = ""         # Solana CLI keypair file

    # ── Target SBT (burn / verify) ──────────────────────────────────
    sbt_address: str = ""
    burn_reason: str = "Governance violation"
    burn_countdown_seconds: int = 5

    # ── Token metadata ──────────────────────────────────────────────
    token_name: str = TOKEN_NAME
    token_symbol: str = TOKEN_SYMBOL
    github_username: str = "denniszweigle"
    github_repo: str = "solana-sbt-assets"
    metadata_filename: str = DEFAULT_METADATA_FILENAME
    image_filename: str = "pog-token.png"
    metadata_uri_override: str = ""

    # ── Funding guard ───────────────────────────────────────────────
    create_min_balance_sol: float = 0.02
    burn_min_balance_sol: float = 0.01
    verify_min_balance_sol: float = 0.01
    airdrop_sol: float = 1.0
    airdrop_max_requests: int = 3
    airdrop_delay_seconds: float = 3.0

    # ── Action retry ────────────────────────────────────────────────
    action_max_attempts: int = 3
    action_delay_seconds: float = 5.0
    action_backoff_factor: float = 1.0
    network_sync_seconds: float = 3.0

    # ── Application ─────────────────────────────────────────────────
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def rpc_url(self) -> str:
        """RPC endpoint: explicit override, else the public cluster URL."""
        return self.solana_rpc_url or self.solana_cluster.rpc_url

    @property
    def metadata_base_url(self) -> str:
        return f"https://{self.github_username}.github.io/{self.github_repo}"

    @property
    def metadata_uri(self) -> str:
        if self.metadata_uri_override:
            return self.metadata_uri_override
        return f"{self.metadata_base_url}/metadata/{self.metadata_filename}"

    @property
    def image_url(self) -> str:
        return f"{self.metadata_base_url}/images/{self.image_filename}"

    @property
    def airdrop_enabled(self) -> bool:
        """Faucet funding only exists on devnet and testnet."""
        return self.solana_cluster.supports_airdrop

    @property
    def has_issuer_credential(self) -> bool:
        return bool(self.issuer_secret_key.strip() or self.issuer_keypair_path.strip())

    @cached_property
    def issuer_keypair(self) -> Keypair:
        """
        Parse the configured issuer credential (computed once, cached).

        Raises:
            ConfigurationError: if no credential is set or it cannot be parsed.
        """
        from token_scripts.utils import load_keypair_from_path, parse_secret_key

        if self.issuer_keypair_path.strip():
            return load_keypair_from_path(self.issuer_keypair_path.strip())
        if not self.issuer_secret_key.strip():
            raise ConfigurationError(
                "ISSUER_SECRET_KEY is not set. Paste the secret key array "
                "printed by the creation script.",
                field="ISSUER_SECRET_KEY",
            )
        return parse_secret_key(self.issuer_secret_key)

    def explorer_tx_url(self, signature: str) -> str:
        return f"https://explorer.solana.com/tx/{signature}{self.solana_cluster.explorer_suffix}"

    def explorer_address_url(self, address: str) -> str:
        return f"https://explorer.solana.com/address/{address}{self.solana_cluster.explorer_suffix}"

    def validate_issuer(self) -> None:
        """Fail fast when the issuer credential is missing or malformed."""
        if not self.has_issuer_credential:
            raise ConfigurationError(
                "ISSUER_SECRET_KEY is not set. Please paste your secret key array.",
                field="ISSUER_SECRET_KEY",
            )
        # Parsing errors surface here instead of mid-run
        _ = self.issuer_keypair

    def validate_target(self) -> None:
        """Fail fast when the SBT address is missing, a placeholder, or not base58."""
        value = self.sbt_address.strip()
        if not value or any(marker in value.upper() for marker in PLACEHOLDER_MARKERS):
            raise ConfigurationError(
                "SBT_ADDRESS is not set. Please paste the SBT address from the creation output.",
                field="SBT_ADDRESS",
            )
        from token_scripts.utils import parse_pubkey

        parse_pubkey(value, field="SBT_ADDRESS")

    def validate_metadata_uri(self) -> None:
        if not self.metadata_uri.startswith(("https://", "http://")):
            raise ConfigurationError(
                f"Metadata URI must be an http(s) URL, got: {self.metadata_uri}",
                field="METADATA_URI_OVERRIDE",
            )
        if not self.token_name or not self.token_symbol:
            raise ConfigurationError("TOKEN_NAME and TOKEN_SYMBOL must not be empty")

    def warn_if_mainnet(self) -> None:
        if self.solana_cluster is Cluster.MAINNET:
            logger.warning("⚠️  Running against mainnet-beta: airdrops are disabled and fees are real")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per script run."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@lru_cache()
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        ConfigurationError: an environment value does not validate
            (e.g. SOLANA_CLUSTER=foo). Nothing is cached in that case.
    """
    try:
        return Settings()
    except ValidationError as e:
        errors = e.errors()
        fields = [".".join(str(part) for part in error["loc"]).upper() for error in errors]
        problems = [f"{field}: {error['msg']}" for field, error in zip(fields, errors)]
        raise ConfigurationError(
            f"Invalid configuration: {'; '.join(problems)}",
            field=fields[0] if fields else None,
            details={"invalid_values": problems},
        ) from e
