"""
Solana RPC client wrapper (devnet / testnet / mainnet-beta).
"""
import logging
from typing import Optional

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from config import get_settings

logger = logging.getLogger(__name__)


class SolanaLedger:
    """Thin wrapper over solana.rpc.api.Client implementing LedgerClient."""

    def __init__(self, rpc_url: Optional[str] = None, commitment: Optional[str] = None):
        if rpc_url is None or commitment is None:
            settings = get_settings()
            rpc_url = rpc_url or settings.rpc_url
            commitment = commitment or settings.commitment
        self.rpc_url = rpc_url
        self.commitment = Commitment(commitment)
        self._client: Optional[Client] = None

    def _initialize_client(self) -> None:
        """Initialize the Solana RPC client."""
        try:
            self._client = Client(self.rpc_url, commitment=self.commitment)
            logger.info(f"🔗 Solana RPC client ready: {self.rpc_url} ({self.commitment})")
        except Exception as e:
            logger.error(f"Failed to initialize Solana client: {e}")
            raise

    @property
    def client(self) -> Client:
        """Get the RPC client instance."""
        if self._client is None:
            self._initialize_client()
        return self._client

    def get_balance(self, address: str) -> int:
        """Current balance of an account in lamports."""
        try:
            return self.client.get_balance(Pubkey.from_string(str(address))).value
        except Exception as e:
            logger.error(f"Error fetching balance for {str(address)[:8]}...: {e}")
            raise

    def request_funds(self, address: str, lamports: int) -> str:
        """
        Request a faucet airdrop and wait until it is confirmed.

        Args:
            address: Base58 account address to fund
            lamports: Amount to request

        Returns:
            Airdrop transaction signature
        """
        try:
            signature = self.client.request_airdrop(Pubkey.from_string(str(address)), lamports).value
            self.client.confirm_transaction(signature, commitment=self.commitment)
            logger.info(f"Airdrop confirmed: {signature}")
            return str(signature)
        except Exception as e:
            logger.error(f"Airdrop request failed: {e}")
            raise

    def account_exists(self, address: str) -> bool:
        try:
            return self.client.get_account_info(Pubkey.from_string(str(address))).value is not None
        except Exception as e:
            logger.error(f"Error fetching account info for {str(address)[:8]}...: {e}")
            raise

    def token_balance(self, owner: str, mint: str) -> int:
        """Amount held in the owner's associated token account; 0 once it is closed."""
        token_account = get_associated_token_address(Pubkey.from_string(str(owner)), Pubkey.from_string(str(mint)))
        try:
            if self.client.get_account_info(token_account).value is None:
                return 0
            return int(self.client.get_token_account_balance(token_account).value.amount)
        except Exception as e:
            logger.error(f"Error fetching token balance for {str(token_account)[:8]}...: {e}")
            raise

    def get_version(self) -> str:
        """Version string of the connected node (e.g. '1.18.22')."""
        return self.client.get_version().value.solana_core

    def get_latest_blockhash(self) -> str:
        return str(self.client.get_latest_blockhash().value.blockhash)


_ledger: SolanaLedger | None = None


def get_ledger(settings=None) -> SolanaLedger:
    """Lazily create the process-wide ledger client."""
    global _ledger
    if _ledger is None:
        if settings is not None:
            _ledger = SolanaLedger(settings.rpc_url, settings.commitment)
        else:
            _ledger = SolanaLedger()
    return _ledger
