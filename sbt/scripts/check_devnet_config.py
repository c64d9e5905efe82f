"""Check that the configured Solana cluster is reachable."""
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from domain.constants import EXIT_CONFIG_ERROR, EXIT_FAILURE, EXIT_OK
from exceptions import ConfigurationError
from scripts.common import load_settings
from solana_client import SolanaLedger

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ Configuration Error: {e.message}")
        return EXIT_CONFIG_ERROR

    print(f"🔍 Checking {settings.solana_cluster.label} configuration...")
    print(f"✅ RPC URL: {settings.rpc_url}")

    ledger = SolanaLedger(settings.rpc_url, settings.commitment)
    try:
        version = ledger.get_version()
        blockhash = ledger.get_latest_blockhash()
    except Exception as e:
        logger.error(f"Error connecting to {settings.rpc_url}: {e}")
        print(f"❌ Error connecting to {settings.solana_cluster.value}: {e}")
        print()
        print("Troubleshooting:")
        print("- Check your internet connection")
        print("- Try again in a few moments")
        print("- Set SOLANA_RPC_URL to a different endpoint")
        return EXIT_FAILURE

    print(f"✅ Connected to Solana {settings.solana_cluster.value} successfully!")
    print(f"✅ Solana version: {version}")
    print(f"✅ Latest blockhash: {blockhash[:8]}...")
    print()
    print("🎉 Your project is ready to run!")
    print()
    print("Next steps:")
    print("1. python scripts/create_sbt.py")
    print("2. python scripts/verify_sbt.py")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
