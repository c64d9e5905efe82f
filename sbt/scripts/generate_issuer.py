"""Generate a new issuer wallet and print the values to put in .env."""
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import json
from pathlib import Path

from solders.keypair import Keypair

from domain.constants import EXIT_CONFIG_ERROR, EXIT_OK
from exceptions import ConfigurationError
from scripts.common import load_settings
from token_scripts.utils import secret_key_array


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate a Solana issuer keypair")
    parser.add_argument("--out", help="Also write a Solana CLI keypair file to this path")
    args = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ Configuration Error: {e.message}")
        return EXIT_CONFIG_ERROR

    keypair = Keypair()
    secret = secret_key_array(keypair)

    print("🔑 Generated issuer wallet")
    print("=" * 60)
    print(f"📍 Address: {keypair.pubkey()}")
    print()
    print("📝 Add to .env:")
    print(f"ISSUER_SECRET_KEY={json.dumps(secret, separators=(',', ':'))}")

    if args.out:
        out_path = Path(args.out).expanduser()
        out_path.write_text(json.dumps(secret))
        os.chmod(out_path, 0o600)
        print(f"ISSUER_KEYPAIR_PATH={out_path}")

    if settings.airdrop_enabled:
        print()
        print(f"🪙 Fund it on {settings.solana_cluster.value}: https://faucet.solana.com/")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
