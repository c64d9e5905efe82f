"""
Create a Proof of Governance Soul-Bound Token.

Steps:
  1. Load (or generate) the issuer wallet
  2. Check the balance and airdrop if needed
  3. Mint the token with metadata and freeze it, with retries
  4. Print the addresses and keys needed for verify / burn

Usage:
    python scripts/create_sbt.py [--metadata-uri URL]
"""
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging

from solders.keypair import Keypair

from config import Settings
from domain.constants import EXIT_OK
from domain.enums import Operation
from scripts.common import run_operation
from services import report_service, sbt_service
from services.funding_service import check_balance
from solana_client import get_ledger
from token_scripts.utils import secret_key_array

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mint a non-transferable governance SBT")
    parser.add_argument("--metadata-uri", help="Metadata JSON URL (overrides the GitHub Pages URL)")
    return parser.parse_args(argv)


def _create(settings: Settings, args: argparse.Namespace) -> int:
    if args.metadata_uri:
        settings.metadata_uri_override = args.metadata_uri
    print(report_service.format_configuration(settings, Operation.CREATE))

    settings.validate_metadata_uri()
    settings.warn_if_mainnet()

    generated = not settings.has_issuer_credential
    if generated:
        logger.info("🆕 Generating new issuer wallet...")
        issuer = Keypair()
    else:
        logger.info("🔄 Reusing existing wallet with funds...")
        issuer = settings.issuer_keypair
    issuer_address = str(issuer.pubkey())

    print(report_service.format_issuer(issuer_address, secret_key_array(issuer), generated))
    print()

    ledger = get_ledger(settings)
    result = sbt_service.create_sbt(ledger, issuer, settings)

    check_balance(ledger, issuer_address, "After Creation Balance")
    verified = sbt_service.asset_exists(ledger, result.mint_address)

    print()
    print(report_service.format_creation_report(result, issuer_address, settings, verified=verified))
    if generated:
        print(f"🔑 Issuer Secret Key: {secret_key_array(issuer)}")
    return EXIT_OK


def main(argv=None) -> int:
    args = parse_args(argv)
    return run_operation(Operation.CREATE, lambda settings: _create(settings, args))


if __name__ == "__main__":
    sys.exit(main())
