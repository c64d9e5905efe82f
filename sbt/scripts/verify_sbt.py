"""
Verify an SBT is non-transferable by attempting to transfer it.

The transfer is expected to FAIL. A freeze rejection is reported as success;
a successful transfer is a critical contract violation (exit 1).

Usage:
    SBT_ADDRESS=... ISSUER_SECRET_KEY='[...]' python scripts/verify_sbt.py
"""
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging

from config import Settings
from domain.constants import EXIT_FAILURE, EXIT_OK
from domain.enums import Operation
from scripts.common import run_operation
from services import report_service, sbt_service
from solana_client import get_ledger

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify a governance SBT cannot be transferred")
    parser.add_argument("--sbt-address", help="Mint address of the SBT (overrides SBT_ADDRESS)")
    return parser.parse_args(argv)


def _verify(settings: Settings, args: argparse.Namespace) -> int:
    if args.sbt_address:
        settings.sbt_address = args.sbt_address
    print(report_service.format_configuration(settings, Operation.VERIFY))

    settings.validate_target()
    settings.validate_issuer()
    holder = settings.issuer_keypair
    print(f"💳 Holder address: {holder.pubkey()}")

    result = sbt_service.verify_sbt(get_ledger(settings), holder, settings.sbt_address, settings)
    print()
    print(report_service.format_verification_report(result))
    return EXIT_OK if result.is_soul_bound else EXIT_FAILURE


def main(argv=None) -> int:
    args = parse_args(argv)
    return run_operation(Operation.VERIFY, lambda settings: _verify(settings, args))


if __name__ == "__main__":
    sys.exit(main())
