"""
Burn (revoke) a Soul-Bound Token for governance enforcement.

The issuer thaws, burns and closes the token account. This is IRREVERSIBLE;
the script counts down before sending so Ctrl+C can cancel.

Usage:
    SBT_ADDRESS=... ISSUER_SECRET_KEY='[...]' python scripts/burn_sbt.py [--reason TEXT] [--yes]
"""
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
import time
from typing import Callable

from config import Settings
from domain.constants import EXIT_CANCELLED, EXIT_OK
from domain.enums import Operation
from scripts.common import run_operation
from services import report_service, sbt_service
from solana_client import get_ledger

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Burn (revoke) a governance SBT")
    parser.add_argument("--sbt-address", help="Mint address of the SBT (overrides SBT_ADDRESS)")
    parser.add_argument("--reason", help="Reason recorded in the report (overrides BURN_REASON)")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation countdown")
    return parser.parse_args(argv)


def countdown(seconds: int, sleep: Callable[[float], None] = time.sleep) -> None:
    """Print a countdown; KeyboardInterrupt propagates to cancel the burn."""
    print("⚠️  WARNING: This action is IRREVERSIBLE!")
    print("⚠️  The SBT will be permanently destroyed.")
    print(f"🔥 Proceeding with burn in {seconds} seconds... Press Ctrl+C to cancel")
    for i in range(seconds, 0, -1):
        print(f"   {i}... ", end="", flush=True)
        sleep(1)
    print()


def _burn(settings: Settings, args: argparse.Namespace) -> int:
    if args.sbt_address:
        settings.sbt_address = args.sbt_address
    if args.reason:
        settings.burn_reason = args.reason
    print(report_service.format_configuration(settings, Operation.BURN))

    # Configuration problems are reported before touching the network
    settings.validate_target()
    settings.validate_issuer()
    issuer = settings.issuer_keypair
    print(f"👤 Authority address: {issuer.pubkey()}")

    if not args.yes and settings.burn_countdown_seconds > 0:
        try:
            countdown(settings.burn_countdown_seconds)
        except KeyboardInterrupt:
            print("\n❌ Burn cancelled")
            return EXIT_CANCELLED

    result = sbt_service.burn_sbt(get_ledger(settings), issuer, settings.sbt_address, settings, reason=settings.burn_reason)
    print()
    print(report_service.format_burn_report(result, settings))
    return EXIT_OK


def main(argv=None) -> int:
    args = parse_args(argv)
    return run_operation(Operation.BURN, lambda settings: _burn(settings, args))


if __name__ == "__main__":
    sys.exit(main())
