"""
Utility helpers for token scripts.

Keypair parsing (secret-key array, base58, Solana CLI keypair file) and a
single helper that signs and submits a list of instructions.
"""
import json
import logging
from pathlib import Path
from typing import Sequence

import base58
from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SECRET_KEY_LENGTH = 64


def parse_secret_key(value: str) -> Keypair:
    """
    Build a keypair from a secret key.

    Args:
        value: JSON array of 64 ints (as printed by the creation script) or a
               base58-encoded secret key.

    Returns:
        Keypair

    Raises:
        ConfigurationError: if the value cannot be parsed.
    """
    text = value.strip()
    if text.startswith("["):
        try:
            numbers = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Secret key array is not valid JSON: {e}", field="ISSUER_SECRET_KEY")
        return keypair_from_array(numbers)

    try:
        raw = base58.b58decode(text)
    except ValueError as e:
        raise ConfigurationError(f"Secret key is not valid base58: {e}", field="ISSUER_SECRET_KEY")
    return keypair_from_array(list(raw))


def keypair_from_array(numbers: list) -> Keypair:
    if len(numbers) != SECRET_KEY_LENGTH:
        raise ConfigurationError(
            f"Secret key array must contain {SECRET_KEY_LENGTH} numbers, got {len(numbers)}",
            field="ISSUER_SECRET_KEY",
        )
    try:
        return Keypair.from_bytes(bytes(numbers))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Secret key array is invalid: {e}", field="ISSUER_SECRET_KEY")


def load_keypair_from_path(path: str) -> Keypair:
    """Load a Solana CLI keypair file (a JSON array of 64 ints)."""
    keypair_file = Path(path).expanduser()
    if not keypair_file.exists():
        raise ConfigurationError(f"Keypair file not found: {keypair_file}", field="ISSUER_KEYPAIR_PATH")
    try:
        numbers = json.loads(keypair_file.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Keypair file is not valid JSON: {e}", field="ISSUER_KEYPAIR_PATH")
    return keypair_from_array(numbers)


def parse_pubkey(value: str, field: str = "address") -> Pubkey:
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as e:
        raise ConfigurationError(f"{field} is not a valid Solana address: {value!r} ({e})", field=field)


def secret_key_array(keypair: Keypair) -> list[int]:
    """Secret key as the int array the scripts print and accept back."""
    return list(bytes(keypair))


def confirmed_opts() -> TxOpts:
    return TxOpts(skip_confirmation=False, preflight_commitment=Confirmed)


def send_instructions(
    client: Client,
    payer: Keypair,
    instructions: Sequence[Instruction],
    signers: Sequence[Keypair] = (),
) -> str:
    """
    Sign and submit instructions as one atomic transaction, then confirm it.

    Args:
        client: solana.rpc.api.Client
        payer: Fee payer (always signs)
        instructions: Instructions executed in order
        signers: Additional required signers

    Returns:
        str: Transaction signature (base58)
    """
    blockhash = client.get_latest_blockhash().value.blockhash
    message = Message.new_with_blockhash(list(instructions), payer.pubkey(), blockhash)
    txn = Transaction([payer, *signers], message, blockhash)
    signature = client.send_transaction(txn, opts=confirmed_opts()).value
    logger.debug(f"Submitted {len(instructions)} instruction(s): {signature}")
    return str(signature)
