"""
Transfer helper used to test non-transferability.

Creates the recipient's associated token account and moves the token in a
single transaction, so a rejected transfer leaves nothing behind.
"""
import logging

from solana.rpc.api import Client
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    TransferParams,
    create_associated_token_account,
    get_associated_token_address,
    transfer,
)

from token_scripts.utils import send_instructions

logger = logging.getLogger(__name__)


def transfer_token(
    client: Client,
    holder: Keypair,
    mint: Pubkey,
    recipient: Pubkey,
    amount: int = 1,
) -> str:
    """
    Transfer a token from the holder's associated account to a recipient.

    Args:
        client: solana.rpc.api.Client instance.
        holder: Current holder keypair (also pays fees).
        mint: Token mint address.
        recipient: Wallet receiving the token.
        amount: Units to transfer (1 for an SBT).

    Returns:
        str: Transaction ID.
    """
    source = get_associated_token_address(holder.pubkey(), mint)
    dest = get_associated_token_address(recipient, mint)

    instructions = [
        create_associated_token_account(holder.pubkey(), recipient, mint),
        transfer(TransferParams(
            program_id=TOKEN_PROGRAM_ID,
            source=source,
            dest=dest,
            owner=holder.pubkey(),
            amount=amount,
        )),
    ]

    logger.info(f"Transferring {mint}: {str(holder.pubkey())[:8]}→{str(recipient)[:8]}...")
    signature = send_instructions(client, holder, instructions)
    logger.info(f"Transfer confirmed for {mint}: {signature}")
    return signature
