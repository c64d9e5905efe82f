"""
Burn (revoke) a Soulbound token held by the issuer.

One atomic transaction: thaw the frozen token account (freeze authority),
burn the single token, close the token account and return its rent.
The Metaplex metadata account is not touched and stays on chain.
"""
import logging

from solana.rpc.api import Client
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.client import Token
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    BurnParams,
    CloseAccountParams,
    ThawAccountParams,
    burn,
    close_account,
    get_associated_token_address,
    thaw_account,
)

from token_scripts.utils import send_instructions

logger = logging.getLogger(__name__)


def burn_soulbound(client: Client, issuer: Keypair, mint: Pubkey) -> str:
    """
    Burn a soulbound token.

    Args:
        client: solana.rpc.api.Client instance.
        issuer: Issuer keypair (freeze authority and holder).
        mint: Mint address of the token to burn.

    Returns:
        str: Transaction ID.

    Raises:
        ValueError: if the issuer's token account holds no token for this mint.
    """
    authority = issuer.pubkey()
    token_account = get_associated_token_address(authority, mint)

    token = Token(conn=client, pubkey=mint, program_id=TOKEN_PROGRAM_ID, payer=issuer)
    info = token.get_account_info(token_account)
    if info.amount < 1:
        raise ValueError(f"Token account {token_account} holds no token for mint {mint}")

    instructions = []
    if info.is_frozen:
        instructions.append(thaw_account(ThawAccountParams(
            program_id=TOKEN_PROGRAM_ID,
            account=token_account,
            mint=mint,
            authority=authority,
        )))
    instructions += [
        burn(BurnParams(
            program_id=TOKEN_PROGRAM_ID,
            account=token_account,
            mint=mint,
            owner=authority,
            amount=info.amount,
        )),
        close_account(CloseAccountParams(
            program_id=TOKEN_PROGRAM_ID,
            account=token_account,
            dest=authority,
            owner=authority,
        )),
    ]

    signature = send_instructions(client, issuer, instructions)
    logger.info(f"Burned token {mint} from {str(token_account)[:8]}... TXID: {signature}")
    return signature
