"""
Mint a Soulbound (non-transferable) governance token on Solana.

Creates an SPL mint with:
    decimals=0, supply=1, freeze authority = issuer
plus a Metaplex metadata account, freezes the issuer's token account and
revokes the mint authority so the supply is fixed.
The frozen account is what makes the token soul-bound: only the freeze
authority can thaw it, so the holder cannot transfer it.
"""
import logging

from solana.rpc.api import Client
from solders.keypair import Keypair
from spl.token.client import Token
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    AuthorityType,
    FreezeAccountParams,
    MintToParams,
    SetAuthorityParams,
    create_associated_token_account,
    freeze_account,
    get_associated_token_address,
    mint_to,
    set_authority,
)

from token_scripts.metadata_instruction import create_metadata_instruction, find_metadata_pda
from token_scripts.utils import send_instructions

logger = logging.getLogger(__name__)


def mint_soulbound(
    client: Client,
    issuer: Keypair,
    name: str,
    symbol: str,
    uri: str,
) -> dict:
    """
    Mint a soulbound token to the issuer's own wallet.

    Args:
        client: solana.rpc.api.Client instance.
        issuer: Issuer keypair (payer, mint/freeze/update authority, holder).
        name: Token name (max 32 bytes, e.g. "Proof of Governance").
        symbol: Token symbol (max 10 bytes, e.g. "POG").
        uri: Metadata JSON URL.

    Returns:
        dict with 'mint', 'token_account', 'metadata', 'signature'.
    """
    authority = issuer.pubkey()

    token = Token.create_mint(
        conn=client,
        payer=issuer,
        mint_authority=authority,
        decimals=0,
        program_id=TOKEN_PROGRAM_ID,
        freeze_authority=authority,   # issuer controls freezing
        skip_confirmation=False,
    )
    mint = token.pubkey
    logger.info(f"Mint account created: {mint}")

    token_account = get_associated_token_address(authority, mint)
    instructions = [
        create_metadata_instruction(mint, authority, name, symbol, uri),
        create_associated_token_account(authority, authority, mint),
        mint_to(MintToParams(
            program_id=TOKEN_PROGRAM_ID,
            mint=mint,
            dest=token_account,
            mint_authority=authority,
            amount=1,
        )),
        freeze_account(FreezeAccountParams(
            program_id=TOKEN_PROGRAM_ID,
            account=token_account,
            mint=mint,
            authority=authority,
        )),
        # Supply stays at 1: nobody can mint again. Freeze authority is kept for burn.
        set_authority(SetAuthorityParams(
            program_id=TOKEN_PROGRAM_ID,
            account=mint,
            authority=AuthorityType.MINT_TOKENS,
            current_authority=authority,
            new_authority=None,
        )),
    ]

    signature = send_instructions(client, issuer, instructions)
    logger.info(f"Soulbound '{name}' minted and frozen. Mint: {mint} TX: {signature}")

    return {
        "mint": str(mint),
        "token_account": str(token_account),
        "metadata": str(find_metadata_pda(mint)),
        "signature": signature,
    }
