"""
Metaplex Token Metadata: CreateMetadataAccountV3 instruction builder.

The metadata account is a PDA of [b"metadata", program_id, mint]. Instruction
data is borsh-encoded: discriminator 33, DataV2, is_mutable,
Option<CollectionDetails>.
"""
from borsh_construct import Bool, CStruct, Option, String, U8, U16, U64, Vec
from construct import Bytes
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.sysvar import RENT

from domain.constants import TOKEN_METADATA_PROGRAM_ID

CREATE_METADATA_ACCOUNT_V3 = 33

MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_URI_LENGTH = 200

CreatorLayout = CStruct(
    "address" / Bytes(32),
    "verified" / Bool,
    "share" / U8,
)

CollectionLayout = CStruct(
    "verified" / Bool,
    "key" / Bytes(32),
)

UsesLayout = CStruct(
    "use_method" / U8,
    "remaining" / U64,
    "total" / U64,
)

DataV2Layout = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "creators" / Option(Vec(CreatorLayout)),
    "collection" / Option(CollectionLayout),
    "uses" / Option(UsesLayout),
)

# CollectionDetails::V1 { size }: variant byte then u64
CollectionDetailsLayout = CStruct(
    "variant" / U8,
    "size" / U64,
)

CreateMetadataAccountV3Layout = CStruct(
    "instruction" / U8,
    "data" / DataV2Layout,
    "is_mutable" / Bool,
    "collection_details" / Option(CollectionDetailsLayout),
)


def find_metadata_pda(mint: Pubkey) -> Pubkey:
    """Derive the Metaplex metadata account address for a mint."""
    pda, _ = Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID,
    )
    return pda


def encode_create_metadata_v3(
    name: str,
    symbol: str,
    uri: str,
    creator: Pubkey,
    seller_fee_basis_points: int = 0,
    is_mutable: bool = True,
) -> bytes:
    """
    Encode CreateMetadataAccountV3 instruction data.

    The single creator gets a 100% share and is marked verified, which the
    program accepts because the creator signs as update authority.
    """
    if len(name.encode()) > MAX_NAME_LENGTH:
        raise ValueError(f"Token name exceeds {MAX_NAME_LENGTH} bytes: {name!r}")
    if len(symbol.encode()) > MAX_SYMBOL_LENGTH:
        raise ValueError(f"Token symbol exceeds {MAX_SYMBOL_LENGTH} bytes: {symbol!r}")
    if len(uri.encode()) > MAX_URI_LENGTH:
        raise ValueError(f"Metadata URI exceeds {MAX_URI_LENGTH} bytes")

    return CreateMetadataAccountV3Layout.build({
        "instruction": CREATE_METADATA_ACCOUNT_V3,
        "data": {
            "name": name,
            "symbol": symbol,
            "uri": uri,
            "seller_fee_basis_points": seller_fee_basis_points,
            "creators": [{"address": bytes(creator), "verified": True, "share": 100}],
            "collection": None,
            "uses": None,
        },
        "is_mutable": is_mutable,
        "collection_details": None,
    })


def create_metadata_instruction(
    mint: Pubkey,
    authority: Pubkey,
    name: str,
    symbol: str,
    uri: str,
) -> Instruction:
    """
    Build the CreateMetadataAccountV3 instruction.

    `authority` is mint authority, payer, update authority and sole creator.
    """
    accounts = [
        AccountMeta(find_metadata_pda(mint), is_signer=False, is_writable=True),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(authority, is_signer=True, is_writable=False),   # mint authority
        AccountMeta(authority, is_signer=True, is_writable=True),    # payer
        AccountMeta(authority, is_signer=True, is_writable=False),   # update authority
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(RENT, is_signer=False, is_writable=False),
    ]
    data = encode_create_metadata_v3(name, symbol, uri, creator=authority)
    return Instruction(TOKEN_METADATA_PROGRAM_ID, data, accounts)
