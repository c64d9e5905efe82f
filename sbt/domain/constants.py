"""
Domain constants used across services and scripts.
"""
from solders.pubkey import Pubkey

LAMPORTS_PER_SOL = 1_000_000_000

# Governance credential
TOKEN_NAME = "Proof of Governance"
TOKEN_SYMBOL = "POG"
DEFAULT_METADATA_FILENAME = "metadata.json"

# Metaplex Token Metadata program
TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

# Config values that were never filled in
PLACEHOLDER_MARKERS = ("PASTE_", "YOUR_", "<")

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_CANCELLED = 130

# Substrings (lower-case) of ledger errors raised by a transfer out of a frozen account
TRANSFER_REJECTION_MARKERS = (
    "frozen",
    "custom program error: 0x11",
    "transfer is not approved",
    "permanentfreezedelegate",
)
