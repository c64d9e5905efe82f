"""
Verification service — classifies the ledger's answer to a transfer attempt.

A soul-bound token must be rejected by the token program when its holder tries
to move it. That rejection is the successful outcome of verification.
"""
import logging

from domain.constants import TRANSFER_REJECTION_MARKERS
from domain.enums import TransferOutcome

logger = logging.getLogger(__name__)


def classify_transfer_error(error_msg: str) -> TransferOutcome:
    """
    Classify a failed transfer by its error message.

    Returns:
        REJECTED when the failure is the freeze / non-transferable guard,
        INCONCLUSIVE for anything else (network, fees, wrong address).
    """
    lower = (error_msg or "").lower()
    if any(marker in lower for marker in TRANSFER_REJECTION_MARKERS):
        return TransferOutcome.REJECTED
    return TransferOutcome.INCONCLUSIVE


def is_transfer_rejection(error: Exception) -> bool:
    return classify_transfer_error(str(error)) is TransferOutcome.REJECTED
