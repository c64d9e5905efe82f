"""
Custom exception classes for Soul-Bound Token operations.

Every script catches SBTError at the top level and maps it to an exit code
and a troubleshooting report.
"""


class SBTError(Exception):
    """Base class for all SBT script errors."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SBTError):
    """Missing or placeholder credential / target identifier. Raised before any network call."""
    def __init__(self, message: str, field: str | None = None, details: dict | None = None):
        super().__init__(message, details=details)
        self.field = field


class FundingError(SBTError):
    """Raised when the payer could not be topped up to the required balance."""
    def __init__(self, address: str, required_sol: float, balance_sol: float):
        super().__init__(
            f"Unable to obtain sufficient SOL for transaction: need {required_sol} SOL, "
            f"have {balance_sol:.4f} SOL",
            details={"address": address, "required_sol": required_sol, "balance_sol": balance_sol},
        )
        self.address = address
        self.required_sol = required_sol
        self.balance_sol = balance_sol


class OperationExhausted(SBTError):
    """A retried action failed on every attempt; carries the most recent error."""
    def __init__(self, label: str, attempts: int, last_error: Exception):
        super().__init__(
            f"Failed to {label} after {attempts} attempt(s): {last_error}",
            details={"label": label, "attempts": attempts},
        )
        self.label = label
        self.attempts = attempts
        self.last_error = last_error


class VerificationError(SBTError):
    """The ledger accepted a transfer that a soul-bound token must reject."""
    def __init__(self, sbt_address: str, signature: str | None = None):
        super().__init__(
            f"Transfer of {sbt_address} was accepted: the token is NOT soul-bound",
            details={"sbt_address": sbt_address, "signature": signature},
        )
        self.sbt_address = sbt_address
        self.signature = signature


class AssetNotFoundError(SBTError):
    """The target SBT has no mint account, or the holder no longer holds it (already burned)."""
    def __init__(self, sbt_address: str, message: str | None = None):
        super().__init__(
            message or f"SBT does not exist or invalid address: {sbt_address}",
            details={"sbt_address": sbt_address},
        )
        self.sbt_address = sbt_address
