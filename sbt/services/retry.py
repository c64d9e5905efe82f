"""
Bounded retry for side-effecting ledger actions (create / burn / transfer).

Any exception triggers another attempt until the budget is spent, unless the
caller supplies a retry_on predicate that says otherwise. The delay between
attempts is fixed by default; backoff_factor > 1 makes it exponential.
Tests inject RetryPolicy.immediate() so no real sleeping happens.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from exceptions import OperationExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay_seconds: float = 5.0
    backoff_factor: float = 1.0
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False, repr=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")
        if self.backoff_factor < 1:
            raise ValueError(f"backoff_factor must be >= 1, got {self.backoff_factor}")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after a failed `attempt` (1-based)."""
        return self.delay_seconds * self.backoff_factor ** (attempt - 1)

    def wait(self, attempt: int) -> None:
        delay = self.delay_for(attempt)
        if delay > 0:
            logger.info(f"   ⏳ Waiting {delay:g} seconds before retry...")
        self.sleep(delay)

    @classmethod
    def immediate(cls, max_attempts: int = 3) -> "RetryPolicy":
        """Zero-delay policy for deterministic tests."""
        return cls(max_attempts=max_attempts, delay_seconds=0.0, sleep=lambda _: None)

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.action_max_attempts,
            delay_seconds=settings.action_delay_seconds,
            backoff_factor=settings.action_backoff_factor,
        )


def run_with_retry(
    action: Callable[[], T],
    policy: RetryPolicy,
    label: str = "perform action",
    retry_on: Optional[Callable[[Exception], bool]] = None,
) -> T:
    """
    Call `action` until it succeeds or the attempt budget is spent.

    Args:
        action: Zero-argument callable performing one external state change
        policy: Attempt cap and inter-attempt delay
        label: Short verb phrase used in logs and in the final error
        retry_on: Optional predicate; returning False for an error stops retrying

    Returns:
        The first successful result.

    Raises:
        OperationExhausted: carrying the most recent underlying error.
    """
    logger.info(f"🔨 Attempting to {label} (max {policy.max_attempts} attempts)...")

    last_error: Exception | None = None
    attempt = 0
    while attempt < policy.max_attempts:
        attempt += 1
        try:
            logger.info(f"   🎯 Attempt {attempt}/{policy.max_attempts}...")
            result = action()
            logger.info(f"   ✅ Success on attempt {attempt}!")
            return result
        except Exception as e:
            last_error = e
            logger.warning(f"   ❌ Attempt {attempt} failed: {e}")

            if retry_on is not None and not retry_on(e):
                logger.info("   Error is not retryable, giving up")
                break
            if attempt < policy.max_attempts:
                policy.wait(attempt)

    raise OperationExhausted(label, attempt, last_error) from last_error
