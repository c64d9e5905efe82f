"""
Tests for the funding guard.

Tests: ensure_sufficient_balance, airdrops_needed, check_balance
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest
from unittest.mock import MagicMock

from domain.constants import LAMPORTS_PER_SOL
from services.funding_service import airdrops_needed, check_balance, ensure_sufficient_balance
from services.retry import RetryPolicy

ADDRESS = "So11111111111111111111111111111111111111112"


class TestEnsureSufficientBalance:
    """Tests for ensure_sufficient_balance()."""

    @pytest.mark.unit
    def test_sufficient_balance_issues_no_requests(self, make_ledger, immediate_policy):
        """required 0.1, balance 0.5 → success, zero funding requests."""
        ledger = make_ledger(balance_sol=0.5)

        assert ensure_sufficient_balance(ledger, ADDRESS, 0.1, immediate_policy) is True
        assert ledger.funding_requests == []

    @pytest.mark.unit
    @pytest.mark.parametrize("balance,required", [(0.1, 0.1), (2.0, 0.5), (0.02, 0.01), (0.0, 0.0)])
    def test_any_balance_at_or_above_minimum_skips_funding(self, make_ledger, immediate_policy, balance, required):
        ledger = make_ledger(balance_sol=balance)
        assert ensure_sufficient_balance(ledger, ADDRESS, required, immediate_policy) is True
        assert ledger.funding_requests == []

    @pytest.mark.unit
    def test_single_airdrop_covers_shortfall(self, make_ledger, immediate_policy):
        """required 0.5, balance 0.0, +1.0 per request → 1 request, final 1.0."""
        ledger = make_ledger(balance_sol=0.0, credit_sol=1.0)

        assert ensure_sufficient_balance(ledger, ADDRESS, 0.5, immediate_policy) is True
        assert len(ledger.funding_requests) == 1
        assert ledger.funding_requests[0] == LAMPORTS_PER_SOL
        assert ledger.balance_sol == 1.0

    @pytest.mark.unit
    def test_requests_capped_at_policy_attempts(self, make_ledger, sleep_recorder):
        ledger = make_ledger(balance_sol=0.0, credit_sol=1.0)
        policy = RetryPolicy(max_attempts=3, delay_seconds=3.0, sleep=sleep_recorder)

        assert ensure_sufficient_balance(ledger, ADDRESS, 10.0, policy) is False
        assert len(ledger.funding_requests) == 3
        # Delay between requests, not after the last one
        assert sleep_recorder.calls == [3.0, 3.0]

    @pytest.mark.unit
    @pytest.mark.parametrize("required", [0.3, 1.5, 2.5, 7.0, 100.0])
    def test_never_more_than_cap(self, make_ledger, immediate_policy, required):
        ledger = make_ledger(balance_sol=0.0, credit_sol=1.0)
        ensure_sufficient_balance(ledger, ADDRESS, required, immediate_policy)
        assert len(ledger.funding_requests) <= immediate_policy.max_attempts

    @pytest.mark.unit
    def test_failed_airdrop_does_not_raise(self, make_ledger, immediate_policy):
        """First request fails, second succeeds, still short → False, no exception."""
        ledger = make_ledger(balance_sol=0.0, credit_sol=1.0, failing_requests=1)

        assert ensure_sufficient_balance(ledger, ADDRESS, 1.5, immediate_policy) is False
        assert len(ledger.funding_requests) == 2
        assert ledger.balance_sol == 1.0

    @pytest.mark.unit
    def test_all_airdrops_fail(self, make_ledger, immediate_policy):
        ledger = make_ledger(balance_sol=0.0, failing_requests=3)

        assert ensure_sufficient_balance(ledger, ADDRESS, 2.5, immediate_policy) is False
        assert len(ledger.funding_requests) == 3

    @pytest.mark.unit
    def test_funding_disabled_on_mainnet(self, make_ledger, immediate_policy):
        ledger = make_ledger(balance_sol=0.0)

        assert ensure_sufficient_balance(ledger, ADDRESS, 0.5, immediate_policy, allow_funding=False) is False
        assert ledger.funding_requests == []

    @pytest.mark.unit
    def test_balance_read_failure_treated_as_zero(self, immediate_policy):
        ledger = MagicMock()
        ledger.get_balance.side_effect = [RuntimeError("RPC timeout"), 2 * LAMPORTS_PER_SOL]
        ledger.request_funds.return_value = "sig"

        assert ensure_sufficient_balance(ledger, ADDRESS, 0.5, immediate_policy) is True
        assert ledger.request_funds.call_count == 1

    @pytest.mark.unit
    def test_rejects_non_positive_airdrop(self, make_ledger, immediate_policy):
        with pytest.raises(ValueError):
            ensure_sufficient_balance(make_ledger(), ADDRESS, 0.5, immediate_policy, airdrop_sol=0)


class TestAirdropsNeeded:
    """Tests for airdrops_needed()."""

    @pytest.mark.unit
    def test_rounds_up(self):
        assert airdrops_needed(0.0, 1.5, 1.0, cap=3) == 2

    @pytest.mark.unit
    def test_capped(self):
        assert airdrops_needed(0.0, 50.0, 1.0, cap=3) == 3

    @pytest.mark.unit
    def test_none_when_sufficient(self):
        assert airdrops_needed(1.0, 0.5, 1.0, cap=3) == 0

    @pytest.mark.unit
    def test_none_when_cap_zero(self):
        assert airdrops_needed(0.0, 0.5, 1.0, cap=0) == 0


class TestCheckBalance:
    """Tests for check_balance()."""

    @pytest.mark.unit
    def test_returns_snapshot(self, make_ledger):
        snapshot = check_balance(make_ledger(balance_sol=0.25), ADDRESS, "Initial Balance")
        assert snapshot.lamports == 250_000_000
        assert snapshot.sol == 0.25
        assert "0.2500 SOL" in str(snapshot)
