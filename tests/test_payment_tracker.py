"""
Tests for multi-payer payment tracking.
"""

from datetime import datetime

import pytest

from splitledger.core.exceptions import InvalidInputError
from splitledger.services.ledger_builder import build_ledger
from splitledger.services.payment_tracker import add_payment, payment_progress

from factories import D, make_expense


@pytest.fixture
def partly_paid():
    """Hotel booking of 300.00 with 100.00 paid by Alice so far."""
    return make_expense(
        "exp-hotel", "300.00",
        {"alice": "100.00", "bob": "100.00", "carol": "100.00"},
        payments={"alice": "100.00"},
    )


class TestPaymentProgress:
    """Test progress reporting."""

    def test_partly_paid(self, partly_paid):
        progress = payment_progress(partly_paid)

        assert progress.total_paid == D("100.00")
        assert progress.remaining_amount == D("200.00")
        assert progress.is_fully_paid is False
        assert [p.payer for p in progress.payments] == ["alice"]

    def test_single_payer_is_fully_paid(self, dinner_expense):
        """Test an expense without payments counts as paid by its designated payer."""
        progress = payment_progress(dinner_expense)

        assert progress.total_paid == D("90.00")
        assert progress.remaining_amount == D("0")
        assert progress.is_fully_paid is True
        assert progress.payments[0].payer == "alice"


class TestAddPayment:
    """Test recording additional payments."""

    def test_adds_payment(self, partly_paid):
        paid_at = datetime(2024, 6, 1, 9, 30)
        updated = add_payment(partly_paid, "bob", "200.00", paid_at=paid_at)

        assert [(p.payer, p.amount) for p in updated.payments] == [
            ("alice", D("100.00")),
            ("bob", D("200.00")),
        ]
        assert updated.payments[-1].paid_at == paid_at
        assert payment_progress(updated).is_fully_paid is True

    def test_original_is_untouched(self, partly_paid):
        add_payment(partly_paid, "bob", "50.00")
        assert len(partly_paid.payments) == 1

    def test_payment_changes_attribution(self, partly_paid):
        """Test the ledger splits Carol's share across both payers."""
        updated = add_payment(partly_paid, "bob", "200.00")
        ledger = build_ledger([updated])

        assert ledger["carol"].owed_by == {"alice": D("33.33"), "bob": D("66.67")}
        assert ledger["bob"].total_spent == D("200.00")

    def test_duplicate_payer(self, partly_paid):
        """Test that a member can only pay once per expense."""
        with pytest.raises(InvalidInputError) as exc_info:
            add_payment(partly_paid, "alice", "10.00")
        assert exc_info.value.error_code == "DUPLICATE_PAYMENT"

    def test_exceeds_remaining(self, partly_paid):
        with pytest.raises(InvalidInputError) as exc_info:
            add_payment(partly_paid, "bob", "200.01")
        assert exc_info.value.details["remaining_amount"] == "200.00"

    @pytest.mark.parametrize("amount", ["0", "-5", "abc"])
    def test_invalid_amount(self, partly_paid, amount):
        with pytest.raises(InvalidInputError):
            add_payment(partly_paid, "bob", amount)

    def test_single_payer_expense_is_full(self, dinner_expense):
        """Test a single-payer expense is expanded and has nothing left to pay."""
        with pytest.raises(InvalidInputError) as exc_info:
            add_payment(dinner_expense, "bob", "1.00")
        assert exc_info.value.error_code == "PAYMENT_EXCEEDS_REMAINING"
