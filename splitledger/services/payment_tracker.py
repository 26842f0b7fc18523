"""Multi-payer support: payment progress and additional payments on an expense."""
from datetime import datetime, timezone
from typing import Any, Optional

from ..core.exceptions import InvalidInputError
from ..core.logger import get_logger
from ..models import Expense, ExplicitPayments, Payment, PaymentProgress, normalize_identifier
from ..utils.money import ZERO, round_money, sum_money, to_decimal

logger = get_logger(__name__)


def payment_progress(expense: Expense) -> PaymentProgress:
    """
    Report how much of an expense has been paid.

    Single-payer expenses count as paid in full by their designated payer.
    """
    source = expense.payment_source
    if isinstance(source, ExplicitPayments):
        payments = list(source.payments)
    elif source.amount > 0:
        # Single-payer expenses were paid when they were created
        payments = [Payment(payer=source.payer, amount=source.amount, paid_at=expense.created_at)]
    else:
        payments = []
    total_paid = round_money(sum_money(p.amount for p in payments))
    remaining = round_money(expense.total_amount - total_paid)

    return PaymentProgress(
        expense_id=expense.id,
        total_amount=expense.total_amount,
        total_paid=total_paid,
        remaining_amount=remaining,
        is_fully_paid=remaining <= ZERO,
        payments=payments,
    )


def add_payment(expense: Expense, payer: Any, amount: Any,
                paid_at: Optional[datetime] = None) -> Expense:
    """
    Record another member's payment towards an expense.

    Args:
        expense: Expense to pay towards
        payer: Member making the payment
        amount: Amount paid
        paid_at: Payment time (defaults to now, UTC)

    Returns:
        Expense: a copy of the expense with the payment appended. A
        single-payer expense is first expanded into an explicit payment by
        its designated payer for the full amount.

    Raises:
        InvalidInputError: non-positive amount, a payer who already paid,
            or an amount larger than what remains
    """
    try:
        payer = normalize_identifier(payer)
        amount = to_decimal(amount)
    except ValueError as e:
        raise InvalidInputError(str(e), error_code="INVALID_PAYMENT")

    if amount <= 0:
        raise InvalidInputError(
            "Invalid payment amount",
            error_code="INVALID_PAYMENT_AMOUNT",
            details={"amount": str(amount)}
        )

    progress = payment_progress(expense)

    if any(p.payer == payer for p in progress.payments):
        raise InvalidInputError(
            f"Member {payer} has already paid for this expense",
            error_code="DUPLICATE_PAYMENT",
            details={"expense_id": expense.id, "payer": payer}
        )

    if amount > progress.remaining_amount:
        raise InvalidInputError(
            f"Payment exceeds remaining amount. Remaining: {progress.remaining_amount}",
            error_code="PAYMENT_EXCEEDS_REMAINING",
            details={
                "expense_id": expense.id,
                "amount": str(amount),
                "remaining_amount": str(progress.remaining_amount),
            }
        )

    payment = Payment(payer=payer, amount=amount, paid_at=paid_at or datetime.now(timezone.utc))
    updated = expense.model_copy(update={"payments": tuple(progress.payments) + (payment,)})

    logger.info(f"Recorded payment of {amount} by {payer} on expense {expense.id}")
    return updated

