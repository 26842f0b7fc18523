"""Ledger builder: turns expenses and settlements into per-member balances."""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.config import SettlementOrder, settings
from ..core.exceptions import InconsistentExpenseError
from ..core.logger import get_logger, log_function_call
from ..models import (
    BalanceRecord, DebtMatrix, Expense, Ledger, PaymentEntry, Settlement
)
from ..utils.money import ZERO, round_money, sum_money, within_tolerance

logger = get_logger(__name__)

_ONE = Decimal("1")


@log_function_call
def build_ledger(expenses: Iterable[Expense],
                 settlements: Iterable[Settlement] = (),
                 order: Optional[SettlementOrder] = None) -> Ledger:
    """
    Build the debt picture for a set of expenses and settlements.

    Args:
        expenses: Expense records of a group (or of a member across groups)
        settlements: Settlement records for the same scope
        order: How settlements are sequenced before netting. Defaults to
            the configured ``settlement_order`` (``as_given`` unless changed).

    Returns:
        dict: member id -> BalanceRecord. ``owed_by`` holds only positive,
        cent-rounded amounts; a missing creditor means nothing is owed.

    Algorithm:
        1. Every payer and debtor gets a record
        2. Each payment adds to its payer's total spent
        3. Each share is split across the expense's payers in proportion to
           what each one paid
        4. Settlements reduce the payer's debt; an overpayment turns into a
           debt in the opposite direction

    Example:
        Alice pays 90.00 split equally with Bob and Carol
        -> Bob owes Alice 30.00, Carol owes Alice 30.00
        Bob settles 30.00 with Alice -> only Carol owes Alice 30.00
    """
    expenses = list(expenses)
    ordered_settlements = order_settlements(settlements, order)

    spent: Dict[str, Decimal] = {}
    matrix = DebtMatrix()

    for expense in expenses:
        payments = expense.payment_source.entries()
        _check_consistency(expense, payments)
        _register_members(spent, [p.payer for p in payments])
        _register_members(spent, [s.debtor for s in expense.shares])

        for payment in payments:
            spent[payment.payer] += payment.amount

        _attribute_shares(matrix, expense, payments)

    # Attribution accumulates at full precision; round once before netting
    matrix.round_all()

    for settlement in ordered_settlements:
        _register_members(spent, [settlement.from_member, settlement.to_member])
        apply_settlement(matrix, settlement)

    logger.debug(
        f"Built ledger: {len(expenses)} expenses, {len(ordered_settlements)} settlements, "
        f"{len(spent)} members, {len(matrix)} open debts"
    )

    return {
        member: BalanceRecord(
            member_id=member,
            total_spent=round_money(total),
            owed_by=matrix.owed_by(member),
        )
        for member, total in spent.items()
    }


def apply_settlement(matrix: DebtMatrix, settlement: Settlement) -> None:
    """
    Net one settlement against the matrix.

    ``from`` owing less than the settlement amount clears that debt and the
    surplus becomes a debt owed back by ``to``.
    """
    debtor, creditor, amount = settlement.from_member, settlement.to_member, settlement.amount
    prior = matrix.get(debtor, creditor)

    if prior >= amount:
        matrix.set(debtor, creditor, prior - amount)
        return

    surplus = round_money(amount - prior)
    matrix.discard(debtor, creditor)
    matrix.set(creditor, debtor, matrix.get(creditor, debtor) + surplus)


def order_settlements(settlements: Iterable[Settlement],
                      order: Optional[SettlementOrder] = None) -> List[Settlement]:
    """
    Sequence settlements for netting.

    ``as_given`` keeps the caller's order. The dated orders sort by
    ``created_at`` (stable; undated settlements count as the oldest).
    """
    settlements = list(settlements)
    order = SettlementOrder(order or settings.settlement_order)

    if order is SettlementOrder.AS_GIVEN:
        return settlements

    return sorted(
        settlements,
        key=_settlement_sort_key,
        reverse=order is SettlementOrder.NEWEST_FIRST,
    )


def find_inconsistency(expense: Expense,
                       payments: Optional[Sequence[PaymentEntry]] = None) -> Optional[InconsistentExpenseError]:
    """
    Compare an expense's payments with its total.

    Returns:
        InconsistentExpenseError describing the mismatch, or None when the
        payments agree with the total within the configured tolerance
    """
    if payments is None:
        payments = expense.payment_source.entries()
    paid = sum_money(p.amount for p in payments)

    if within_tolerance(paid, expense.total_amount, len(payments), settings.payment_tolerance):
        return None

    return InconsistentExpenseError(
        f"Payments of expense {expense.id} add up to {paid}, expected {expense.total_amount}",
        error_code="PAYMENTS_TOTAL_MISMATCH",
        details={
            "expense_id": expense.id,
            "total_amount": str(expense.total_amount),
            "payments_total": str(paid),
            "payment_count": len(payments),
        }
    )


def _attribute_shares(matrix: DebtMatrix, expense: Expense,
                      payments: Tuple[PaymentEntry, ...]) -> None:
    # Zero totals are degenerate input; divide by one instead of failing
    divisor = expense.total_amount if expense.total_amount != ZERO else _ONE

    for share in expense.shares:
        for payment in payments:
            if share.debtor == payment.payer:
                continue
            matrix.add(share.debtor, payment.payer, share.amount * payment.amount / divisor)


def _check_consistency(expense: Expense, payments: Tuple[PaymentEntry, ...]) -> None:
    error = find_inconsistency(expense, payments)
    if error is not None:
        logger.warning(f"Inconsistent expense, attributing proportionally anyway: {error.to_dict()}")


def _register_members(spent: Dict[str, Decimal], members: Iterable[str]) -> None:
    for member in members:
        spent.setdefault(member, ZERO)


def _settlement_sort_key(settlement: Settlement):
    created_at = settlement.created_at
    if created_at is None:
        return (0, datetime.min)
    if created_at.tzinfo is not None:
        # Compare aware timestamps in UTC, naive ones as-is
        created_at = created_at.replace(tzinfo=None) - created_at.utcoffset()
    return (1, created_at)
