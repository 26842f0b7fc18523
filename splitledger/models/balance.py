"""
Debt matrix and per-member balance records produced by the ledger builder.
"""

from decimal import Decimal
from typing import Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..utils.money import ZERO, round_money, sum_money
from .expense import Money
from .member import MemberId


class DebtMatrix:
    """
    Sparse two-level mapping ``debtor -> creditor -> amount``.

    Invariants kept by the mutators:
        - no member is ever recorded as owing themselves
        - stored amounts are positive; an entry that reaches zero is removed
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Decimal]] = {}

    def get(self, debtor: str, creditor: str) -> Decimal:
        return self._entries.get(debtor, {}).get(creditor, ZERO)

    def add(self, debtor: str, creditor: str, amount: Decimal) -> None:
        """Accumulate ``amount`` at full precision."""
        self._check_pair(debtor, creditor)
        if amount < 0:
            raise ValueError(f"Cannot add a negative debt ({amount})")
        if amount == 0:
            return
        row = self._entries.setdefault(debtor, {})
        row[creditor] = row.get(creditor, ZERO) + amount

    def set(self, debtor: str, creditor: str, amount: Decimal) -> None:
        """Store ``amount`` rounded to cents, dropping the entry when it rounds to zero."""
        self._check_pair(debtor, creditor)
        rounded = round_money(amount)
        if rounded < 0:
            raise ValueError(f"Debt cannot be negative ({amount})")
        if rounded == ZERO:
            self.discard(debtor, creditor)
            return
        self._entries.setdefault(debtor, {})[creditor] = rounded

    def discard(self, debtor: str, creditor: str) -> None:
        row = self._entries.get(debtor)
        if row is None:
            return
        row.pop(creditor, None)
        if not row:
            del self._entries[debtor]

    def round_all(self) -> None:
        """Round every entry to cents and drop the ones that vanish."""
        for debtor, creditor, amount in list(self):
            self.set(debtor, creditor, amount)

    def owed_by(self, debtor: str) -> Dict[str, Decimal]:
        """Creditors of ``debtor`` and what is owed to each."""
        return dict(self._entries.get(debtor, {}))

    def owed_to(self, creditor: str) -> Dict[str, Decimal]:
        """Debtors of ``creditor`` and what each owes."""
        return {
            debtor: row[creditor]
            for debtor, row in self._entries.items()
            if creditor in row
        }

    def total(self) -> Decimal:
        return sum_money(amount for _, _, amount in self)

    def __iter__(self) -> Iterator[Tuple[str, str, Decimal]]:
        for debtor, row in self._entries.items():
            for creditor, amount in row.items():
                yield debtor, creditor, amount

    def __len__(self) -> int:
        return sum(len(row) for row in self._entries.values())

    def __repr__(self):
        return f"<DebtMatrix(entries={len(self)}, total={self.total()})>"

    @staticmethod
    def _check_pair(debtor: str, creditor: str) -> None:
        if debtor == creditor:
            raise ValueError(f"Member {debtor} cannot owe themselves")


class BalanceRecord(BaseModel):
    """Ledger output for one member."""

    model_config = ConfigDict(frozen=True)

    member_id: MemberId = Field(..., description="Member the record belongs to")
    total_spent: Money = Field(default=ZERO, description="Sum of the member's payments across expenses")
    owed_by: Dict[MemberId, Money] = Field(
        default_factory=dict,
        description="What this member still owes, keyed by creditor"
    )

    @property
    def total_owes(self) -> Decimal:
        return sum_money(amount for amount in self.owed_by.values() if amount > 0)


Ledger = Dict[str, BalanceRecord]
