"""
Expense records and split inputs.
Expenses arrive from storage already carrying their payments and shares.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Dict, Literal, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from ..utils.money import to_decimal
from .member import MemberId, RecordId


Money = Annotated[Decimal, BeforeValidator(to_decimal)]


class SplitStrategy(str, Enum):
    """Rule used to turn an expense total into per-member shares."""

    EQUAL = "equal"
    EXACT = "exact"
    PERCENTAGE = "percentage"


# =============================================================================
# Pydantic Schemas
# =============================================================================

class Payment(BaseModel):
    """Money a single payer put towards an expense."""

    model_config = ConfigDict(frozen=True)

    payer: MemberId = Field(..., description="Member who paid")
    amount: Money = Field(..., gt=0, description="Amount paid")
    paid_at: Optional[datetime] = Field(None, description="When the payment was made")


class Share(BaseModel):
    """A member's share of responsibility for an expense."""

    model_config = ConfigDict(frozen=True)

    debtor: MemberId = Field(..., description="Member responsible for the share")
    amount: Money = Field(..., ge=0, description="Share amount")


class SplitDetails(BaseModel):
    """Per-member inputs for the exact and percentage strategies."""

    model_config = ConfigDict(frozen=True)

    shares: Dict[MemberId, Money] = Field(default_factory=dict, description="Exact amount per member")
    percentages: Dict[MemberId, Money] = Field(default_factory=dict, description="Percentage per member")


class Expense(BaseModel):
    """A shared cost with one or more payers and per-member shares."""

    model_config = ConfigDict(frozen=True)

    id: RecordId = Field(..., description="Expense id")
    total_amount: Money = Field(..., ge=0, description="Total cost of the expense")
    payments: Tuple[Payment, ...] = Field(default=(), description="Explicit payments, in recorded order")
    designated_payer: Optional[MemberId] = Field(None, description="Payer of record for single-payer expenses")
    shares: Tuple[Share, ...] = Field(default=(), description="Per-member shares")
    description: Optional[str] = Field(None, description="Free text description")
    created_at: Optional[datetime] = Field(None, description="Creation time")

    @field_validator("shares")
    @classmethod
    def validate_unique_debtors(cls, v):
        seen = set()
        for share in v:
            if share.debtor in seen:
                raise ValueError(f"Member {share.debtor} has more than one share")
            seen.add(share.debtor)
        return v

    @model_validator(mode="after")
    def validate_payment_source(self):
        if not self.payments and self.designated_payer is None:
            raise ValueError("Expense without payments requires a designated_payer")
        return self

    @property
    def payment_source(self) -> "PaymentSource":
        return resolve_payment_source(self)


# =============================================================================
# Payment source variant
# =============================================================================

class PaymentEntry(NamedTuple):
    payer: str
    amount: Decimal


class ExplicitPayments(BaseModel):
    """Expense paid through a recorded list of payments."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["explicit"] = "explicit"
    payments: Tuple[Payment, ...]

    def entries(self) -> Tuple[PaymentEntry, ...]:
        return tuple(PaymentEntry(p.payer, p.amount) for p in self.payments)


class SinglePayer(BaseModel):
    """Expense paid in full by its designated payer."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    payer: MemberId
    amount: Money

    def entries(self) -> Tuple[PaymentEntry, ...]:
        return (PaymentEntry(self.payer, self.amount),)


PaymentSource = Union[ExplicitPayments, SinglePayer]


def resolve_payment_source(expense: Expense) -> PaymentSource:
    """Pick the explicit payment list when present, else the single designated payer."""
    if expense.payments:
        return ExplicitPayments(payments=expense.payments)
    return SinglePayer(payer=expense.designated_payer, amount=expense.total_amount)
