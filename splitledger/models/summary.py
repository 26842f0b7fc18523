"""
Display projections built on top of a ledger.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..utils.money import ZERO
from .balance import BalanceRecord
from .expense import Money, Payment
from .member import MemberId, RecordId


class UserSummary(BaseModel):
    """Totals for one member."""

    model_config = ConfigDict(frozen=True)

    member_id: MemberId
    total_owes: Money = Field(default=ZERO, description="What the member owes others")
    total_is_owed: Money = Field(default=ZERO, description="What others owe the member")
    net_balance: Money = Field(default=ZERO, description="total_is_owed - total_owes")


class Counterparty(BaseModel):
    """A named member on the other side of a debt."""

    model_config = ConfigDict(frozen=True)

    member_id: MemberId
    name: str
    email: Optional[str] = None
    amount: Money


class MemberBalanceView(BaseModel):
    """One member's row in a group breakdown."""

    model_config = ConfigDict(frozen=True)

    member_id: MemberId
    name: str
    email: Optional[str] = None
    total_spent: Money = ZERO
    owed_by: List[Counterparty] = Field(default_factory=list, description="Members who owe this member")
    owes: List[Counterparty] = Field(default_factory=list, description="Members this member owes")
    total_owed: Money = Field(default=ZERO, description="Money owed to this member")
    total_owes: Money = Field(default=ZERO, description="Money this member owes")


class GroupSummary(BaseModel):
    """Per-member breakdown for a group, optionally from one viewer's perspective."""

    model_config = ConfigDict(frozen=True)

    balances: List[MemberBalanceView] = Field(default_factory=list)
    user_summary: Optional[UserSummary] = None


class GroupLedger(BaseModel):
    """A computed ledger tagged with the group it belongs to."""

    model_config = ConfigDict(frozen=True)

    group_id: RecordId
    group_name: str
    ledger: Dict[MemberId, BalanceRecord] = Field(default_factory=dict)


class GroupBalanceShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: RecordId
    group_name: str
    owes: Money = ZERO
    is_owed: Money = ZERO
    net_balance: Money = ZERO


class OverallSummary(BaseModel):
    """A member's position across every group they belong to."""

    model_config = ConfigDict(frozen=True)

    member_id: MemberId
    total_owes: Money = ZERO
    total_is_owed: Money = ZERO
    net_balance: Money = ZERO
    per_group: List[GroupBalanceShare] = Field(default_factory=list)


class SuggestedTransfer(BaseModel):
    """A payment that would clear part of the outstanding balances."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_member: MemberId = Field(..., alias="from")
    to_member: MemberId = Field(..., alias="to")
    amount: Money


class PaymentProgress(BaseModel):
    """How much of an expense has been paid so far."""

    model_config = ConfigDict(frozen=True)

    expense_id: RecordId
    total_amount: Money
    total_paid: Money
    remaining_amount: Money
    is_fully_paid: bool
    payments: List[Payment] = Field(default_factory=list)
