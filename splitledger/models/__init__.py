"""
Data models for Split Ledger.
Input records, the debt matrix and display projections are defined here.
"""

from .member import MemberId, RecordId, MemberProfile, normalize_identifier
from .expense import (
    Money, SplitStrategy, Payment, Share, SplitDetails, Expense,
    PaymentEntry, ExplicitPayments, SinglePayer, PaymentSource, resolve_payment_source
)
from .settlement import Settlement
from .balance import DebtMatrix, BalanceRecord, Ledger
from .summary import (
    UserSummary, Counterparty, MemberBalanceView, GroupSummary, GroupLedger,
    GroupBalanceShare, OverallSummary, SuggestedTransfer, PaymentProgress
)

__all__ = [
    "MemberId",
    "RecordId",
    "MemberProfile",
    "normalize_identifier",
    "Money",
    "SplitStrategy",
    "Payment",
    "Share",
    "SplitDetails",
    "Expense",
    "PaymentEntry",
    "ExplicitPayments",
    "SinglePayer",
    "PaymentSource",
    "resolve_payment_source",
    "Settlement",
    "DebtMatrix",
    "BalanceRecord",
    "Ledger",
    "UserSummary",
    "Counterparty",
    "MemberBalanceView",
    "GroupSummary",
    "GroupLedger",
    "GroupBalanceShare",
    "OverallSummary",
    "SuggestedTransfer",
    "PaymentProgress"
]
