"""
Balance engine services.
Split distribution, ledger building, summary projection and payment tracking.
"""

from .split_distributor import distribute, check_shares_total
from .ledger_builder import build_ledger, apply_settlement, order_settlements, find_inconsistency
from .summary_projector import (
    project_user_summary, project_group_summary, project_overall_summary,
    get_member_balance, net_balances, suggest_settlements, total_owes, total_is_owed
)
from .payment_tracker import payment_progress, add_payment

__all__ = [
    "distribute",
    "check_shares_total",
    "build_ledger",
    "apply_settlement",
    "order_settlements",
    "find_inconsistency",
    "project_user_summary",
    "project_group_summary",
    "project_overall_summary",
    "get_member_balance",
    "net_balances",
    "suggest_settlements",
    "total_owes",
    "total_is_owed",
    "payment_progress",
    "add_payment"
]
