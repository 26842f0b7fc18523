"""Display projections over a computed ledger."""
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

from ..core.exceptions import LedgerError, MemberNotFoundError, handle_exceptions
from ..core.logger import get_logger
from ..models import (
    BalanceRecord, Counterparty, GroupBalanceShare, GroupLedger, GroupSummary, Ledger,
    MemberBalanceView, MemberProfile, OverallSummary, SuggestedTransfer, UserSummary,
    normalize_identifier
)
from ..utils.money import CENT, ZERO, round_money, sum_money

logger = get_logger(__name__)


def total_owes(ledger: Ledger, member_id: str) -> Decimal:
    """What ``member_id`` owes across all creditors."""
    record = ledger.get(member_id)
    if record is None:
        return ZERO
    return round_money(record.total_owes)


def total_is_owed(ledger: Ledger, member_id: str) -> Decimal:
    """What every other member owes ``member_id``."""
    return round_money(sum_money(
        record.owed_by[member_id]
        for other, record in ledger.items()
        if other != member_id and record.owed_by.get(member_id, ZERO) > 0
    ))


@handle_exceptions(LedgerError, context="user summary")
def project_user_summary(ledger: Ledger, member_id) -> UserSummary:
    """
    Summarize one member's position.

    Members without a record (no expenses, no settlements) get zeros.
    """
    member_id = normalize_identifier(member_id)
    owes = total_owes(ledger, member_id)
    is_owed = total_is_owed(ledger, member_id)
    return UserSummary(
        member_id=member_id,
        total_owes=owes,
        total_is_owed=is_owed,
        net_balance=is_owed - owes,
    )


@handle_exceptions(LedgerError, context="group summary")
def project_group_summary(ledger: Ledger,
                          members: Sequence[MemberProfile],
                          viewer_id=None) -> GroupSummary:
    """
    Per-member breakdown of a group, with counterparties resolved by name.

    Args:
        ledger: Output of build_ledger for the group
        members: Member directory entries for the group
        viewer_id: Optional member whose UserSummary is attached

    Returns:
        GroupSummary: one row per directory member that has a balance record.
        Counterparties missing from the directory are left out of the rows.
    """
    directory: Dict[str, MemberProfile] = {m.member_id: m for m in members}
    rows = []

    for profile in members:
        record = ledger.get(profile.member_id)
        if record is None:
            continue

        owed_by = _counterparties(directory, _debtors_of(ledger, profile.member_id))
        owes = _counterparties(directory, record.owed_by.items())

        rows.append(MemberBalanceView(
            member_id=profile.member_id,
            name=profile.name,
            email=profile.email,
            total_spent=record.total_spent,
            owed_by=owed_by,
            owes=owes,
            total_owed=round_money(sum_money(c.amount for c in owed_by)),
            total_owes=round_money(sum_money(c.amount for c in owes)),
        ))

    user_summary = project_user_summary(ledger, viewer_id) if viewer_id is not None else None
    return GroupSummary(balances=rows, user_summary=user_summary)


@handle_exceptions(LedgerError, context="balance lookup")
def get_member_balance(ledger: Ledger, member_id) -> BalanceRecord:
    """
    Look up a single member's balance record.

    Raises:
        MemberNotFoundError: if the member has no record in the ledger
    """
    member_id = normalize_identifier(member_id)
    record = ledger.get(member_id)
    if record is None:
        raise MemberNotFoundError(
            f"No balance found for member {member_id}",
            error_code="BALANCE_NOT_FOUND",
            details={"member_id": member_id}
        )
    return record


@handle_exceptions(LedgerError, context="overall summary")
def project_overall_summary(group_ledgers: Iterable[GroupLedger], member_id) -> OverallSummary:
    """
    Combine a member's position across several groups.

    Every group is reported, including ones where the member is settled up.
    """
    member_id = normalize_identifier(member_id)
    per_group = []

    for group in group_ledgers:
        owes = total_owes(group.ledger, member_id)
        is_owed = total_is_owed(group.ledger, member_id)
        per_group.append(GroupBalanceShare(
            group_id=group.group_id,
            group_name=group.group_name,
            owes=owes,
            is_owed=is_owed,
            net_balance=is_owed - owes,
        ))

    owes_total = sum_money(g.owes for g in per_group)
    is_owed_total = sum_money(g.is_owed for g in per_group)
    return OverallSummary(
        member_id=member_id,
        total_owes=owes_total,
        total_is_owed=is_owed_total,
        net_balance=is_owed_total - owes_total,
        per_group=per_group,
    )


def net_balances(ledger: Ledger) -> Dict[str, Decimal]:
    """Net position per member: positive means the member is owed money."""
    balances = {member: ZERO for member in ledger}
    for debtor, record in ledger.items():
        for creditor, amount in record.owed_by.items():
            balances[debtor] -= amount
            balances[creditor] = balances.get(creditor, ZERO) + amount
    return balances


@handle_exceptions(LedgerError, context="settlement suggestions")
def suggest_settlements(ledger: Ledger) -> List[SuggestedTransfer]:
    """
    Propose transfers that clear every open debt, matched greedily.

    Greedy matching keeps the list short but does not guarantee the fewest
    possible transfers.

    Algorithm:
        1. Net each member's position (owed minus owes)
        2. Separate into creditors (positive) and debtors (negative),
           ignoring anything below one cent
        3. Match the largest debtor with the largest creditors greedily

    Example:
        Bob owes Alice 30.00, Carol owes Bob 30.00
        -> Carol pays Alice 30.00
    """
    balances = net_balances(ledger)

    creditors = [[member, bal] for member, bal in balances.items() if bal >= CENT]
    debtors = [[member, -bal] for member, bal in balances.items() if bal <= -CENT]

    # Largest first; ties broken by id for a stable result
    creditors.sort(key=lambda x: (-x[1], x[0]))
    debtors.sort(key=lambda x: (-x[1], x[0]))

    transfers = []
    for debtor, remaining in debtors:
        for entry in creditors:
            if remaining < CENT:
                break
            creditor, credit = entry
            amount = min(remaining, credit)
            if amount < CENT:
                continue
            transfers.append(SuggestedTransfer(
                from_member=debtor,
                to_member=creditor,
                amount=round_money(amount),
            ))
            entry[1] = credit - amount
            remaining -= amount

    logger.debug(f"Suggested {len(transfers)} transfers for {len(balances)} members")
    return transfers


def _debtors_of(ledger: Ledger, creditor: str) -> List[Tuple[str, Decimal]]:
    return [
        (debtor, record.owed_by[creditor])
        for debtor, record in ledger.items()
        if creditor in record.owed_by
    ]


def _counterparties(directory: Dict[str, MemberProfile],
                    amounts: Iterable[Tuple[str, Decimal]]) -> List[Counterparty]:
    result = []
    for member_id, amount in amounts:
        profile = directory.get(member_id)
        if profile is None or amount <= 0:
            continue
        result.append(Counterparty(
            member_id=member_id,
            name=profile.name,
            email=profile.email,
            amount=amount,
        ))
    return result
