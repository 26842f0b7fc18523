"""Split strategies that turn an expense total into per-member shares."""
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import InvalidInputError
from ..core.logger import get_logger
from ..models import Share, SplitDetails, SplitStrategy, normalize_identifier
from ..utils.money import HUNDRED, round_money, sum_money, to_decimal, within_tolerance

logger = get_logger(__name__)


def distribute(strategy: Union[SplitStrategy, str],
               total_amount: Any,
               participants: Optional[Sequence[Any]] = None,
               extra: Union[SplitDetails, Mapping[str, Any], None] = None) -> List[Share]:
    """
    Compute the shares of an expense.

    Args:
        strategy: ``equal``, ``exact`` or ``percentage``
        total_amount: Expense total
        participants: Members sharing the expense (required for ``equal``)
        extra: SplitDetails (or a dict with ``shares`` / ``percentages``)

    Returns:
        list[Share]: one share per participant, amounts rounded to cents

    Raises:
        InvalidInputError: empty participants, empty exact/percentage input,
            mismatched participants or an unknown strategy

    Example:
        distribute("equal", "90.00", ["alice", "bob", "carol"])
        -> alice 30.00, bob 30.00, carol 30.00

    The rounded shares may drift from the total by up to one cent per
    participant; callers tolerate that drift.
    """
    strategy = _parse_strategy(strategy)
    total = _parse_amount(total_amount, "total_amount")
    members = _normalize_participants(participants or [])
    details = _parse_details(extra)

    if strategy is SplitStrategy.EQUAL:
        shares = _split_equal(total, members)
    elif strategy is SplitStrategy.EXACT:
        shares = _split_exact(details.shares, members)
    else:
        shares = _split_percentage(total, details.percentages, members)

    logger.debug(f"Distributed {total} {strategy.value} across {len(shares)} members")
    return shares


def check_shares_total(total_amount: Any, shares: Sequence[Share]) -> Decimal:
    """
    Validate that shares add up to the expense total within rounding drift.

    The distributor itself does not enforce this; it is the check the
    request layer runs on caller-supplied exact splits.

    Returns:
        Decimal: the sum of the shares

    Raises:
        InvalidInputError: if the shares are off by more than one cent per share
    """
    total = _parse_amount(total_amount, "total_amount")
    shares_sum = sum_money(share.amount for share in shares)
    if not within_tolerance(shares_sum, total, len(shares)):
        raise InvalidInputError(
            f"Shares add up to {shares_sum}, expected {total}",
            error_code="SHARES_TOTAL_MISMATCH",
            details={"total_amount": str(total), "shares_total": str(shares_sum), "share_count": len(shares)}
        )
    return shares_sum


def _split_equal(total: Decimal, members: List[str]) -> List[Share]:
    if not members:
        raise InvalidInputError(
            "Equal split requires at least one participant",
            error_code="NO_PARTICIPANTS"
        )
    per_member = round_money(total / len(members))
    return [_make_share(member, per_member) for member in members]


def _split_exact(amounts: Dict[str, Decimal], members: List[str]) -> List[Share]:
    if not amounts:
        raise InvalidInputError(
            "Exact split requires share amounts",
            error_code="NO_EXACT_SHARES"
        )
    _check_participants_match(amounts, members)
    return [_make_share(member, round_money(amount)) for member, amount in amounts.items()]


def _split_percentage(total: Decimal, percentages: Dict[str, Decimal], members: List[str]) -> List[Share]:
    if not percentages:
        raise InvalidInputError(
            "Percentage split requires percentages",
            error_code="NO_PERCENTAGES"
        )
    _check_participants_match(percentages, members)
    return [
        _make_share(member, round_money(total * percentage / HUNDRED))
        for member, percentage in percentages.items()
    ]


def _make_share(member: str, amount: Decimal) -> Share:
    if amount < 0:
        raise InvalidInputError(
            f"Share for {member} cannot be negative",
            error_code="NEGATIVE_SHARE",
            details={"member": member, "amount": str(amount)}
        )
    return Share(debtor=member, amount=amount)


def _check_participants_match(per_member: Dict[str, Decimal], members: List[str]) -> None:
    # Participants are optional for exact/percentage; when given, one value per participant
    if members and set(per_member) != set(members):
        raise InvalidInputError(
            "Split inputs must name exactly the participants",
            error_code="PARTICIPANT_MISMATCH",
            details={
                "participants": sorted(members),
                "provided": sorted(per_member),
            }
        )


def _parse_strategy(strategy: Union[SplitStrategy, str]) -> SplitStrategy:
    try:
        return SplitStrategy(strategy)
    except ValueError:
        raise InvalidInputError(
            f"Invalid split type: {strategy!r}",
            error_code="INVALID_SPLIT_TYPE",
            details={"allowed": [s.value for s in SplitStrategy]}
        )


def _parse_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise InvalidInputError(str(e), error_code="INVALID_AMOUNT", details={"field_name": field_name})
    if amount < 0:
        raise InvalidInputError(
            f"{field_name} cannot be negative",
            error_code="INVALID_AMOUNT",
            details={"field_name": field_name}
        )
    return amount


def _normalize_participants(participants: Sequence[Any]) -> List[str]:
    members = []
    for participant in participants:
        try:
            member = normalize_identifier(participant)
        except ValueError as e:
            raise InvalidInputError(str(e), error_code="INVALID_PARTICIPANT")
        if member in members:
            raise InvalidInputError(
                f"Participant {member} listed more than once",
                error_code="DUPLICATE_PARTICIPANT"
            )
        members.append(member)
    return members


def _parse_details(extra: Union[SplitDetails, Mapping[str, Any], None]) -> SplitDetails:
    if extra is None:
        return SplitDetails()
    if isinstance(extra, SplitDetails):
        return extra
    try:
        return SplitDetails.model_validate(dict(extra))
    except PydanticValidationError as e:
        raise InvalidInputError(
            "Invalid split details",
            error_code="INVALID_SPLIT_DETAILS",
            details={"errors": e.errors(include_url=False)}
        )
