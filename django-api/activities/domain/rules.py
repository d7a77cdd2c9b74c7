"""Structural and temporal rules for a proposed activity.

Rules are evaluated in a fixed order and the first failing rule decides the
reported reason, so the same proposal always fails the same way.
"""

from dataclasses import dataclass
from datetime import date, time

from activities.domain.errors import ErrorCode, ValidationError
from activities.domain.models import ActivityProposal


@dataclass(frozen=True)
class RuleResult:
    """Verdict of ``validate_proposal``."""

    valid: bool
    reason: str
    code: ErrorCode | None = None

    def raise_for_failure(self) -> None:
        if not self.valid:
            raise ValidationError(code=self.code, message=self.reason)


VALID = RuleResult(valid=True, reason="Request is valid")


def _fail(code: ErrorCode, reason: str) -> RuleResult:
    return RuleResult(valid=False, reason=reason, code=code)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def is_february_correct(year: int, month: int, day: int) -> bool:
    if month != 2:
        return True
    return day <= (29 if is_leap_year(year) else 28)


def compose_date(proposal: ActivityProposal) -> date:
    """Build the activity date, raising ValidationError if it does not exist."""
    try:
        return date(proposal.year, proposal.month, proposal.day)
    except ValueError:
        raise ValidationError(code=ErrorCode.INVALID_DATE, message="Date is not a valid calendar date")


def compose_times(proposal: ActivityProposal) -> tuple[time, time]:
    """Build start and end times, raising ValidationError if out of range."""
    try:
        return (
            time(proposal.start_hour, proposal.start_minute),
            time(proposal.end_hour, proposal.end_minute),
        )
    except ValueError:
        raise ValidationError(code=ErrorCode.INVALID_TIME, message="Time is not a valid time of day")


def validate_proposal(proposal: ActivityProposal | None, today: date) -> RuleResult:
    """Validate a proposal against the creation rules.

    Args:
        proposal: The submitted field set, possibly None.
        today: The system date the rules are evaluated against.

    Returns:
        VALID, or the first failing rule's code and reason.
    """
    if proposal is None:
        return _fail(ErrorCode.PROPOSAL_MISSING, "Request is missing")
    if not proposal.name:
        return _fail(ErrorCode.NAME_EMPTY, "Name is empty")
    if not proposal.description:
        return _fail(ErrorCode.DESCRIPTION_EMPTY, "Description is empty")

    if proposal.num_places < 1:
        return _fail(ErrorCode.NUM_PLACES_INVALID, "Number of places has to be greater than 0")

    if not 1 <= proposal.day <= 31:
        return _fail(ErrorCode.DAY_OUT_OF_RANGE, "Day has to be between 1 and 31")
    if not 1 <= proposal.month <= 12:
        return _fail(ErrorCode.MONTH_OUT_OF_RANGE, "Month has to be between 1 and 12")
    if proposal.age_limit < 0:
        return _fail(ErrorCode.AGE_LIMIT_NEGATIVE, "Age limit can not be less than 0")

    if not is_february_correct(proposal.year, proposal.month, proposal.day):
        return _fail(ErrorCode.FEBRUARY_OUT_OF_RANGE, "February has to be between 1 and 28 or 29")

    if proposal.year < today.year:
        return _fail(ErrorCode.YEAR_IN_PAST, f"Year has to be {today.year} or later")

    try:
        activity_date = compose_date(proposal)
    except ValidationError as exc:
        return _fail(exc.code, exc.message)
    if activity_date < today:
        return _fail(ErrorCode.DATE_IN_PAST, f"Date has to be {today.isoformat()} or later")

    if not 0 <= proposal.start_hour <= 23:
        return _fail(ErrorCode.START_HOUR_OUT_OF_RANGE, "Start hour has to be between 0 and 23")
    if not 0 <= proposal.start_minute <= 59:
        return _fail(ErrorCode.START_MINUTE_OUT_OF_RANGE, "Start minute has to be between 0 and 59")
    if not 0 <= proposal.end_hour <= 23:
        return _fail(ErrorCode.END_HOUR_OUT_OF_RANGE, "End hour has to be between 0 and 23")
    if not 0 <= proposal.end_minute <= 59:
        return _fail(ErrorCode.END_MINUTE_OUT_OF_RANGE, "End minute has to be between 0 and 59")

    return VALID
