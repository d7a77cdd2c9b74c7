"""Domain error codes for the activities module."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from activities.domain.outcomes import OutcomeKind


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"

    # Proposal validation, in rule evaluation order.
    PROPOSAL_MISSING = "PROPOSAL_MISSING"
    NAME_EMPTY = "NAME_EMPTY"
    DESCRIPTION_EMPTY = "DESCRIPTION_EMPTY"
    NUM_PLACES_INVALID = "NUM_PLACES_INVALID"
    DAY_OUT_OF_RANGE = "DAY_OUT_OF_RANGE"
    MONTH_OUT_OF_RANGE = "MONTH_OUT_OF_RANGE"
    AGE_LIMIT_NEGATIVE = "AGE_LIMIT_NEGATIVE"
    FEBRUARY_OUT_OF_RANGE = "FEBRUARY_OUT_OF_RANGE"
    YEAR_IN_PAST = "YEAR_IN_PAST"
    INVALID_DATE = "INVALID_DATE"
    DATE_IN_PAST = "DATE_IN_PAST"
    START_HOUR_OUT_OF_RANGE = "START_HOUR_OUT_OF_RANGE"
    START_MINUTE_OUT_OF_RANGE = "START_MINUTE_OUT_OF_RANGE"
    END_HOUR_OUT_OF_RANGE = "END_HOUR_OUT_OF_RANGE"
    END_MINUTE_OUT_OF_RANGE = "END_MINUTE_OUT_OF_RANGE"
    INVALID_TIME = "INVALID_TIME"

    NO_TAGS_ATTACHED = "NO_TAGS_ATTACHED"
    NO_SEARCH_CRITERIA = "NO_SEARCH_CRITERIA"
    RATING_OUT_OF_RANGE = "RATING_OUT_OF_RANGE"
    TAG_NAME_EMPTY = "TAG_NAME_EMPTY"
    ADDRESS_INCOMPLETE = "ADDRESS_INCOMPLETE"

    ACTIVITY_NOT_FOUND = "ACTIVITY_NOT_FOUND"
    ADDRESS_NOT_FOUND = "ADDRESS_NOT_FOUND"
    TAG_NOT_FOUND = "TAG_NOT_FOUND"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    RATING_NOT_FOUND = "RATING_NOT_FOUND"
    NOT_A_PARTICIPANT = "NOT_A_PARTICIPANT"

    DUPLICATE_DELETED = "DUPLICATE_DELETED"
    SLOT_TAKEN = "SLOT_TAKEN"
    ACTIVITY_ALREADY_EXISTS = "ACTIVITY_ALREADY_EXISTS"
    ALREADY_PARTICIPANT = "ALREADY_PARTICIPANT"
    ALREADY_WAITLISTED = "ALREADY_WAITLISTED"
    RATINGS_NOT_CLEARED = "RATINGS_NOT_CLEARED"
    RATING_ALREADY_EXISTS = "RATING_ALREADY_EXISTS"
    TAG_ALREADY_EXISTS = "TAG_ALREADY_EXISTS"
    NO_AVAILABLE_PLACES = "NO_AVAILABLE_PLACES"

    NOT_CREATOR = "NOT_CREATOR"
    TOO_YOUNG = "TOO_YOUNG"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    kind: ClassVar[OutcomeKind]

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when a proposal or argument is structurally invalid."""

    kind = OutcomeKind.VALIDATION_FAILED


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, what: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {what} ID format",
        )


class NotFoundError(DomainError):
    """Raised when an activity, address, tag, member or rating is absent."""

    kind = OutcomeKind.NOT_FOUND


class ActivityNotFoundError(NotFoundError):
    """Raised when an activity is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACTIVITY_NOT_FOUND,
            message="Activity not found",
        )


class ConflictError(DomainError):
    """Raised when a booking, enrollment or name/date/time collides."""

    kind = OutcomeKind.CONFLICT


class CapacityError(ConflictError):
    """Raised when no place is free for a waiting participant."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_AVAILABLE_PLACES,
            message="No available places",
        )


class AuthorizationError(DomainError):
    """Raised when the acting member is not the activity creator."""

    kind = OutcomeKind.UNAUTHORIZED

    def __init__(self, username: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_CREATOR,
            message=f"User {username} is not the creator",
        )


class EligibilityError(DomainError):
    """Raised when a member does not satisfy the activity age limit."""

    kind = OutcomeKind.FORBIDDEN

    def __init__(self, username: str) -> None:
        super().__init__(
            code=ErrorCode.TOO_YOUNG,
            message=f"User {username} does not meet the age limit",
        )
