"""Capacity and waiting list state machine.

Per (activity, member) pair the allowed transitions are::

    NOT_ENROLLED -> PARTICIPANT
    NOT_ENROLLED -> WAITLISTED
    WAITLISTED   -> PARTICIPANT   (promotion)
    PARTICIPANT  -> NOT_ENROLLED  (removal by the creator)

A participant is never moved back to the waiting list. Functions mutate the
activity in place; the caller persists it inside the same unit of work that
loaded it.
"""

import random
from datetime import date
from enum import Enum

from activities.domain.errors import CapacityError, ConflictError, EligibilityError, ErrorCode, NotFoundError
from activities.domain.models import Activity, Member
from activities.domain.value_objects import MemberId


class EnrollmentStatus(Enum):
    NOT_ENROLLED = "NOT_ENROLLED"
    PARTICIPANT = "PARTICIPANT"
    WAITLISTED = "WAITLISTED"


def age_on(birth_date: date, today: date) -> int:
    """Age in whole years on ``today``."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def meets_age_limit(activity: Activity, member: Member, today: date) -> bool:
    """Return True if the member may join under the activity's age limit.

    A limit of 0 admits everyone. A positive limit admits only members
    younger than the limit.
    """
    if activity.age_limit == 0:
        return True
    return age_on(member.birth_date, today) < activity.age_limit


def enrollment_status(activity: Activity, member_id: MemberId) -> EnrollmentStatus:
    if any(p.id == member_id for p in activity.participants):
        return EnrollmentStatus.PARTICIPANT
    if any(w.id == member_id for w in activity.waiting_list):
        return EnrollmentStatus.WAITLISTED
    return EnrollmentStatus.NOT_ENROLLED


def enroll(activity: Activity, member: Member, today: date) -> EnrollmentStatus:
    """Add a member as participant, or to the waiting list when full.

    Returns:
        PARTICIPANT or WAITLISTED, depending on where the member landed.

    Raises:
        ConflictError: If the member is already a participant or waitlisted.
        EligibilityError: If the member does not meet the age limit.
    """
    status = enrollment_status(activity, member.id)
    if status is EnrollmentStatus.PARTICIPANT:
        raise ConflictError(
            code=ErrorCode.ALREADY_PARTICIPANT,
            message=f"User {member.username} is already a participant",
        )
    if status is EnrollmentStatus.WAITLISTED:
        raise ConflictError(
            code=ErrorCode.ALREADY_WAITLISTED,
            message=f"User {member.username} is already in the waiting list",
        )
    if not meets_age_limit(activity, member, today):
        raise EligibilityError(member.username)

    if len(activity.participants) < activity.num_places:
        activity.participants.append(member)
        return EnrollmentStatus.PARTICIPANT
    activity.waiting_list.append(member)
    return EnrollmentStatus.WAITLISTED


def promote_from_waitlist(activity: Activity, rng: random.Random) -> Member | None:
    """Move one waiting member, chosen uniformly at random, to participants.

    Returns:
        The promoted member, or None when the waiting list is empty.

    Raises:
        CapacityError: If every place is already taken.
    """
    if len(activity.participants) >= activity.num_places:
        raise CapacityError()
    if not activity.waiting_list:
        return None
    promoted = activity.waiting_list.pop(rng.randrange(len(activity.waiting_list)))
    activity.participants.append(promoted)
    return promoted


def remove_participant(activity: Activity, member_id: MemberId) -> Member:
    """Remove a participant. Waiting members are not promoted automatically.

    Raises:
        NotFoundError: If the member is not a participant.
    """
    for index, participant in enumerate(activity.participants):
        if participant.id == member_id:
            return activity.participants.pop(index)
    raise NotFoundError(code=ErrorCode.NOT_A_PARTICIPANT, message="User is not a participant")
