"""Activity service - lifecycle orchestration lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return typed outcomes carrying domain models or failure reasons

Every public operation runs in one unit of work. Not-found checks come
before the creator gate; the gate comes before any mutation.
"""

import random
from collections.abc import Callable, Iterable
from contextlib import AbstractContextManager
from datetime import date

import structlog

from activities.domain import (
    Activity,
    ActivityId,
    ActivityProposal,
    Address,
    AddressId,
    Member,
    MemberId,
    Outcome,
    Tag,
    TagId,
)
from activities.domain import enrollment
from activities.domain.authorization import ensure_creator
from activities.domain.enrollment import EnrollmentStatus
from activities.domain.errors import (
    ActivityNotFoundError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ValidationError,
)
from activities.domain.rules import compose_date, compose_times, validate_proposal
from activities.services.base import RatingsGateway, parse_id, unit_of_work
from activities.services.booking_service import BookingConflictDetector, BookingDecision
from activities.stores.interfaces import ActivityStore, AddressStore, MemberStore, TagStore

logger = structlog.get_logger(__name__)


def _system_date() -> date:
    return date.today()


class ActivityService:
    """Service for activity lifecycle, booking and enrollment."""

    def __init__(
        self,
        activities: ActivityStore,
        addresses: AddressStore,
        tags: TagStore,
        members: MemberStore,
        ratings: RatingsGateway,
        rng: random.Random | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._activities = activities
        self._addresses = addresses
        self._tags = tags
        self._members = members
        self._ratings = ratings
        self._booking = BookingConflictDetector(activities, ratings)
        self._rng = rng or random.Random()
        self._today = today or _system_date

    def _atomic(self) -> AbstractContextManager[None]:
        return self._activities.atomic()

    def _load_activity(self, activity_id: str | ActivityId, for_update: bool = False) -> Activity:
        activity = self._activities.get_activity(parse_id(ActivityId, activity_id, "activity"), for_update=for_update)
        if activity is None:
            raise ActivityNotFoundError()
        return activity

    def _load_address(self, address_id: str | AddressId) -> Address:
        address = self._addresses.get_address(parse_id(AddressId, address_id, "address"))
        if address is None:
            raise NotFoundError(code=ErrorCode.ADDRESS_NOT_FOUND, message="Address not found")
        return address

    def _load_tag(self, tag_id: str | TagId) -> Tag:
        tag = self._tags.get_tag(parse_id(TagId, tag_id, "tag"))
        if tag is None:
            raise NotFoundError(code=ErrorCode.TAG_NOT_FOUND, message="Tag not found")
        return tag

    def _load_member(self, member_id: str | MemberId) -> Member:
        member = self._members.get_member(parse_id(MemberId, member_id, "member"))
        if member is None:
            raise NotFoundError(code=ErrorCode.MEMBER_NOT_FOUND, message="User not found")
        return member

    # ------------------------------------------------------------------ reads

    @unit_of_work
    def get_activity(self, activity_id: str | ActivityId) -> Outcome[Activity]:
        return Outcome.success(self._load_activity(activity_id))

    @unit_of_work
    def list_activities(self) -> Outcome[list[Activity]]:
        return Outcome.success(self._activities.list_activities())

    @unit_of_work
    def list_upcoming(self) -> Outcome[list[Activity]]:
        """Return activities taking place after today."""
        today = self._today()
        return Outcome.success([a for a in self._activities.list_activities() if a.date > today])

    @unit_of_work
    def search(
        self,
        tag: str | None = None,
        city: str | None = None,
        country: str | None = None,
        name: str | None = None,
        on_date: date | None = None,
    ) -> Outcome[list[Activity]]:
        """Search by one criterion.

        Only the first usable criterion applies, in this order: tag, city
        with country, name, date.
        """
        if tag is not None:
            return Outcome.success(self._activities.search_by_tag(tag))
        if city is not None and country is not None:
            return Outcome.success(self._activities.search_by_city(city, country))
        if name is not None:
            return Outcome.success(self._activities.search_by_name(name))
        if on_date is not None:
            return Outcome.success(self._activities.search_by_date(on_date))
        raise ValidationError(code=ErrorCode.NO_SEARCH_CRITERIA, message="No search parameters")

    # -------------------------------------------------------------- lifecycle

    @unit_of_work
    def create_activity(self, identity: Member, proposal: ActivityProposal | None) -> Outcome[Activity]:
        validate_proposal(proposal, self._today()).raise_for_failure()
        start_time, end_time = compose_times(proposal)
        activity = Activity(
            id=ActivityId.new(),
            name=proposal.name,
            description=proposal.description,
            date=compose_date(proposal),
            start_time=start_time,
            end_time=end_time,
            num_places=proposal.num_places,
            age_limit=proposal.age_limit if proposal.age_limit > 0 else 0,
            creator=identity,
        )
        self._activities.save_activity(activity)
        logger.info("activity_created", activity_id=str(activity.id), username=identity.username)
        return Outcome.success(activity, message="Activity created")

    @unit_of_work
    def update_activity(
        self, identity: Member, activity_id: str | ActivityId, proposal: ActivityProposal | None
    ) -> Outcome[Activity]:
        """Apply every field of the proposal to an existing activity.

        Unlike creation, the validation rules are not run here. A missing name or
        description, and fields that cannot form a date or time at all, are
        still rejected.
        """
        activity = self._load_activity(activity_id, for_update=True)
        ensure_creator(identity, activity)
        if proposal is None:
            raise ValidationError(code=ErrorCode.PROPOSAL_MISSING, message="Request is missing")
        if proposal.name is None:
            raise ValidationError(code=ErrorCode.NAME_EMPTY, message="Name is empty")
        if proposal.description is None:
            raise ValidationError(code=ErrorCode.DESCRIPTION_EMPTY, message="Description is empty")

        activity_date = compose_date(proposal)
        start_time, end_time = compose_times(proposal)
        activity.name = proposal.name
        activity.description = proposal.description
        activity.date = activity_date
        activity.start_time = start_time
        activity.end_time = end_time
        activity.num_places = proposal.num_places
        activity.age_limit = proposal.age_limit

        if self._activities.activity_exists_with(activity.name, activity.slot, exclude=activity.id):
            raise ConflictError(code=ErrorCode.ACTIVITY_ALREADY_EXISTS, message="Activity already exists")
        self._activities.save_activity(activity)
        logger.info("activity_updated", activity_id=str(activity.id), username=identity.username)
        return Outcome.success(activity, message="Activity updated")

    @unit_of_work
    def delete_activity(self, identity: Member, activity_id: str | ActivityId) -> Outcome[None]:
        """Delete an activity once all of its ratings are gone."""
        activity = self._load_activity(activity_id, for_update=True)
        ensure_creator(identity, activity)
        if not self._ratings.clear_for_activity(activity.id):
            raise ConflictError(code=ErrorCode.RATINGS_NOT_CLEARED, message="Ratings couldn't be deleted")
        self._activities.delete_activity(activity.id)
        logger.info("activity_deleted", activity_id=str(activity.id), username=identity.username)
        return Outcome.success(message=f"Activity {activity.name} successfully deleted")

    # ---------------------------------------------------------- composition

    @unit_of_work
    def attach_address(
        self, identity: Member, activity_id: str | ActivityId, address_id: str | AddressId
    ) -> Outcome[Activity]:
        activity = self._load_activity(activity_id, for_update=True)
        address = self._load_address(address_id)
        ensure_creator(identity, activity)

        decision = self._booking.check(activity, address.id)
        if decision is BookingDecision.DUPLICATE_DELETED:
            # The deletion is kept: report without raising.
            return Outcome.failure(
                ConflictError(
                    code=ErrorCode.DUPLICATE_DELETED,
                    message="Activity deleted because it already exists",
                )
            )
        if decision is BookingDecision.SLOT_TAKEN:
            return Outcome.failure(
                ConflictError(
                    code=ErrorCode.SLOT_TAKEN,
                    message="The address is already booked for another activity",
                )
            )

        activity.address_id = address.id
        self._activities.save_activity(activity)
        logger.info("address_attached", activity_id=str(activity.id), address_id=str(address.id))
        return Outcome.success(activity, message="Address successfully added")

    @unit_of_work
    def add_tags(self, identity: Member, activity_id: str | ActivityId, names: Iterable[str]) -> Outcome[Activity]:
        """Attach every known tag from ``names`` that is not attached yet."""
        activity = self._load_activity(activity_id, for_update=True)
        ensure_creator(identity, activity)

        added = []
        for name in names:
            tag = self._tags.get_tag_by_name(name)
            if tag is None or activity.has_tag(tag.name):
                continue
            activity.tags.append(tag)
            added.append(tag.name)

        if not activity.tags:
            raise ValidationError(code=ErrorCode.NO_TAGS_ATTACHED, message="None of the requested tags exist")
        self._activities.save_activity(activity)
        logger.info("tags_added", activity_id=str(activity.id), tags=added)
        return Outcome.success(activity, message="Tags successfully added")

    @unit_of_work
    def remove_address_from_all(self, address_id: str | AddressId) -> Outcome[int]:
        """Detach an address from every activity booked at it."""
        address = self._load_address(address_id)
        count = 0
        for booked in self._activities.list_by_address(address.id):
            activity = self._load_activity(booked.id, for_update=True)
            activity.address_id = None
            self._activities.save_activity(activity)
            count += 1
        logger.info("address_removed_from_activities", address_id=str(address.id), count=count)
        return Outcome.success(count, message="Address successfully removed from activities")

    @unit_of_work
    def remove_tag_from_all(self, tag_id: str | TagId) -> Outcome[int]:
        """Detach a tag from every activity carrying it."""
        tag = self._load_tag(tag_id)
        count = 0
        for tagged in self._activities.list_by_tag(tag.id):
            activity = self._load_activity(tagged.id, for_update=True)
            activity.tags = [t for t in activity.tags if t.id != tag.id]
            self._activities.save_activity(activity)
            count += 1
        logger.info("tag_removed_from_activities", tag_id=str(tag.id), count=count)
        return Outcome.success(count, message=f"Tag {tag.name} successfully removed from activities")

    # ------------------------------------------------------------ enrollment

    @unit_of_work
    def enroll(self, identity: Member, activity_id: str | ActivityId) -> Outcome[EnrollmentStatus]:
        """Join an activity, or its waiting list when every place is taken."""
        activity = self._load_activity(activity_id, for_update=True)
        status = enrollment.enroll(activity, identity, self._today())
        self._activities.save_activity(activity)
        logger.info(
            "member_enrolled",
            activity_id=str(activity.id),
            username=identity.username,
            status=status.value,
        )
        if status is EnrollmentStatus.WAITLISTED:
            return Outcome.success(status, message=f"Participant {identity.username} added to waiting list")
        return Outcome.success(status, message=f"New participant {identity.username} added")

    @unit_of_work
    def remove_participant(
        self, identity: Member, activity_id: str | ActivityId, member_id: str | MemberId
    ) -> Outcome[Member]:
        activity = self._load_activity(activity_id, for_update=True)
        member = self._load_member(member_id)
        ensure_creator(identity, activity)
        removed = enrollment.remove_participant(activity, member.id)
        self._activities.save_activity(activity)
        logger.info("participant_removed", activity_id=str(activity.id), username=removed.username)
        return Outcome.success(removed, message=f"User {removed.username} successfully deleted participation")

    @unit_of_work
    def promote_from_waitlist(self, identity: Member, activity_id: str | ActivityId) -> Outcome[Member]:
        """Fill one free place with a randomly chosen waiting member."""
        activity = self._load_activity(activity_id, for_update=True)
        ensure_creator(identity, activity)
        promoted = enrollment.promote_from_waitlist(activity, self._rng)
        if promoted is None:
            return Outcome.success(message="No waiting participants")
        self._activities.save_activity(activity)
        logger.info("participant_promoted", activity_id=str(activity.id), username=promoted.username)
        return Outcome.success(promoted, message=f"Participant {promoted.username} promoted from waiting list")
