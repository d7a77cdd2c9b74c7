"""Rating service - opinions left by participants."""

from contextlib import AbstractContextManager

import structlog

from activities.domain import Activity, ActivityId, Member, Outcome, Rating
from activities.domain.enrollment import EnrollmentStatus, enrollment_status
from activities.domain.errors import ActivityNotFoundError, ConflictError, ErrorCode, NotFoundError, ValidationError
from activities.services.base import parse_id, unit_of_work
from activities.stores.interfaces import ActivityStore, RatingStore

logger = structlog.get_logger(__name__)

MIN_RATING = 0
MAX_RATING = 10


class RatingService:
    """Service for rating operations."""

    def __init__(self, activities: ActivityStore, ratings: RatingStore) -> None:
        self._activities = activities
        self._ratings = ratings

    def _atomic(self) -> AbstractContextManager[None]:
        return self._activities.atomic()

    def _load_activity(self, activity_id: str | ActivityId, for_update: bool = False) -> Activity:
        activity = self._activities.get_activity(parse_id(ActivityId, activity_id, "activity"), for_update=for_update)
        if activity is None:
            raise ActivityNotFoundError()
        return activity

    def clear_for_activity(self, activity_id: ActivityId) -> bool:
        """Delete every rating of an activity.

        Returns:
            True if no rating is left afterwards.
        """
        removed = self._ratings.delete_for_activity(activity_id)
        cleared = not self._ratings.exists_for_activity(activity_id)
        logger.info("ratings_cleared", activity_id=str(activity_id), removed=removed, cleared=cleared)
        return cleared

    @unit_of_work
    def list_for_activity(self, activity_id: str | ActivityId) -> Outcome[list[Rating]]:
        activity = self._load_activity(activity_id)
        return Outcome.success(self._ratings.list_for_activity(activity.id))

    @unit_of_work
    def add_rating(
        self, identity: Member, activity_id: str | ActivityId, rating: int, comment: str = ""
    ) -> Outcome[Rating]:
        """Rate an activity the member takes part in.

        Raises:
            ConflictError: If the member is not a participant or already rated.
            ValidationError: If the rating is outside 0..10.
        """
        activity = self._load_activity(activity_id, for_update=True)
        if enrollment_status(activity, identity.id) is not EnrollmentStatus.PARTICIPANT:
            raise ConflictError(
                code=ErrorCode.NOT_A_PARTICIPANT,
                message=f"User {identity.username} is not a participant",
            )
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                code=ErrorCode.RATING_OUT_OF_RANGE,
                message=f"Rating has to be between {MIN_RATING} and {MAX_RATING}",
            )
        if self._ratings.get_rating(activity.id, identity.id) is not None:
            raise ConflictError(
                code=ErrorCode.RATING_ALREADY_EXISTS,
                message=f"User {identity.username} already added an opinion to this activity",
            )

        created = Rating(activity_id=activity.id, member_id=identity.id, rating=rating, comment=comment)
        self._ratings.save_rating(created)
        logger.info("rating_added", activity_id=str(activity.id), username=identity.username, rating=rating)
        return Outcome.success(created, message="Opinion added")

    @unit_of_work
    def delete_rating(self, identity: Member, activity_id: str | ActivityId) -> Outcome[None]:
        """Delete the member's own rating of an activity."""
        parsed = parse_id(ActivityId, activity_id, "activity")
        if self._ratings.get_rating(parsed, identity.id) is None:
            raise NotFoundError(code=ErrorCode.RATING_NOT_FOUND, message="No opinion was found")
        self._ratings.delete_rating(parsed, identity.id)
        logger.info("rating_deleted", activity_id=str(parsed), username=identity.username)
        return Outcome.success(message="Opinion was successfully deleted")
