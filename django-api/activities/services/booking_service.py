"""Address booking conflict detection."""

from enum import Enum

import structlog

from activities.domain import Activity, AddressId
from activities.domain.errors import ConflictError, ErrorCode
from activities.services.base import RatingsGateway
from activities.stores.interfaces import ActivityStore

logger = structlog.get_logger(__name__)


class BookingDecision(Enum):
    NO_CONFLICT = "NO_CONFLICT"
    DUPLICATE_DELETED = "DUPLICATE_DELETED"
    SLOT_TAKEN = "SLOT_TAKEN"


class BookingConflictDetector:
    """Decide whether an activity may be booked at an address.

    An activity already bound to the address with the same name and slot
    wins over the candidate: the candidate and its ratings are deleted. An
    activity with the same slot under a different name makes the address
    unavailable.
    """

    def __init__(self, store: ActivityStore, ratings: RatingsGateway) -> None:
        self._store = store
        self._ratings = ratings

    def check(self, candidate: Activity, address_id: AddressId) -> BookingDecision:
        """Compare the candidate with every activity booked at the address.

        Raises:
            ConflictError: If a duplicate candidate's ratings could not be cleared.
        """
        for booked in self._store.list_by_address(address_id):
            if booked.id == candidate.id:
                continue
            if booked.slot != candidate.slot:
                continue
            if booked.name == candidate.name:
                self._delete_duplicate(candidate, booked, address_id)
                return BookingDecision.DUPLICATE_DELETED
            logger.info(
                "address_slot_taken",
                activity_id=str(candidate.id),
                booked_activity_id=str(booked.id),
                address_id=str(address_id),
                slot=str(candidate.slot),
            )
            return BookingDecision.SLOT_TAKEN
        return BookingDecision.NO_CONFLICT

    def _delete_duplicate(self, candidate: Activity, kept: Activity, address_id: AddressId) -> None:
        if not self._ratings.clear_for_activity(candidate.id):
            raise ConflictError(code=ErrorCode.RATINGS_NOT_CLEARED, message="Ratings couldn't be deleted")
        self._store.delete_activity(candidate.id)
        logger.info(
            "duplicate_activity_deleted",
            activity_id=str(candidate.id),
            kept_activity_id=str(kept.id),
            address_id=str(address_id),
        )
