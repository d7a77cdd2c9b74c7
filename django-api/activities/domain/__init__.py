from activities.domain.models import Activity, ActivityProposal, Address, Member, Rating, Tag
from activities.domain.outcomes import Outcome, OutcomeKind
from activities.domain.value_objects import ActivityId, AddressId, MemberId, TagId, TimeSlot

__all__ = [
    "Activity",
    "ActivityProposal",
    "Address",
    "Member",
    "Rating",
    "Tag",
    "ActivityId",
    "AddressId",
    "MemberId",
    "TagId",
    "TimeSlot",
    "Outcome",
    "OutcomeKind",
]
