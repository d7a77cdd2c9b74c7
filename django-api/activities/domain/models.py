"""Domain models representing persisted state.

These are plain domain objects with no persistence or API concerns.
Django ORM models are in activities/models.py (persistence layer).

Reference data (Member, Address, Tag, Rating) is immutable. Activity is the
one mutable entity: the lifecycle service loads it, applies a transition and
hands it back to the store.
"""

from dataclasses import dataclass, field
from datetime import date, time

from activities.domain.value_objects import ActivityId, AddressId, MemberId, TagId, TimeSlot


@dataclass(frozen=True)
class Member:
    """An identity that can create, join and rate activities."""

    id: MemberId
    username: str
    birth_date: date


@dataclass(frozen=True)
class Address:
    """Domain representation of an Address."""

    id: AddressId
    street: str
    city: str
    zip_code: str
    country: str


@dataclass(frozen=True)
class Tag:
    """Domain representation of a Tag."""

    id: TagId
    name: str


@dataclass(frozen=True)
class Rating:
    """A participant's score and comment for an activity."""

    activity_id: ActivityId
    member_id: MemberId
    rating: int
    comment: str


@dataclass(frozen=True)
class ActivityProposal:
    """Raw field set submitted to create or update an activity.

    Fields are kept as submitted so that validation can report which part
    is out of range before any date or time is composed.
    """

    name: str | None
    description: str | None
    year: int
    month: int
    day: int
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int
    num_places: int
    age_limit: int = 0


@dataclass
class Activity:
    """Domain representation of an Activity."""

    id: ActivityId
    name: str
    description: str
    date: date
    start_time: time
    end_time: time
    num_places: int
    creator: Member
    age_limit: int = 0
    address_id: AddressId | None = None
    tags: list[Tag] = field(default_factory=list)
    participants: list[Member] = field(default_factory=list)
    waiting_list: list[Member] = field(default_factory=list)

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(date=self.date, start_time=self.start_time, end_time=self.end_time)

    @property
    def free_places(self) -> int:
        return max(self.num_places - len(self.participants), 0)

    def has_tag(self, name: str) -> bool:
        return any(tag.name == name for tag in self.tags)
