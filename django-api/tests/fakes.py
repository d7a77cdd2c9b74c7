"""In-memory stores and builders for service and domain tests.

All stores share one InMemoryDatabase. ``atomic()`` serializes units of work
on a reentrant lock and restores the previous state when the block raises,
which mirrors what the Django stores get from ``transaction.atomic``.
"""

import copy
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, time

from activities.domain import (
    Activity,
    ActivityId,
    ActivityProposal,
    Address,
    AddressId,
    Member,
    MemberId,
    Rating,
    Tag,
    TagId,
    TimeSlot,
)
from activities.stores.interfaces import ActivityStore, AddressStore, MemberStore, RatingStore, TagStore

TODAY = date(2026, 3, 10)


class IntegrityViolation(Exception):
    """Raised where the database would reject a write: deleting a rated activity, or a second rating."""


class InMemoryDatabase:
    def __init__(self) -> None:
        self.activities: dict[ActivityId, Activity] = {}
        self.addresses: dict[AddressId, Address] = {}
        self.tags: dict[TagId, Tag] = {}
        self.members: dict[MemberId, Member] = {}
        self.ratings: dict[tuple[ActivityId, MemberId], Rating] = {}
        self._lock = threading.RLock()

    def _tables(self) -> tuple[dict, ...]:
        return (self.activities, self.addresses, self.tags, self.members, self.ratings)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            snapshot = copy.deepcopy(self._tables())
            try:
                yield
            except BaseException:
                for table, saved in zip(self._tables(), snapshot):
                    table.clear()
                    table.update(saved)
                raise


class InMemoryActivityStore(ActivityStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def _select(self, predicate) -> list[Activity]:
        rows = [a for a in self._db.activities.values() if predicate(a)]
        rows.sort(key=lambda a: (a.date, a.start_time))
        return copy.deepcopy(rows)

    def atomic(self):
        return self._db.atomic()

    def get_activity(self, activity_id: ActivityId, for_update: bool = False) -> Activity | None:
        return copy.deepcopy(self._db.activities.get(activity_id))

    def save_activity(self, activity: Activity) -> None:
        self._db.activities[activity.id] = copy.deepcopy(activity)

    def delete_activity(self, activity_id: ActivityId) -> None:
        if any(aid == activity_id for aid, _ in self._db.ratings):
            raise IntegrityViolation(f"Activity {activity_id} still has ratings")
        self._db.activities.pop(activity_id, None)

    def list_activities(self) -> list[Activity]:
        return self._select(lambda a: True)

    def list_by_address(self, address_id: AddressId) -> list[Activity]:
        return self._select(lambda a: a.address_id == address_id)

    def list_by_tag(self, tag_id: TagId) -> list[Activity]:
        return self._select(lambda a: any(t.id == tag_id for t in a.tags))

    def activity_exists_with(self, name: str, slot: TimeSlot, exclude: ActivityId | None = None) -> bool:
        return any(
            a.name == name and a.slot == slot and a.id != exclude for a in self._db.activities.values()
        )

    def search_by_name(self, fragment: str) -> list[Activity]:
        return self._select(lambda a: fragment.lower() in a.name.lower())

    def search_by_date(self, on_date: date) -> list[Activity]:
        return self._select(lambda a: a.date == on_date)

    def search_by_tag(self, fragment: str) -> list[Activity]:
        return self._select(lambda a: any(fragment.lower() in t.name.lower() for t in a.tags))

    def search_by_city(self, city: str, country: str) -> list[Activity]:
        def located(activity: Activity) -> bool:
            address = self._db.addresses.get(activity.address_id)
            return address is not None and address.city == city and address.country == country

        return self._select(located)


class InMemoryAddressStore(AddressStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_address(self, address_id: AddressId) -> Address | None:
        return self._db.addresses.get(address_id)

    def save_address(self, address: Address) -> None:
        self._db.addresses[address.id] = address

    def delete_address(self, address_id: AddressId) -> None:
        self._db.addresses.pop(address_id, None)

    def list_addresses(self) -> list[Address]:
        return sorted(self._db.addresses.values(), key=lambda a: (a.country, a.city, a.street))


class InMemoryTagStore(TagStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_tag(self, tag_id: TagId) -> Tag | None:
        return self._db.tags.get(tag_id)

    def get_tag_by_name(self, name: str) -> Tag | None:
        return next((t for t in self._db.tags.values() if t.name == name), None)

    def tag_exists(self, name: str) -> bool:
        return self.get_tag_by_name(name) is not None

    def save_tag(self, tag: Tag) -> None:
        self._db.tags[tag.id] = tag

    def delete_tag(self, tag_id: TagId) -> None:
        self._db.tags.pop(tag_id, None)

    def list_tags(self) -> list[Tag]:
        return sorted(self._db.tags.values(), key=lambda t: t.name)


class InMemoryMemberStore(MemberStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_member(self, member_id: MemberId) -> Member | None:
        return self._db.members.get(member_id)

    def get_member_by_username(self, username: str) -> Member | None:
        return next((m for m in self._db.members.values() if m.username == username), None)


class InMemoryRatingStore(RatingStore):
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_rating(self, activity_id: ActivityId, member_id: MemberId) -> Rating | None:
        return self._db.ratings.get((activity_id, member_id))

    def save_rating(self, rating: Rating) -> None:
        if (rating.activity_id, rating.member_id) in self._db.ratings:
            raise IntegrityViolation(f"Member {rating.member_id} already rated {rating.activity_id}")
        self._db.ratings[(rating.activity_id, rating.member_id)] = rating

    def delete_rating(self, activity_id: ActivityId, member_id: MemberId) -> None:
        self._db.ratings.pop((activity_id, member_id), None)

    def list_for_activity(self, activity_id: ActivityId) -> list[Rating]:
        return [r for (aid, _), r in self._db.ratings.items() if aid == activity_id]

    def delete_for_activity(self, activity_id: ActivityId) -> int:
        keys = [key for key in self._db.ratings if key[0] == activity_id]
        for key in keys:
            del self._db.ratings[key]
        return len(keys)

    def exists_for_activity(self, activity_id: ActivityId) -> bool:
        return any(aid == activity_id for aid, _ in self._db.ratings)


def build_member(username: str, birth_date: date = date(1990, 5, 20)) -> Member:
    return Member(id=MemberId.new(), username=username, birth_date=birth_date)


def build_activity(creator: Member, **overrides) -> Activity:
    fields = {
        "id": ActivityId.new(),
        "name": "Climbing",
        "description": "Bouldering session",
        "date": date(2026, 6, 1),
        "start_time": time(18, 0),
        "end_time": time(20, 0),
        "num_places": 2,
        "creator": creator,
    }
    fields.update(overrides)
    return Activity(**fields)


def build_proposal(**overrides) -> ActivityProposal:
    fields = {
        "name": "Climbing",
        "description": "Bouldering session",
        "year": 2026,
        "month": 6,
        "day": 1,
        "start_hour": 18,
        "start_minute": 0,
        "end_hour": 20,
        "end_minute": 0,
        "num_places": 2,
        "age_limit": 0,
    }
    fields.update(overrides)
    return ActivityProposal(**fields)
