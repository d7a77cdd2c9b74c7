"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date

from activities.domain import (
    Activity,
    ActivityId,
    Address,
    AddressId,
    Member,
    MemberId,
    Rating,
    Tag,
    TagId,
    TimeSlot,
)


class ActivityStore(ABC):
    """Interface for activity persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Return a context manager wrapping one read-modify-write unit of work."""
        ...

    @abstractmethod
    def get_activity(self, activity_id: ActivityId, for_update: bool = False) -> Activity | None:
        """Return an activity by ID, or None if not found.

        With ``for_update`` the activity stays locked until the enclosing
        unit of work ends.
        """
        ...

    @abstractmethod
    def save_activity(self, activity: Activity) -> None:
        """Insert or replace an activity with its tags and enrollments."""
        ...

    @abstractmethod
    def delete_activity(self, activity_id: ActivityId) -> None:
        ...

    @abstractmethod
    def list_activities(self) -> list[Activity]:
        """Return all activities ordered by date then start time."""
        ...

    @abstractmethod
    def list_by_address(self, address_id: AddressId) -> list[Activity]:
        ...

    @abstractmethod
    def list_by_tag(self, tag_id: TagId) -> list[Activity]:
        ...

    @abstractmethod
    def activity_exists_with(self, name: str, slot: TimeSlot, exclude: ActivityId | None = None) -> bool:
        """Check if an activity other than ``exclude`` has this name and exact slot."""
        ...

    @abstractmethod
    def search_by_name(self, fragment: str) -> list[Activity]:
        """Return activities whose name contains ``fragment``."""
        ...

    @abstractmethod
    def search_by_date(self, on_date: date) -> list[Activity]:
        ...

    @abstractmethod
    def search_by_tag(self, fragment: str) -> list[Activity]:
        """Return activities carrying a tag whose name contains ``fragment``."""
        ...

    @abstractmethod
    def search_by_city(self, city: str, country: str) -> list[Activity]:
        ...


class AddressStore(ABC):
    """Interface for address persistence operations."""

    @abstractmethod
    def get_address(self, address_id: AddressId) -> Address | None:
        ...

    @abstractmethod
    def save_address(self, address: Address) -> None:
        ...

    @abstractmethod
    def delete_address(self, address_id: AddressId) -> None:
        ...

    @abstractmethod
    def list_addresses(self) -> list[Address]:
        ...


class TagStore(ABC):
    """Interface for tag persistence operations."""

    @abstractmethod
    def get_tag(self, tag_id: TagId) -> Tag | None:
        ...

    @abstractmethod
    def get_tag_by_name(self, name: str) -> Tag | None:
        ...

    @abstractmethod
    def tag_exists(self, name: str) -> bool:
        ...

    @abstractmethod
    def save_tag(self, tag: Tag) -> None:
        ...

    @abstractmethod
    def delete_tag(self, tag_id: TagId) -> None:
        ...

    @abstractmethod
    def list_tags(self) -> list[Tag]:
        """Return all tags ordered by name."""
        ...


class MemberStore(ABC):
    """Interface for member lookups."""

    @abstractmethod
    def get_member(self, member_id: MemberId) -> Member | None:
        ...

    @abstractmethod
    def get_member_by_username(self, username: str) -> Member | None:
        ...


class RatingStore(ABC):
    """Interface for rating persistence operations."""

    @abstractmethod
    def get_rating(self, activity_id: ActivityId, member_id: MemberId) -> Rating | None:
        ...

    @abstractmethod
    def save_rating(self, rating: Rating) -> None:
        """Insert a new rating. A second rating by the same member is rejected."""
        ...

    @abstractmethod
    def delete_rating(self, activity_id: ActivityId, member_id: MemberId) -> None:
        ...

    @abstractmethod
    def list_for_activity(self, activity_id: ActivityId) -> list[Rating]:
        ...

    @abstractmethod
    def delete_for_activity(self, activity_id: ActivityId) -> int:
        """Delete every rating of an activity and return how many were removed."""
        ...

    @abstractmethod
    def exists_for_activity(self, activity_id: ActivityId) -> bool:
        ...
