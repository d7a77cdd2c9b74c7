"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import date, time
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ActivityId:
    """Unique identifier for an Activity."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AddressId:
    """Unique identifier for an Address."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TagId:
    """Unique identifier for a Tag."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MemberId:
    """Unique identifier for a Member."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TimeSlot:
    """The date and time window an activity occupies.

    Two activities booked at the same address collide when their slots are
    equal. Overlapping but unequal windows do not collide, and no ordering
    between start and end is enforced.
    """

    date: date
    start_time: time
    end_time: time

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.start_time:%H:%M}-{self.end_time:%H:%M}"
