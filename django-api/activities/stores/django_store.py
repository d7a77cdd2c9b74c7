"""Django ORM implementations of the stores.

Each store queries the ORM and converts rows to domain models. Enrollment
order is kept in ``Enrollment.position`` and rewritten on every save.
"""

from contextlib import AbstractContextManager
from datetime import date

from django.db import transaction
from django.db.models import Prefetch, QuerySet

from activities import models
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
from activities.stores.interfaces import ActivityStore, AddressStore, MemberStore, RatingStore, TagStore


def _member_to_domain(row: models.Member) -> Member:
    return Member(id=MemberId(row.id), username=row.username, birth_date=row.birth_date)


def _address_to_domain(row: models.Address) -> Address:
    return Address(
        id=AddressId(row.id),
        street=row.street,
        city=row.city,
        zip_code=row.zip_code,
        country=row.country,
    )


def _tag_to_domain(row: models.Tag) -> Tag:
    return Tag(id=TagId(row.id), name=row.name)


def _activity_to_domain(row: models.Activity) -> Activity:
    enrollments = list(row.enrollments.all())
    return Activity(
        id=ActivityId(row.id),
        name=row.name,
        description=row.description,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        num_places=row.num_places,
        age_limit=row.age_limit,
        creator=_member_to_domain(row.creator),
        address_id=AddressId(row.address_id) if row.address_id else None,
        tags=[_tag_to_domain(tag) for tag in row.tags.all()],
        participants=[
            _member_to_domain(e.member) for e in enrollments if e.status == models.Enrollment.Status.PARTICIPANT
        ],
        waiting_list=[
            _member_to_domain(e.member) for e in enrollments if e.status == models.Enrollment.Status.WAITLISTED
        ],
    )


def _rating_to_domain(row: models.Rating) -> Rating:
    return Rating(
        activity_id=ActivityId(row.activity_id),
        member_id=MemberId(row.member_id),
        rating=row.rating,
        comment=row.comment,
    )


class DjangoActivityStore(ActivityStore):
    """Relational activity store using Django ORM."""

    def _queryset(self) -> QuerySet[models.Activity]:
        return models.Activity.objects.select_related("creator").prefetch_related(
            "tags",
            Prefetch(
                "enrollments",
                queryset=models.Enrollment.objects.select_related("member").order_by("position"),
            ),
        )

    def _to_domain_list(self, queryset: QuerySet[models.Activity]) -> list[Activity]:
        return [_activity_to_domain(row) for row in queryset]

    def atomic(self) -> AbstractContextManager[None]:
        return transaction.atomic()

    def get_activity(self, activity_id: ActivityId, for_update: bool = False) -> Activity | None:
        queryset = self._queryset()
        if for_update:
            queryset = queryset.select_for_update(of=("self",))
        row = queryset.filter(id=activity_id.value).first()
        return _activity_to_domain(row) if row else None

    @transaction.atomic
    def save_activity(self, activity: Activity) -> None:
        row, _ = models.Activity.objects.update_or_create(
            id=activity.id.value,
            defaults={
                "name": activity.name,
                "description": activity.description,
                "date": activity.date,
                "start_time": activity.start_time,
                "end_time": activity.end_time,
                "num_places": activity.num_places,
                "age_limit": activity.age_limit,
                "creator_id": activity.creator.id.value,
                "address_id": activity.address_id.value if activity.address_id else None,
            },
        )
        row.tags.set([tag.id.value for tag in activity.tags])

        models.Enrollment.objects.filter(activity=row).delete()
        members = [(m, models.Enrollment.Status.PARTICIPANT) for m in activity.participants]
        members += [(m, models.Enrollment.Status.WAITLISTED) for m in activity.waiting_list]
        models.Enrollment.objects.bulk_create(
            models.Enrollment(activity=row, member_id=member.id.value, status=status, position=position)
            for position, (member, status) in enumerate(members)
        )

    def delete_activity(self, activity_id: ActivityId) -> None:
        models.Activity.objects.filter(id=activity_id.value).delete()

    def list_activities(self) -> list[Activity]:
        return self._to_domain_list(self._queryset())

    def list_by_address(self, address_id: AddressId) -> list[Activity]:
        return self._to_domain_list(self._queryset().filter(address_id=address_id.value))

    def list_by_tag(self, tag_id: TagId) -> list[Activity]:
        return self._to_domain_list(self._queryset().filter(tags__id=tag_id.value).distinct())

    def activity_exists_with(self, name: str, slot: TimeSlot, exclude: ActivityId | None = None) -> bool:
        queryset = models.Activity.objects.filter(
            name=name,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )
        if exclude is not None:
            queryset = queryset.exclude(id=exclude.value)
        return queryset.exists()

    def search_by_name(self, fragment: str) -> list[Activity]:
        return self._to_domain_list(self._queryset().filter(name__icontains=fragment))

    def search_by_date(self, on_date: date) -> list[Activity]:
        return self._to_domain_list(self._queryset().filter(date=on_date))

    def search_by_tag(self, fragment: str) -> list[Activity]:
        return self._to_domain_list(self._queryset().filter(tags__name__icontains=fragment).distinct())

    def search_by_city(self, city: str, country: str) -> list[Activity]:
        return self._to_domain_list(self._queryset().filter(address__city=city, address__country=country))


class DjangoAddressStore(AddressStore):
    """Relational address store using Django ORM."""

    def get_address(self, address_id: AddressId) -> Address | None:
        row = models.Address.objects.filter(id=address_id.value).first()
        return _address_to_domain(row) if row else None

    def save_address(self, address: Address) -> None:
        models.Address.objects.update_or_create(
            id=address.id.value,
            defaults={
                "street": address.street,
                "city": address.city,
                "zip_code": address.zip_code,
                "country": address.country,
            },
        )

    def delete_address(self, address_id: AddressId) -> None:
        models.Address.objects.filter(id=address_id.value).delete()

    def list_addresses(self) -> list[Address]:
        return [_address_to_domain(row) for row in models.Address.objects.all()]


class DjangoTagStore(TagStore):
    """Relational tag store using Django ORM."""

    def get_tag(self, tag_id: TagId) -> Tag | None:
        row = models.Tag.objects.filter(id=tag_id.value).first()
        return _tag_to_domain(row) if row else None

    def get_tag_by_name(self, name: str) -> Tag | None:
        row = models.Tag.objects.filter(name=name).first()
        return _tag_to_domain(row) if row else None

    def tag_exists(self, name: str) -> bool:
        return models.Tag.objects.filter(name=name).exists()

    def save_tag(self, tag: Tag) -> None:
        models.Tag.objects.update_or_create(id=tag.id.value, defaults={"name": tag.name})

    def delete_tag(self, tag_id: TagId) -> None:
        models.Tag.objects.filter(id=tag_id.value).delete()

    def list_tags(self) -> list[Tag]:
        return [_tag_to_domain(row) for row in models.Tag.objects.all()]


class DjangoMemberStore(MemberStore):
    """Relational member lookups using Django ORM."""

    def get_member(self, member_id: MemberId) -> Member | None:
        row = models.Member.objects.filter(id=member_id.value).first()
        return _member_to_domain(row) if row else None

    def get_member_by_username(self, username: str) -> Member | None:
        row = models.Member.objects.filter(username=username).first()
        return _member_to_domain(row) if row else None


class DjangoRatingStore(RatingStore):
    """Relational rating store using Django ORM."""

    def get_rating(self, activity_id: ActivityId, member_id: MemberId) -> Rating | None:
        row = models.Rating.objects.filter(activity_id=activity_id.value, member_id=member_id.value).first()
        return _rating_to_domain(row) if row else None

    def save_rating(self, rating: Rating) -> None:
        models.Rating.objects.create(
            activity_id=rating.activity_id.value,
            member_id=rating.member_id.value,
            rating=rating.rating,
            comment=rating.comment,
        )

    def delete_rating(self, activity_id: ActivityId, member_id: MemberId) -> None:
        models.Rating.objects.filter(activity_id=activity_id.value, member_id=member_id.value).delete()

    def list_for_activity(self, activity_id: ActivityId) -> list[Rating]:
        rows = models.Rating.objects.filter(activity_id=activity_id.value).order_by("created_at")
        return [_rating_to_domain(row) for row in rows]

    def delete_for_activity(self, activity_id: ActivityId) -> int:
        deleted, _ = models.Rating.objects.filter(activity_id=activity_id.value).delete()
        return deleted

    def exists_for_activity(self, activity_id: ActivityId) -> bool:
        return models.Rating.objects.filter(activity_id=activity_id.value).exists()
