"""Integration tests for the Django ORM stores.

Run with: pytest tests/test_django_store.py -v
"""

from datetime import date, time

import pytest
from django.db import IntegrityError, transaction

from activities import models
from activities.domain import ActivityId, Address, AddressId, MemberId, Rating, Tag, TagId
from activities.stores.django_store import (
    DjangoActivityStore,
    DjangoAddressStore,
    DjangoMemberStore,
    DjangoRatingStore,
    DjangoTagStore,
)
from fakes import build_activity


@pytest.fixture
def store() -> DjangoActivityStore:
    return DjangoActivityStore()


@pytest.fixture
def member():
    """Create a member row and return its domain model."""

    def _create(username: str):
        row = models.Member.objects.create(username=username, birth_date=date(1990, 5, 20))
        return DjangoMemberStore().get_member(MemberId(row.id))

    return _create


@pytest.mark.django_db
class TestDjangoActivityStore:
    """Tests for DjangoActivityStore."""

    def test_round_trip_keeps_enrollment_order(self, store, member):
        creator, bob, carol, dave = member("alice"), member("bob"), member("carol"), member("dave")
        activity = build_activity(creator, num_places=1, participants=[bob], waiting_list=[dave, carol])

        store.save_activity(activity)
        loaded = store.get_activity(activity.id)

        assert loaded == activity
        assert [m.username for m in loaded.waiting_list] == ["dave", "carol"]

    def test_save_replaces_enrollments(self, store, member):
        creator, bob, carol = member("alice"), member("bob"), member("carol")
        activity = build_activity(creator, participants=[bob], waiting_list=[carol])
        store.save_activity(activity)

        activity.participants = [carol]
        activity.waiting_list = []
        store.save_activity(activity)

        loaded = store.get_activity(activity.id)
        assert loaded.participants == [carol]
        assert loaded.waiting_list == []
        assert models.Enrollment.objects.count() == 1

    def test_missing_activity(self, store):
        assert store.get_activity(ActivityId.new()) is None

    def test_get_for_update_inside_unit_of_work(self, store, member):
        activity = build_activity(member("alice"))
        store.save_activity(activity)
        with store.atomic():
            assert store.get_activity(activity.id, for_update=True).id == activity.id

    def test_exists_with_excludes_given_activity(self, store, member):
        activity = build_activity(member("alice"))
        store.save_activity(activity)

        assert store.activity_exists_with(activity.name, activity.slot)
        assert not store.activity_exists_with(activity.name, activity.slot, exclude=activity.id)
        assert not store.activity_exists_with("Other", activity.slot)

    def test_list_by_address_and_city_search(self, store, member):
        address = Address(id=AddressId.new(), street="1 Main St", city="Lyon", zip_code="69001", country="France")
        DjangoAddressStore().save_address(address)
        creator = member("alice")
        booked = build_activity(creator, address_id=address.id)
        store.save_activity(booked)
        store.save_activity(build_activity(creator, name="Elsewhere"))

        assert [a.id for a in store.list_by_address(address.id)] == [booked.id]
        assert [a.id for a in store.search_by_city("Lyon", "France")] == [booked.id]
        assert store.search_by_city("Lyon", "Spain") == []

    def test_tags_and_searches(self, store, member):
        tags = DjangoTagStore()
        outdoor = Tag(id=TagId.new(), name="Outdoor")
        tags.save_tag(outdoor)
        creator = member("alice")
        tagged = build_activity(creator, tags=[outdoor])
        store.save_activity(tagged)
        store.save_activity(build_activity(creator, name="Chess", date=date(2026, 7, 1)))

        assert [a.id for a in store.list_by_tag(outdoor.id)] == [tagged.id]
        assert [a.name for a in store.search_by_tag("door")] == ["Climbing"]
        assert [a.name for a in store.search_by_name("ches")] == ["Chess"]
        assert [a.name for a in store.search_by_date(date(2026, 7, 1))] == ["Chess"]

    def test_list_is_ordered_by_date_then_start(self, store, member):
        creator = member("alice")
        store.save_activity(build_activity(creator, name="Late", start_time=time(21, 0)))
        store.save_activity(build_activity(creator, name="Early", start_time=time(7, 0)))

        assert [a.name for a in store.list_activities()] == ["Early", "Late"]

    def test_delete_activity(self, store, member):
        activity = build_activity(member("alice"))
        store.save_activity(activity)
        store.delete_activity(activity.id)
        assert store.get_activity(activity.id) is None


@pytest.mark.django_db
class TestDjangoRatingStore:
    """Tests for DjangoRatingStore."""

    def test_delete_for_activity_counts_rows(self, member):
        activities = DjangoActivityStore()
        ratings = DjangoRatingStore()
        bob, carol = member("bob"), member("carol")
        activity = build_activity(member("alice"), participants=[bob, carol])
        activities.save_activity(activity)
        for rater, score in ((bob, 7), (carol, 3)):
            ratings.save_rating(Rating(activity_id=activity.id, member_id=rater.id, rating=score, comment=""))

        assert ratings.exists_for_activity(activity.id)
        assert ratings.delete_for_activity(activity.id) == 2
        assert not ratings.exists_for_activity(activity.id)

    def test_second_rating_by_member_is_rejected(self, member):
        activities = DjangoActivityStore()
        ratings = DjangoRatingStore()
        bob = member("bob")
        activity = build_activity(member("alice"), participants=[bob])
        activities.save_activity(activity)
        ratings.save_rating(Rating(activity_id=activity.id, member_id=bob.id, rating=7, comment=""))

        with pytest.raises(IntegrityError), transaction.atomic():
            ratings.save_rating(Rating(activity_id=activity.id, member_id=bob.id, rating=2, comment=""))

        assert ratings.get_rating(activity.id, bob.id).rating == 7


@pytest.mark.django_db
class TestDjangoMemberStore:
    """Tests for DjangoMemberStore."""

    def test_lookup_by_username(self, member):
        created = member("alice")
        assert DjangoMemberStore().get_member_by_username("alice") == created
        assert DjangoMemberStore().get_member_by_username("nobody") is None
