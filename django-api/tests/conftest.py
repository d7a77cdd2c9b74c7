"""Pytest configuration and shared fixtures."""

import random

import pytest
from rest_framework.test import APIClient

from activities.domain import Member
from activities.services import ActivityService, CatalogService, RatingService
from fakes import (
    TODAY,
    InMemoryActivityStore,
    InMemoryAddressStore,
    InMemoryDatabase,
    InMemoryMemberStore,
    InMemoryRatingStore,
    InMemoryTagStore,
    build_member,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def activity_store(memory_db: InMemoryDatabase) -> InMemoryActivityStore:
    return InMemoryActivityStore(memory_db)


@pytest.fixture
def rating_store(memory_db: InMemoryDatabase) -> InMemoryRatingStore:
    return InMemoryRatingStore(memory_db)


@pytest.fixture
def rating_service(activity_store: InMemoryActivityStore, rating_store: InMemoryRatingStore) -> RatingService:
    return RatingService(activity_store, rating_store)


@pytest.fixture
def activity_service(
    memory_db: InMemoryDatabase, activity_store: InMemoryActivityStore, rating_service: RatingService
) -> ActivityService:
    return ActivityService(
        activity_store,
        InMemoryAddressStore(memory_db),
        InMemoryTagStore(memory_db),
        InMemoryMemberStore(memory_db),
        rating_service,
        rng=random.Random(7),
        today=lambda: TODAY,
    )


@pytest.fixture
def catalog_service(
    memory_db: InMemoryDatabase, activity_store: InMemoryActivityStore, activity_service: ActivityService
) -> CatalogService:
    return CatalogService(
        activity_store,
        InMemoryAddressStore(memory_db),
        InMemoryTagStore(memory_db),
        activity_service,
    )


@pytest.fixture
def add_member(memory_db: InMemoryDatabase):
    """Register a member in the in-memory database."""

    def _add(username: str, **kwargs) -> Member:
        member = build_member(username, **kwargs)
        memory_db.members[member.id] = member
        return member

    return _add


@pytest.fixture
def creator(add_member) -> Member:
    return add_member("alice")
