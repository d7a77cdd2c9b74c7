"""Build services backed by the Django ORM stores."""

import random
from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings

from activities.services import ActivityService, CatalogService, RatingService
from activities.stores.django_store import (
    DjangoActivityStore,
    DjangoAddressStore,
    DjangoMemberStore,
    DjangoRatingStore,
    DjangoTagStore,
)


@dataclass(frozen=True)
class Services:
    activities: ActivityService
    ratings: RatingService
    catalog: CatalogService
    members: DjangoMemberStore


@lru_cache(maxsize=1)
def get_services() -> Services:
    activity_store = DjangoActivityStore()
    address_store = DjangoAddressStore()
    tag_store = DjangoTagStore()
    member_store = DjangoMemberStore()

    ratings = RatingService(activity_store, DjangoRatingStore())
    activities = ActivityService(
        activity_store,
        address_store,
        tag_store,
        member_store,
        ratings,
        rng=random.Random(settings.WAITLIST_RANDOM_SEED),
    )
    catalog = CatalogService(activity_store, address_store, tag_store, activities)
    return Services(activities=activities, ratings=ratings, catalog=catalog, members=member_store)
