from django.urls import path

from activities.handlers import (
    ActivityAddressView,
    ActivityDetailView,
    ActivityListView,
    ActivityTagsView,
    AddressDetailView,
    AddressListView,
    ParticipantDetailView,
    ParticipantListView,
    RatingListView,
    TagDetailView,
    TagListView,
    WaitlistPromotionView,
)

urlpatterns = [
    path("activities", ActivityListView.as_view(), name="activity-list"),
    path("activities/<str:activity_id>", ActivityDetailView.as_view(), name="activity-detail"),
    path(
        "activities/<str:activity_id>/address/<str:address_id>",
        ActivityAddressView.as_view(),
        name="activity-address",
    ),
    path("activities/<str:activity_id>/tags", ActivityTagsView.as_view(), name="activity-tags"),
    path(
        "activities/<str:activity_id>/participants",
        ParticipantListView.as_view(),
        name="participant-list",
    ),
    path(
        "activities/<str:activity_id>/participants/<str:member_id>",
        ParticipantDetailView.as_view(),
        name="participant-detail",
    ),
    path(
        "activities/<str:activity_id>/waitlist/promote",
        WaitlistPromotionView.as_view(),
        name="waitlist-promote",
    ),
    path("activities/<str:activity_id>/ratings", RatingListView.as_view(), name="rating-list"),
    path("tags", TagListView.as_view(), name="tag-list"),
    path("tags/<str:tag_id>", TagDetailView.as_view(), name="tag-detail"),
    path("addresses", AddressListView.as_view(), name="address-list"),
    path("addresses/<str:address_id>", AddressDetailView.as_view(), name="address-detail"),
]
