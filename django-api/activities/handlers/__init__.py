from activities.handlers.views import (
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

__all__ = [
    "ActivityAddressView",
    "ActivityDetailView",
    "ActivityListView",
    "ActivityTagsView",
    "AddressDetailView",
    "AddressListView",
    "ParticipantDetailView",
    "ParticipantListView",
    "RatingListView",
    "TagDetailView",
    "TagListView",
    "WaitlistPromotionView",
]
