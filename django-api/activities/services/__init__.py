from activities.services.activity_service import ActivityService
from activities.services.booking_service import BookingConflictDetector, BookingDecision
from activities.services.catalog_service import CatalogService
from activities.services.rating_service import RatingService

__all__ = [
    "ActivityService",
    "BookingConflictDetector",
    "BookingDecision",
    "CatalogService",
    "RatingService",
]
