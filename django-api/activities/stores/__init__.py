from activities.stores.interfaces import ActivityStore, AddressStore, MemberStore, RatingStore, TagStore

__all__ = [
    "ActivityStore",
    "AddressStore",
    "MemberStore",
    "RatingStore",
    "TagStore",
]
