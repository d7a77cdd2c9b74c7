"""Creator-only gate for activity mutations."""

from activities.domain.errors import AuthorizationError
from activities.domain.models import Activity, Member


def is_creator(identity: Member, activity: Activity) -> bool:
    return identity.username == activity.creator.username


def ensure_creator(identity: Member, activity: Activity) -> None:
    """Raise AuthorizationError unless ``identity`` created ``activity``."""
    if not is_creator(identity, activity):
        raise AuthorizationError(identity.username)
