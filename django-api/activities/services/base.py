"""Shared plumbing for services: unit of work boundary and ID parsing."""

from collections.abc import Callable
from functools import wraps
from typing import Any, Protocol, TypeVar

import structlog

from activities.domain.errors import AuthorizationError, DomainError, InvalidIdError
from activities.domain.outcomes import Outcome
from activities.domain.value_objects import ActivityId

logger = structlog.get_logger(__name__)

T = TypeVar("T")
IdT = TypeVar("IdT")


class RatingsGateway(Protocol):
    """The part of the ratings service the lifecycle depends on."""

    def clear_for_activity(self, activity_id: ActivityId) -> bool: ...


def unit_of_work(method: Callable[..., Outcome[T]]) -> Callable[..., Outcome[T]]:
    """Run a service operation in one unit of work and map domain errors.

    The service provides the unit of work through ``_atomic()``. A
    DomainError raised by the operation rolls it back and is returned as a
    failure outcome. Any other exception propagates unchanged.
    """

    @wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Outcome[T]:
        try:
            with self._atomic():
                return method(self, *args, **kwargs)
        except DomainError as exc:
            log = logger.warning if isinstance(exc, AuthorizationError) else logger.info
            log(
                "operation_rejected",
                operation=method.__name__,
                code=exc.code.value,
                reason=exc.message,
            )
            return Outcome.failure(exc)

    return wrapper


def parse_id(id_type: type[IdT], value: Any, what: str) -> IdT:
    """Coerce a raw identifier into ``id_type``.

    Raises:
        InvalidIdError: If the value is not a valid UUID.
    """
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(str(value))  # type: ignore[attr-defined]
    except ValueError:
        raise InvalidIdError(what)
