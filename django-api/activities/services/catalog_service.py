"""Catalog service - tags and addresses shared by activities.

Deleting a tag or an address first detaches it from every activity, then
removes the record itself.
"""

from contextlib import AbstractContextManager

import structlog

from activities.domain import Address, AddressId, Outcome, Tag, TagId
from activities.domain.errors import ConflictError, ErrorCode, NotFoundError, ValidationError
from activities.services.activity_service import ActivityService
from activities.services.base import parse_id, unit_of_work
from activities.stores.interfaces import ActivityStore, AddressStore, TagStore

logger = structlog.get_logger(__name__)


class CatalogService:
    """Service for tag and address reference data."""

    def __init__(
        self,
        activities: ActivityStore,
        addresses: AddressStore,
        tags: TagStore,
        activity_service: ActivityService,
    ) -> None:
        self._activities = activities
        self._addresses = addresses
        self._tags = tags
        self._activity_service = activity_service

    def _atomic(self) -> AbstractContextManager[None]:
        return self._activities.atomic()

    @unit_of_work
    def list_tags(self) -> Outcome[list[Tag]]:
        return Outcome.success(self._tags.list_tags())

    @unit_of_work
    def create_tag(self, name: str | None) -> Outcome[Tag]:
        if not name:
            raise ValidationError(code=ErrorCode.TAG_NAME_EMPTY, message="Tag name can not be empty")
        if self._tags.tag_exists(name):
            raise ConflictError(code=ErrorCode.TAG_ALREADY_EXISTS, message="Tag already exists")
        tag = Tag(id=TagId.new(), name=name)
        self._tags.save_tag(tag)
        logger.info("tag_created", tag_id=str(tag.id), name=name)
        return Outcome.success(tag, message="Tag created")

    @unit_of_work
    def delete_tag(self, tag_id: str | TagId) -> Outcome[None]:
        tag = self._tags.get_tag(parse_id(TagId, tag_id, "tag"))
        if tag is None:
            raise NotFoundError(code=ErrorCode.TAG_NOT_FOUND, message="Tag not found")
        detached = self._activity_service.remove_tag_from_all(tag.id)
        if not detached.ok:
            return detached
        self._tags.delete_tag(tag.id)
        logger.info("tag_deleted", tag_id=str(tag.id), name=tag.name)
        return Outcome.success(message=f"Tag {tag.name} was successfully deleted")

    @unit_of_work
    def list_addresses(self) -> Outcome[list[Address]]:
        return Outcome.success(self._addresses.list_addresses())

    @unit_of_work
    def create_address(self, street: str, city: str, zip_code: str, country: str) -> Outcome[Address]:
        if not city or not country:
            raise ValidationError(code=ErrorCode.ADDRESS_INCOMPLETE, message="City and country are required")
        address = Address(id=AddressId.new(), street=street, city=city, zip_code=zip_code, country=country)
        self._addresses.save_address(address)
        logger.info("address_created", address_id=str(address.id), city=city, country=country)
        return Outcome.success(address, message="Address created")

    @unit_of_work
    def delete_address(self, address_id: str | AddressId) -> Outcome[None]:
        address = self._addresses.get_address(parse_id(AddressId, address_id, "address"))
        if address is None:
            raise NotFoundError(code=ErrorCode.ADDRESS_NOT_FOUND, message="Address not found")
        detached = self._activity_service.remove_address_from_all(address.id)
        if not detached.ok:
            return detached
        self._addresses.delete_address(address.id)
        logger.info("address_deleted", address_id=str(address.id))
        return Outcome.success(message="Address successfully deleted")
