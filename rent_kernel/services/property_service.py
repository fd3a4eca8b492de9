"""
Service layer for rentable properties.

Returns PropertyInfo DTOs.  A property leased by any contract cannot be
deleted.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import select

from rent_kernel.domain.dtos import PropertyInfo
from rent_kernel.domain.validation import (
    optional_text,
    require_amount,
    validate_address,
    validate_text,
)
from rent_kernel.exceptions import EntityReferencedError, PropertyNotFoundError
from rent_kernel.logging_config import get_logger
from rent_kernel.models.property import Property
from rent_kernel.selectors.base import matches
from rent_kernel.selectors.contract_selector import ContractSelector
from rent_kernel.selectors.mapping import property_to_info
from rent_kernel.services.base import BaseService

logger = get_logger("services.property")


class PropertyService(BaseService[Property]):
    """Service for managing properties."""

    model = Property
    not_found = PropertyNotFoundError

    def get_by_id(self, property_id: UUID) -> PropertyInfo:
        """
        Get property by ID.

        Raises:
            PropertyNotFoundError: If property doesn't exist.
        """
        return property_to_info(self._get_by_id(property_id))

    def list_all(self) -> list[PropertyInfo]:
        stmt = select(Property).order_by(Property.title, Property.id)
        return [property_to_info(p) for p in self.session.execute(stmt).scalars()]

    def search(self, query: str | None = None) -> list[PropertyInfo]:
        """Case-insensitive substring search on title or address."""
        return [
            info for info in self.list_all() if matches(query, info.title, info.address)
        ]

    def add_property(
        self,
        title: str,
        address: str,
        area: Decimal,
        price: Decimal,
        notes: str | None = None,
    ) -> PropertyInfo:
        """
        Create a property.

        Raises:
            ValidationError: If title or address is malformed, or area/price
                is not a positive Decimal.
        """
        prop = Property(
            title=validate_text(title, "title"),
            address=validate_address(address),
            area=require_amount(area, "area"),
            price=require_amount(price, "price"),
            notes=optional_text(notes),
        )
        self.session.add(prop)
        self.session.flush()
        logger.info(
            "property_added",
            extra={"property_id": str(prop.id), "price": prop.price},
        )
        return property_to_info(prop)

    def update_property(
        self,
        property_id: UUID,
        title: str | None = None,
        address: str | None = None,
        area: Decimal | None = None,
        price: Decimal | None = None,
        notes: str | None = None,
    ) -> PropertyInfo:
        """Update property details.  Only the fields given are changed."""
        prop = self._get_by_id(property_id)

        if title is not None:
            prop.title = validate_text(title, "title")
        if address is not None:
            prop.address = validate_address(address)
        if area is not None:
            prop.area = require_amount(area, "area")
        if price is not None:
            prop.price = require_amount(price, "price")
        if notes is not None:
            prop.notes = optional_text(notes)

        self.session.flush()
        logger.info("property_updated", extra={"property_id": str(prop.id)})
        return property_to_info(prop)

    def delete_property(self, property_id: UUID) -> None:
        """
        Delete a property.

        Raises:
            PropertyNotFoundError: If property doesn't exist.
            EntityReferencedError: If any contract leases the property.
        """
        prop = self._get_by_id(property_id)
        if ContractSelector(self.session).is_property_referenced(prop.id):
            logger.warning(
                "property_delete_refused",
                extra={"property_id": str(prop.id), "reason": "referenced_by_contract"},
            )
            raise EntityReferencedError("property", str(prop.id))
        self.session.delete(prop)
        self.session.flush()
        logger.info("property_deleted", extra={"property_id": str(property_id)})
