"""Addon item Use Cases

Create, update, deactivate and list the extra line items billed to a customer.
"""

import logging
from decimal import Decimal
from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.addon_item_repository import AddonItemRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.addon_item import AddonItem
from src.domain.errors import NotFound, ValidationError
from .dtos import CreateAddonCommandDTO, UpdateAddonCommandDTO, AddonDTO, addon_to_dto

logger = logging.getLogger(__name__)


def _validate_amounts(price: Optional[Decimal], quantity: Optional[int]) -> None:
    if quantity is not None and quantity < 1:
        raise ValidationError("Quantity must be at least 1", reason=f"quantity={quantity}")
    if price is not None and price < 0:
        raise ValidationError("Price must not be negative", reason=f"price={price}")


class CreateAddon:
    """
    Use Case: Add a line item to a customer

    Business Rules:
    1. Customer must exist (NOT_FOUND)
    2. quantity >= 1 and price >= 0 (VALIDATION_ERROR)
    3. New items are active and unpaid
    """

    def __init__(self, uow: UnitOfWork, customer_repo: CustomerRepository, addon_repo: AddonItemRepository):
        self.uow = uow
        self.customer_repo = customer_repo
        self.addon_repo = addon_repo

    async def execute(self, customer_id: int, command: CreateAddonCommandDTO) -> Result[AddonDTO]:
        try:
            _validate_amounts(command.price, command.quantity)

            if not await self.customer_repo.get_by_id(customer_id):
                raise NotFound(f"Customer {customer_id} not found")

            addon = await self.addon_repo.create(
                AddonItem(
                    customer_id=customer_id,
                    item_name=command.item_name,
                    item_type=command.item_type,
                    price=command.price,
                    quantity=command.quantity,
                    description=command.description,
                )
            )
            response = addon_to_dto(addon)

            await self.uow.commit()

            logger.info(f"Added {response.item_type.value} addon '{response.item_name}' to customer {customer_id}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_from_exception(e, "CREATE_ADDON_FAILED", "Failed to create add-on item"))


class UpdateAddon:
    """
    Use Case: Partially update an add-on item

    Deactivated items are treated as absent (NOT_FOUND).
    """

    def __init__(self, uow: UnitOfWork, addon_repo: AddonItemRepository):
        self.uow = uow
        self.addon_repo = addon_repo

    async def execute(self, addon_id: int, command: UpdateAddonCommandDTO) -> Result[AddonDTO]:
        try:
            changes = command.model_dump(exclude_unset=True)
            _validate_amounts(changes.get("price"), changes.get("quantity"))

            addon = await self.addon_repo.get_by_id(addon_id, for_update=True)
            if not addon or not addon.is_active:
                raise NotFound(f"Add-on item {addon_id} not found")

            for field, value in changes.items():
                if value is not None:
                    setattr(addon, field, value)

            addon = await self.addon_repo.update(addon)
            response = addon_to_dto(addon)

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_from_exception(e, "UPDATE_ADDON_FAILED", "Failed to update add-on item"))


class DeactivateAddon:
    """
    Use Case: Soft-delete an add-on item

    The item moves to the deactivated lifecycle state and is no longer
    listed nor billed. Bills already issued keep it in their breakdown.
    """

    def __init__(self, uow: UnitOfWork, addon_repo: AddonItemRepository):
        self.uow = uow
        self.addon_repo = addon_repo

    async def execute(self, addon_id: int) -> Result[AddonDTO]:
        try:
            addon = await self.addon_repo.get_by_id(addon_id, for_update=True)
            if not addon or not addon.is_active:
                raise NotFound(f"Add-on item {addon_id} not found")

            addon.deactivate()
            addon = await self.addon_repo.update(addon)
            response = addon_to_dto(addon)

            await self.uow.commit()

            logger.info(f"Deactivated addon {addon_id} of customer {response.customer_id}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                error_from_exception(e, "DEACTIVATE_ADDON_FAILED", "Failed to deactivate add-on item")
            )


class ListAddons:
    def __init__(self, customer_repo: CustomerRepository, addon_repo: AddonItemRepository):
        self.customer_repo = customer_repo
        self.addon_repo = addon_repo

    async def execute(self, customer_id: int) -> Result[List[AddonDTO]]:
        if not await self.customer_repo.get_by_id(customer_id):
            return Return.err(Error(code="NOT_FOUND", message=f"Customer {customer_id} not found"))

        addons = await self.addon_repo.get_active_by_customer_id(customer_id)
        return Return.ok([addon_to_dto(addon) for addon in addons])
