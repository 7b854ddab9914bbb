"""Addon Item Repository Interface

Defines the contract for addon item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.addon_item import AddonItem


class AddonItemRepository(ABC):
    """
    Repository interface for AddonItem persistence

    Deactivated items are excluded from every list query.
    """

    @abstractmethod
    async def get_by_id(self, addon_id: int, for_update: bool = False) -> Optional[AddonItem]:
        """
        Retrieve addon item by ID, regardless of lifecycle state

        Args:
            addon_id: Addon item ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            AddonItem if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_active_by_customer_id(self, customer_id: int) -> List[AddonItem]:
        """
        Retrieve a customer's active addon items

        Args:
            customer_id: Customer ID

        Returns:
            List of active AddonItems
        """
        pass

    @abstractmethod
    async def get_billable_by_customer_id(self, customer_id: int, for_update: bool = False) -> List[AddonItem]:
        """
        Retrieve addon items to include in the next bill

        Active monthly items plus active one-time items not yet paid.

        Args:
            customer_id: Customer ID
            for_update: If True, lock the rows so a one-time item is billed once

        Returns:
            List of billable AddonItems
        """
        pass

    @abstractmethod
    async def create(self, addon: AddonItem) -> AddonItem:
        pass

    @abstractmethod
    async def update(self, addon: AddonItem) -> AddonItem:
        pass
