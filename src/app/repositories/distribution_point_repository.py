"""Distribution Point Repository Interface

Defines the contract for distribution point (ODP) persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.distribution_point import DistributionPoint


class DistributionPointRepository(ABC):
    """
    Repository interface for DistributionPoint persistence

    Rows are read with pessimistic locking (SELECT FOR UPDATE) and slot
    counters change only through occupy_slot / release_slot.
    """

    @abstractmethod
    async def get_by_id(self, odp_id: int, for_update: bool = False) -> Optional[DistributionPoint]:
        """
        Retrieve distribution point by ID

        Args:
            odp_id: Distribution point ID
            for_update: If True, lock the row with SELECT FOR UPDATE (pessimistic lock)

        Returns:
            DistributionPoint if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_many_by_ids(self, odp_ids: List[int], for_update: bool = False) -> List[DistributionPoint]:
        """
        Retrieve several distribution points, locked in ascending ID order

        Locking in a fixed order keeps two concurrent moves between the same
        pair of ODPs from deadlocking each other.

        Args:
            odp_ids: Distribution point IDs
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            Found distribution points ordered by ID
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[DistributionPoint]:
        pass

    @abstractmethod
    async def create(self, odp: DistributionPoint) -> DistributionPoint:
        """
        Create a new distribution point

        Args:
            odp: DistributionPoint entity to persist

        Returns:
            Created DistributionPoint with generated ID
        """
        pass

    @abstractmethod
    async def occupy_slot(self, odp: DistributionPoint) -> bool:
        """
        Atomically take one slot if any is free

        The check and the counter change happen in one statement, and the
        entity is reloaded afterwards.

        Args:
            odp: Distribution point to take a slot from

        Returns:
            True if a slot was taken, False if the point is full
        """
        pass

    @abstractmethod
    async def release_slot(self, odp: DistributionPoint) -> bool:
        """
        Atomically give back one slot if any is in use

        Returns:
            True if a slot was released, False if none was in use
        """
        pass
