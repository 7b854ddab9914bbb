"""Suspension Action Repository Interface

Defines the contract for persisting router-disable intents.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.suspension_action import SuspensionAction, SuspensionActionStatus


class SuspensionActionRepository(ABC):
    """
    Repository interface for SuspensionAction persistence

    Used to confirm router-control calls or re-drive them after failure.
    """

    @abstractmethod
    async def create(self, action: SuspensionAction) -> SuspensionAction:
        pass

    @abstractmethod
    async def get_by_id(self, action_id: int, for_update: bool = False) -> Optional[SuspensionAction]:
        pass

    @abstractmethod
    async def get_by_status(
        self,
        status: SuspensionActionStatus,
        limit: int = 100,
        updated_before: Optional[datetime] = None,
    ) -> List[SuspensionAction]:
        """
        Retrieve actions by status, oldest first

        Args:
            status: Action status to filter by
            limit: Maximum number of actions to return
            updated_before: Only actions not touched since this time (naive UTC)

        Returns:
            List of SuspensionAction matching status
        """
        pass

    @abstractmethod
    async def update(self, action: SuspensionAction) -> SuspensionAction:
        pass
