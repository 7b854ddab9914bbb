"""SQLAlchemy Addon Item Repository Implementation

Implements addon item persistence using SQLAlchemy async session.
"""

from typing import List, Optional
from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.addon_item_repository import AddonItemRepository
from src.domain.base import utc_now
from src.domain.addon_item import AddonItem, AddonItemType, AddonLifecycle


class SqlAlchemyAddonItemRepository(AddonItemRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, addon_id: int, for_update: bool = False) -> Optional[AddonItem]:
        stmt = select(AddonItem).where(AddonItem.id == addon_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_customer_id(self, customer_id: int) -> List[AddonItem]:
        stmt = (
            select(AddonItem)
            .where(AddonItem.customer_id == customer_id)
            .where(AddonItem.lifecycle == AddonLifecycle.ACTIVE)
            .order_by(AddonItem.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_billable_by_customer_id(self, customer_id: int, for_update: bool = False) -> List[AddonItem]:
        """
        Retrieve active monthly items and unpaid active one-time items

        Args:
            customer_id: Customer ID
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            List of billable AddonItems ordered by ID
        """
        stmt = (
            select(AddonItem)
            .where(AddonItem.customer_id == customer_id)
            .where(AddonItem.lifecycle == AddonLifecycle.ACTIVE)
            .where(
                or_(
                    AddonItem.item_type == AddonItemType.MONTHLY,
                    and_(
                        AddonItem.item_type == AddonItemType.ONE_TIME,
                        AddonItem.is_paid == False,  # noqa: E712
                    ),
                )
            )
            .order_by(AddonItem.id)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, addon: AddonItem) -> AddonItem:
        self.session.add(addon)
        await self.session.flush()
        await self.session.refresh(addon)
        return addon

    async def update(self, addon: AddonItem) -> AddonItem:
        addon.updated_at = utc_now()
        self.session.add(addon)
        await self.session.flush()
        await self.session.refresh(addon)
        return addon
