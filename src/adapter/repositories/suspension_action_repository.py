"""SQLAlchemy Suspension Action Repository Implementation"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.suspension_action_repository import SuspensionActionRepository
from src.domain.base import utc_now
from src.domain.suspension_action import SuspensionAction, SuspensionActionStatus


class SqlAlchemySuspensionActionRepository(SuspensionActionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, action: SuspensionAction) -> SuspensionAction:
        self.session.add(action)
        await self.session.flush()
        await self.session.refresh(action)
        return action

    async def get_by_id(self, action_id: int, for_update: bool = False) -> Optional[SuspensionAction]:
        stmt = select(SuspensionAction).where(SuspensionAction.id == action_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_status(
        self,
        status: SuspensionActionStatus,
        limit: int = 100,
        updated_before: Optional[datetime] = None,
    ) -> List[SuspensionAction]:
        stmt = select(SuspensionAction).where(SuspensionAction.status == status)

        if updated_before is not None:
            stmt = stmt.where(SuspensionAction.updated_at < updated_before)

        stmt = stmt.order_by(SuspensionAction.created_at, SuspensionAction.id).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, action: SuspensionAction) -> SuspensionAction:
        action.updated_at = utc_now()
        self.session.add(action)
        await self.session.flush()
        await self.session.refresh(action)
        return action
