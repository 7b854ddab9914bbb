"""SQLAlchemy implementation of DistributionPointRepository

Provides persistence for DistributionPoint entities. Slot counters only
change through conditional UPDATEs so concurrent attaches cannot overcommit.
"""

from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.domain.base import utc_now
from src.domain.distribution_point import DistributionPoint


class SqlAlchemyDistributionPointRepository(DistributionPointRepository):
    """
    SQLAlchemy implementation of DistributionPointRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Deterministic lock order for multi-row reads
    - Atomic slot counter updates (occupy_slot / release_slot)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, odp_id: int, for_update: bool = False) -> Optional[DistributionPoint]:
        """
        Retrieve distribution point by ID with optional row-level locking

        Args:
            odp_id: Distribution point ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            DistributionPoint if found, None otherwise
        """
        stmt = select(DistributionPoint).where(DistributionPoint.id == odp_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many_by_ids(self, odp_ids: List[int], for_update: bool = False) -> List[DistributionPoint]:
        stmt = (
            select(DistributionPoint)
            .where(DistributionPoint.id.in_(odp_ids))
            .order_by(DistributionPoint.id)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_all(self) -> List[DistributionPoint]:
        stmt = select(DistributionPoint).order_by(DistributionPoint.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, odp: DistributionPoint) -> DistributionPoint:
        self.session.add(odp)
        await self.session.flush()
        await self.session.refresh(odp)
        return odp

    async def occupy_slot(self, odp: DistributionPoint) -> bool:
        """
        Take one slot with a single conditional UPDATE

        The counters are changed in the database, never written back from a
        possibly stale in-memory copy, so two writers can't both take the
        last slot even where SELECT FOR UPDATE is not honoured (SQLite).

        Returns:
            True if a slot was taken, False if the point is full
        """
        stmt = (
            update(DistributionPoint)
            .where(DistributionPoint.id == odp.id)
            .where(DistributionPoint.available_slots > 0)
            .values(
                used_slots=DistributionPoint.used_slots + 1,
                available_slots=DistributionPoint.available_slots - 1,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.refresh(odp)
        return result.rowcount == 1

    async def release_slot(self, odp: DistributionPoint) -> bool:
        """
        Give one slot back with a single conditional UPDATE

        Returns:
            True if a slot was released, False if none was in use
        """
        stmt = (
            update(DistributionPoint)
            .where(DistributionPoint.id == odp.id)
            .where(DistributionPoint.used_slots > 0)
            .values(
                used_slots=DistributionPoint.used_slots - 1,
                available_slots=DistributionPoint.available_slots + 1,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.refresh(odp)
        return result.rowcount == 1
