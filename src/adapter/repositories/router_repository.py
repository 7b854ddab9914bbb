"""SQLAlchemy Router Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.router_repository import RouterRepository
from src.domain.router import Router


class SqlAlchemyRouterRepository(RouterRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, router_id: int) -> Optional[Router]:
        stmt = select(Router).where(Router.id == router_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Router]:
        stmt = select(Router).where(Router.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self) -> List[Router]:
        stmt = select(Router).order_by(Router.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, router: Router) -> Router:
        self.session.add(router)
        await self.session.flush()
        await self.session.refresh(router)
        return router
