"""Router inventory use cases"""

from typing import List
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.router_repository import RouterRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.errors import Conflict
from src.domain.router import Router
from .dtos import CreateRouterCommandDTO, RouterDTO, router_to_dto


class CreateRouter:
    """
    Use Case: Register a router reachable through the router-control API

    Router names are unique (CONFLICT on duplicates).
    """

    def __init__(self, uow: UnitOfWork, router_repo: RouterRepository):
        self.uow = uow
        self.router_repo = router_repo

    async def execute(self, command: CreateRouterCommandDTO) -> Result[RouterDTO]:
        try:
            if await self.router_repo.get_by_name(command.name):
                raise Conflict(f"Router '{command.name}' already exists")

            router = Router(
                name=command.name,
                ip_address=command.ip_address,
                api_port=command.api_port,
                username=command.username,
                password=command.password,
                area=command.area,
            )
            router = await self.router_repo.create(router)
            response = router_to_dto(router)

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_from_exception(e, "CREATE_ROUTER_FAILED", "Failed to create router"))


class ListRouters:
    def __init__(self, router_repo: RouterRepository):
        self.router_repo = router_repo

    async def execute(self) -> Result[List[RouterDTO]]:
        routers = await self.router_repo.get_all()
        return Return.ok([router_to_dto(router) for router in routers])
