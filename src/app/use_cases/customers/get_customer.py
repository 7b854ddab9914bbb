"""Customer read use cases"""

from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.repositories.router_repository import RouterRepository
from .dtos import CustomerDTO, customer_to_dto


class GetCustomer:
    def __init__(
        self,
        customer_repo: CustomerRepository,
        odp_repo: DistributionPointRepository,
        router_repo: RouterRepository,
    ):
        self.customer_repo = customer_repo
        self.odp_repo = odp_repo
        self.router_repo = router_repo

    async def execute(self, customer_id: int) -> Result[CustomerDTO]:
        customer = await self.customer_repo.get_by_id(customer_id)
        if not customer:
            return Return.err(Error(code="NOT_FOUND", message=f"Customer {customer_id} not found"))

        odp = await self.odp_repo.get_by_id(customer.odp_id) if customer.odp_id else None
        router = await self.router_repo.get_by_id(customer.router_id) if customer.router_id else None
        return Return.ok(customer_to_dto(customer, odp, router))


class ListCustomers:
    """
    Use case: List customers, newest first

    Distribution points and routers are loaded once and joined in memory.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        odp_repo: DistributionPointRepository,
        router_repo: RouterRepository,
    ):
        self.customer_repo = customer_repo
        self.odp_repo = odp_repo
        self.router_repo = router_repo

    async def execute(self, limit: Optional[int] = None, offset: int = 0) -> Result[List[CustomerDTO]]:
        customers = await self.customer_repo.get_all(limit=limit, offset=offset)
        odps = {odp.id: odp for odp in await self.odp_repo.get_all()}
        routers = {router.id: router for router in await self.router_repo.get_all()}

        return Return.ok(
            [
                customer_to_dto(customer, odps.get(customer.odp_id), routers.get(customer.router_id))
                for customer in customers
            ]
        )
