"""UpdateCustomer Use Case

Applies field changes to a customer, moving its distribution point slot when
odp_id changes.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.repositories.router_repository import RouterRepository
from src.app.use_cases.errors import error_from_exception
from src.app.use_cases.network.slot_ledger import SlotLedger
from src.domain.billing_cycle import prorate
from src.domain.errors import NotFound
from .dtos import UpdateCustomerCommandDTO, CustomerDTO, customer_to_dto

logger = logging.getLogger(__name__)

# Columns a plain update may overwrite; slot and billing state go through
# the ledger and the billing engine.
UPDATABLE_FIELDS = (
    "name",
    "phone",
    "address",
    "area",
    "package",
    "package_price",
    "discount",
    "active_date",
    "active_period",
    "active_period_unit",
    "status",
    "service_status",
    "installation_status",
    "router_id",
    "ppp_secret",
)

# Inputs of the precomputed first-month charge
PRO_RATA_FIELDS = ("package_price", "active_date", "active_period", "active_period_unit")


class UpdateCustomer:
    """
    Use Case: Update a customer

    Business Rules:
    1. Only explicitly provided fields change
    2. odp_id change: None -> X attaches, X -> None detaches, X -> Y moves
    3. A failed slot change (NOT_FOUND / CAPACITY_EXCEEDED) rolls back every
       field change of the request
    4. Until the first bill applies it, pro_rata_amount follows the package
       price, activation date and period
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        odp_repo: DistributionPointRepository,
        router_repo: RouterRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.odp_repo = odp_repo
        self.router_repo = router_repo
        self.ledger = SlotLedger(odp_repo)

    async def execute(self, customer_id: int, command: UpdateCustomerCommandDTO) -> Result[CustomerDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {customer_id} not found")

            changes = command.model_dump(exclude_unset=True)

            if changes.get("router_id") is not None:
                if not await self.router_repo.get_by_id(changes["router_id"]):
                    raise NotFound(f"Router {changes['router_id']} not found")

            for field in UPDATABLE_FIELDS:
                if field in changes:
                    setattr(customer, field, changes[field])

            if not customer.is_pro_rata_applied and any(f in changes for f in PRO_RATA_FIELDS):
                customer.pro_rata_amount = (
                    prorate(
                        customer.active_date,
                        customer.package_price,
                        customer.active_period,
                        customer.active_period_unit,
                    ).pro_rata_amount
                    if customer.active_date is not None
                    else None
                )

            if "odp_id" in changes:
                await self.ledger.move(customer, changes["odp_id"])

            customer = await self.customer_repo.update(customer)

            odp = await self.odp_repo.get_by_id(customer.odp_id) if customer.odp_id else None
            router = await self.router_repo.get_by_id(customer.router_id) if customer.router_id else None
            response = customer_to_dto(customer, odp, router)

            await self.uow.commit()

            logger.info(f"Updated customer {customer_id}: {sorted(changes)}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_from_exception(e, "UPDATE_CUSTOMER_FAILED", "Failed to update customer"))
