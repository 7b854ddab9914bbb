"""CreateCustomer Use Case

Registers a customer and, when requested, takes a distribution point slot.
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
from src.domain.customer import Customer
from src.domain.errors import NotFound
from .dtos import CreateCustomerCommandDTO, CustomerDTO, customer_to_dto

logger = logging.getLogger(__name__)


class CreateCustomer:
    """
    Use Case: Create a customer

    Business Rules:
    1. customer_number continues the {prefix}NNNN sequence
    2. router_id, when given, must reference an existing router
    3. odp_id, when given, takes a slot (NOT_FOUND / CAPACITY_EXCEEDED abort the create)
    4. pro_rata_amount is pre-computed from active_date; it is billed once
       by the first monthly bill

    Flow:
    1. Validate router
    2. Generate customer number and persist customer
    3. Attach to distribution point through the slot ledger
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        odp_repo: DistributionPointRepository,
        router_repo: RouterRepository,
        customer_number_prefix: str = "LTS",
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.router_repo = router_repo
        self.ledger = SlotLedger(odp_repo)
        self.customer_number_prefix = customer_number_prefix

    async def execute(self, command: CreateCustomerCommandDTO) -> Result[CustomerDTO]:
        try:
            router = None
            if command.router_id is not None:
                router = await self.router_repo.get_by_id(command.router_id)
                if not router:
                    raise NotFound(f"Router {command.router_id} not found")

            customer_number = await self.customer_repo.generate_customer_number(
                self.customer_number_prefix
            )

            pro_rata_amount = None
            if command.active_date is not None:
                pro_rata_amount = prorate(
                    command.active_date,
                    command.package_price,
                    command.active_period,
                    command.active_period_unit,
                ).pro_rata_amount

            customer = Customer(
                customer_number=customer_number,
                name=command.name,
                phone=command.phone,
                address=command.address,
                area=command.area,
                package=command.package,
                package_price=command.package_price,
                discount=command.discount,
                active_date=command.active_date,
                active_period=command.active_period,
                active_period_unit=command.active_period_unit,
                pro_rata_amount=pro_rata_amount,
                status=command.status,
                service_status=command.service_status,
                installation_status=command.installation_status,
                router_id=command.router_id,
                ppp_secret=command.ppp_secret,
            )
            customer = await self.customer_repo.create(customer)

            odp = None
            if command.odp_id is not None:
                change = await self.ledger.attach(customer, command.odp_id)
                odp = change.occupied
                customer = await self.customer_repo.update(customer)

            response = customer_to_dto(customer, odp, router)

            await self.uow.commit()

            logger.info(f"Created customer {customer_number} (id={response.id})")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_from_exception(e, "CREATE_CUSTOMER_FAILED", "Failed to create customer"))
