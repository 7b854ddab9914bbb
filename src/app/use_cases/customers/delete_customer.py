"""DeleteCustomer Use Case

Releases the customer's slot and deletes the customer.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.use_cases.errors import error_from_exception
from src.app.use_cases.network.slot_ledger import SlotLedger
from src.domain.errors import NotFound
from .dtos import DeleteCustomerResponseDTO

logger = logging.getLogger(__name__)


class DeleteCustomer:
    """
    Use Case: Delete a customer

    Detach and delete happen in one transaction, so the distribution point
    never keeps a slot for a customer that no longer exists.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        odp_repo: DistributionPointRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.ledger = SlotLedger(odp_repo)

    async def execute(self, customer_id: int) -> Result[DeleteCustomerResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {customer_id} not found")

            released_odp_id = customer.odp_id
            await self.ledger.detach(customer)
            await self.customer_repo.delete(customer)

            await self.uow.commit()

            logger.info(f"Deleted customer {customer_id}")
            return Return.ok(
                DeleteCustomerResponseDTO(
                    customer_id=customer_id,
                    released_odp_id=released_odp_id,
                    message="Customer deleted",
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_from_exception(e, "DELETE_CUSTOMER_FAILED", "Failed to delete customer"))
