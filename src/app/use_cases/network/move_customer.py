"""MoveCustomerODP Use Case

Moves a customer's slot from one distribution point to another.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.errors import NotFound, Conflict
from .dtos import MoveCustomerCommandDTO, SlotAssignmentResponseDTO, odp_to_dto
from .slot_ledger import SlotLedger

logger = logging.getLogger(__name__)


class MoveCustomerODP:
    """
    Use Case: Move a customer to another distribution point

    Business Rules:
    1. Detach-then-attach inside one transaction
    2. If the new distribution point is full or missing, nothing changes
       and the customer keeps the old slot
    3. old_odp_id, when provided, must still be the customer's current
       distribution point (CONFLICT otherwise)
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

    async def execute(self, command: MoveCustomerCommandDTO) -> Result[SlotAssignmentResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(command.customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {command.customer_id} not found")

            if command.old_odp_id is not None and customer.odp_id != command.old_odp_id:
                raise Conflict(
                    f"Customer {customer.id} is no longer on distribution point {command.old_odp_id}",
                    reason=f"current odp_id={customer.odp_id}",
                )

            change = await self.ledger.move(customer, command.new_odp_id)
            await self.customer_repo.update(customer)

            response = SlotAssignmentResponseDTO(
                customer_id=customer.id,
                odp_id=customer.odp_id,
                released_odp=odp_to_dto(change.released) if change.released else None,
                occupied_odp=odp_to_dto(change.occupied) if change.occupied else None,
            )

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.warning(f"Move customer {command.customer_id} to ODP {command.new_odp_id} failed: {e}")
            return Return.err(
                error_from_exception(e, "MOVE_CUSTOMER_FAILED", "Failed to move customer to distribution point")
            )
