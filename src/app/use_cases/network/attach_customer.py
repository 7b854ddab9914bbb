"""AttachCustomerToODP Use Case

Takes a slot on a distribution point for a customer.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.errors import NotFound, ValidationError
from .dtos import AttachCustomerCommandDTO, SlotAssignmentResponseDTO, odp_to_dto
from .slot_ledger import SlotLedger

logger = logging.getLogger(__name__)


class AttachCustomerToODP:
    """
    Use Case: Attach a customer to a distribution point

    Business Rules:
    1. Customer and distribution point must exist (NOT_FOUND)
    2. Distribution point must have a free slot (CAPACITY_EXCEEDED)
    3. A customer already holding another slot must be moved instead
    4. Slot counters and customer.odp_id change in a single transaction

    Flow:
    1. Lock customer row
    2. Lock distribution point row and occupy a slot
    3. Persist customer reference
    4. Commit transaction
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

    async def execute(self, command: AttachCustomerCommandDTO) -> Result[SlotAssignmentResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(command.customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {command.customer_id} not found")

            if customer.odp_id == command.odp_id:
                return Return.ok(
                    SlotAssignmentResponseDTO(customer_id=customer.id, odp_id=customer.odp_id)
                )
            if customer.odp_id is not None:
                raise ValidationError(
                    f"Customer {customer.id} is already attached to distribution point {customer.odp_id}",
                    reason="Use move to change distribution point",
                )

            change = await self.ledger.attach(customer, command.odp_id)
            await self.customer_repo.update(customer)

            response = SlotAssignmentResponseDTO(
                customer_id=customer.id,
                odp_id=customer.odp_id,
                occupied_odp=odp_to_dto(change.occupied),
            )

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.warning(f"Attach customer {command.customer_id} to ODP {command.odp_id} failed: {e}")
            return Return.err(
                error_from_exception(e, "ATTACH_CUSTOMER_FAILED", "Failed to attach customer to distribution point")
            )
