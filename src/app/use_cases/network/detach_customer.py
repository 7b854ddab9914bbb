"""DetachCustomerFromODP Use Case

Releases a customer's distribution point slot.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.errors import NotFound
from .dtos import DetachCustomerCommandDTO, SlotAssignmentResponseDTO, odp_to_dto
from .slot_ledger import SlotLedger


class DetachCustomerFromODP:
    """
    Use Case: Detach a customer from its distribution point

    A customer without a distribution point is left unchanged (no-op).
    Released counters are clamped to [0, total_slots].
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

    async def execute(self, command: DetachCustomerCommandDTO) -> Result[SlotAssignmentResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(command.customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {command.customer_id} not found")

            if customer.odp_id is None:
                return Return.ok(SlotAssignmentResponseDTO(customer_id=customer.id))

            change = await self.ledger.detach(customer)
            await self.customer_repo.update(customer)

            response = SlotAssignmentResponseDTO(
                customer_id=customer.id,
                odp_id=None,
                released_odp=odp_to_dto(change.released) if change.released else None,
            )

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                error_from_exception(e, "DETACH_CUSTOMER_FAILED", "Failed to detach customer from distribution point")
            )
