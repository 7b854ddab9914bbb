"""Slot Ledger

Keeps distribution point slot counters consistent as customers attach,
move and detach. The ledger never commits: callers run it inside their own
unit of work so the customer change and the counter change land together.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.domain.customer import Customer
from src.domain.distribution_point import DistributionPoint
from src.domain.errors import CapacityExceeded, NotFound

logger = logging.getLogger(__name__)


@dataclass
class SlotChange:
    released: Optional[DistributionPoint] = None
    occupied: Optional[DistributionPoint] = None


class SlotLedger:
    """
    Slot accounting over distribution point rows

    Business Rules:
    1. Attach fails with NotFound / CapacityExceeded and changes nothing
    2. Detach is a no-op for a customer without a distribution point
    3. Move takes the new slot before releasing the old one, so a failed
       move leaves the old attachment untouched
    4. Rows are locked with SELECT FOR UPDATE, in ascending ID order when
       more than one is needed
    5. Counters change only through the repository's conditional updates;
       the free-slot check happens in the same statement as the increment
    """

    def __init__(self, odp_repo: DistributionPointRepository):
        self.odp_repo = odp_repo

    async def _occupy(self, customer: Customer, odp: DistributionPoint) -> None:
        if not await self.odp_repo.occupy_slot(odp):
            raise CapacityExceeded(
                f"Distribution point {odp.name} has no available slot",
                reason=f"customer_id={customer.id}, odp_id={odp.id}, total={odp.total_slots}",
            )

    async def attach(self, customer: Customer, odp_id: int) -> SlotChange:
        odp = await self.odp_repo.get_by_id(odp_id, for_update=True)
        if not odp:
            raise NotFound(
                f"Distribution point {odp_id} not found",
                reason=f"customer_id={customer.id}",
            )

        await self._occupy(customer, odp)
        customer.odp_id = odp.id

        logger.info(
            f"Customer {customer.id} attached to ODP {odp.id} "
            f"(used={odp.used_slots}, available={odp.available_slots})"
        )
        return SlotChange(occupied=odp)

    async def detach(self, customer: Customer) -> SlotChange:
        if customer.odp_id is None:
            return SlotChange()

        odp = await self.odp_repo.get_by_id(customer.odp_id, for_update=True)
        if odp:
            if not await self.odp_repo.release_slot(odp):
                logger.warning(f"ODP {odp.id} had no used slot to release for customer {customer.id}")
            logger.info(
                f"Customer {customer.id} detached from ODP {odp.id} "
                f"(used={odp.used_slots}, available={odp.available_slots})"
            )
        else:
            logger.warning(
                f"Customer {customer.id} referenced missing ODP {customer.odp_id}; clearing reference"
            )

        customer.odp_id = None
        return SlotChange(released=odp)

    async def move(self, customer: Customer, new_odp_id: Optional[int]) -> SlotChange:
        old_odp_id = customer.odp_id

        if old_odp_id == new_odp_id:
            return SlotChange()
        if new_odp_id is None:
            return await self.detach(customer)
        if old_odp_id is None:
            return await self.attach(customer, new_odp_id)

        locked = await self.odp_repo.get_many_by_ids(
            sorted([old_odp_id, new_odp_id]), for_update=True
        )
        by_id = {odp.id: odp for odp in locked}

        new_odp = by_id.get(new_odp_id)
        if not new_odp:
            raise NotFound(
                f"Distribution point {new_odp_id} not found",
                reason=f"customer_id={customer.id}",
            )

        await self._occupy(customer, new_odp)

        old_odp = by_id.get(old_odp_id)
        if old_odp and not await self.odp_repo.release_slot(old_odp):
            logger.warning(f"ODP {old_odp.id} had no used slot to release for customer {customer.id}")

        customer.odp_id = new_odp.id

        logger.info(f"Customer {customer.id} moved from ODP {old_odp_id} to ODP {new_odp_id}")
        return SlotChange(released=old_odp, occupied=new_odp)
