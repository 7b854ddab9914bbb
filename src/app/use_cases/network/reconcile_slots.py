"""ReconcileSlots Use Case

Checks distribution point slot counters against the slot invariant and the
customers actually attached.
"""

import logging
import time
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.domain.base import utc_now
from .dtos import SlotDiscrepancyDTO, SlotReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileSlots:
    """
    Use Case: Reconcile distribution point slot counters

    Business Rules:
    1. used_slots + available_slots must equal total_slots
    2. used_slots must equal the number of customers referencing the ODP
    3. Does NOT modify any data (read-only reconciliation)

    Flow:
    1. Get all distribution points
    2. For each, count attached customers and compare counters
    3. Return reconciliation result with all discrepancies
    """

    def __init__(
        self,
        odp_repo: DistributionPointRepository,
        customer_repo: CustomerRepository,
    ):
        self.odp_repo = odp_repo
        self.customer_repo = customer_repo

    async def execute(self) -> Result[SlotReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = utc_now()

        try:
            logger.info("Starting slot reconciliation")

            odps = await self.odp_repo.get_all()
            discrepancies: list[SlotDiscrepancyDTO] = []

            for odp in odps:
                attached = await self.customer_repo.count_by_odp_id(odp.id)

                if odp.is_consistent() and odp.used_slots == attached:
                    continue

                discrepancies.append(
                    SlotDiscrepancyDTO(
                        odp_id=odp.id,
                        name=odp.name,
                        total_slots=odp.total_slots,
                        used_slots=odp.used_slots,
                        available_slots=odp.available_slots,
                        attached_customers=attached,
                    )
                )
                logger.warning(
                    f"Slot discrepancy on ODP {odp.id} ({odp.name}): "
                    f"total={odp.total_slots}, used={odp.used_slots}, "
                    f"available={odp.available_slots}, attached_customers={attached}"
                )

            execution_time_ms = int((time.time() - start_time) * 1000)

            if discrepancies:
                logger.warning(
                    f"Slot reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {len(odps)} distribution points in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Slot reconciliation complete. All {len(odps)} distribution points consistent "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(
                SlotReconciliationResultDTO(
                    total_odps_checked=len(odps),
                    discrepancies_found=len(discrepancies),
                    discrepancies=discrepancies,
                    reconciliation_time=reconciliation_time,
                    execution_time_ms=execution_time_ms,
                )
            )

        except Exception as e:
            logger.error(f"Slot reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile distribution point slots",
                    reason=str(e),
                )
            )
