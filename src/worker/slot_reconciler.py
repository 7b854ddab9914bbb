"""Slot Reconciliation Background Worker

Periodically checks distribution point slot counters against attached customers.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.distribution_point_repository import SqlAlchemyDistributionPointRepository
from src.app.use_cases.network import ReconcileSlots, SlotReconciliationResultDTO
from src.domain.base import utc_now

logger = logging.getLogger(__name__)


class SlotReconcilerWorker:
    """
    Background worker for slot reconciliation

    Features:
    - Compares used_slots with the number of attached customers
    - Checks used_slots + available_slots == total_slots
    - Logs discrepancies for investigation, never repairs them
    - Configurable interval (default: daily)

    Usage:
        worker = SlotReconcilerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("SlotReconcilerWorker initialized")

    async def run_once(self) -> SlotReconciliationResultDTO:
        """
        Run reconciliation once

        Returns:
            SlotReconciliationResultDTO with reconciliation results
        """
        if not ApplicationConfig.SLOT_RECONCILIATION_ENABLED:
            logger.info("Slot reconciliation is disabled, skipping")
            return SlotReconciliationResultDTO(
                total_odps_checked=0,
                discrepancies_found=0,
                discrepancies=[],
                reconciliation_time=utc_now(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            use_case = ReconcileSlots(
                odp_repo=SqlAlchemyDistributionPointRepository(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
            )
            result = await use_case.execute()

        if result.is_err():
            logger.error(f"Slot reconciliation failed: {result.error.message}")
            raise RuntimeError(f"Slot reconciliation failed: {result.error.message}")

        response = result.value

        if response.discrepancies_found > 0:
            logger.error(
                f"ALERT: {response.discrepancies_found} distribution point slot discrepancies found!"
            )
            for d in response.discrepancies:
                logger.error(
                    f"  - ODP {d.name} (odp_id={d.odp_id}): total={d.total_slots}, "
                    f"used={d.used_slots}, available={d.available_slots}, "
                    f"attached={d.attached_customers}"
                )

        return response

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run reconciliation continuously at specified interval

        Args:
            interval_seconds: Seconds between runs (default: SLOT_RECONCILIATION_INTERVAL_SECONDS)
        """
        interval_seconds = interval_seconds or ApplicationConfig.SLOT_RECONCILIATION_INTERVAL_SECONDS
        logger.info(
            f"Starting continuous slot reconciliation with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Reconciliation cycle complete. "
                    f"Checked {result.total_odps_checked} distribution points, "
                    f"found {result.discrepancies_found} discrepancies "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("SlotReconcilerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.slot_reconciler --once

        # Run continuously with custom interval (in seconds)
        python -m src.worker.slot_reconciler --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Slot Reconciliation Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=None,
        help="Interval between runs in seconds (default: SLOT_RECONCILIATION_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = SlotReconcilerWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print(f"Slot reconciliation complete:")
            print(f"  Distribution points checked: {result.total_odps_checked}")
            print(f"  Discrepancies found: {result.discrepancies_found}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
