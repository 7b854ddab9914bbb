"""Monthly Billing Background Worker

Generates the monthly bill of every active customer.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.services.clock import ZonedClock, FixedClock
from src.app.services.clock import Clock
from src.app.use_cases.billing import GenerateMonthlyBills, MonthlyBillingResultDTO
from src.depends import bill_scope

logger = logging.getLogger(__name__)


class MonthlyBillingWorker:
    """
    Background worker for monthly bill generation

    Features:
    - Runs on MONTHLY_BILLING_RUN_DAY of each civil month
    - One transaction per customer; a failing customer never blocks the rest
    - Idempotent: re-running in the same month creates no new bills
    - Can run once or continuously

    Usage:
        # Run once now
        worker = MonthlyBillingWorker()
        result = await worker.run_once()

        # Run continuously (checks hourly whether the run day has come)
        worker = MonthlyBillingWorker()
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            clock: Time source (defaults to the configured civil timezone)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.clock = clock or ZonedClock(ApplicationConfig.TIMEZONE)

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("MonthlyBillingWorker initialized")

    async def run_once(self, now: Optional[datetime] = None) -> MonthlyBillingResultDTO:
        """
        Run bill generation once

        Args:
            now: Billing time (defaults to the clock)

        Returns:
            MonthlyBillingResultDTO with summary
        """
        now = now or self.clock.now()
        logger.info(f"Starting monthly billing for {now.strftime('%B %Y')}")

        async with self.async_session_factory() as session:
            use_case = GenerateMonthlyBills(
                customer_repo=SqlAlchemyCustomerRepository(session),
                bill_scope=bill_scope(self.async_session_factory),
            )
            result = await use_case.execute(now)

        if result.is_err():
            logger.error(f"Monthly billing failed: {result.error.message}")
            raise RuntimeError(f"Monthly billing failed: {result.error.message}")

        response = result.value
        for failure in response.failures:
            logger.error(
                f"  - Customer {failure.customer_id} not billed: {failure.code} {failure.message}"
            )

        return response

    async def run_forever(self, check_interval_seconds: int = 3600):
        """
        Run billing continuously, once per month on the run day

        Args:
            check_interval_seconds: Seconds between checks (default: 1 hour)
        """
        logger.info(
            f"Starting continuous monthly billing with {check_interval_seconds}s interval"
        )

        last_processed_month = None

        while True:
            try:
                now = self.clock.now()
                current_month = (now.year, now.month)

                if not ApplicationConfig.MONTHLY_BILLING_ENABLED:
                    logger.debug("Monthly billing is disabled, skipping")
                elif now.day == ApplicationConfig.MONTHLY_BILLING_RUN_DAY and last_processed_month != current_month:
                    result = await self.run_once(now)
                    last_processed_month = current_month
                    logger.info(
                        f"Processed monthly billing: {result.bills_created} bills created, "
                        f"{result.failed} failed"
                    )
                else:
                    logger.debug("Skipping billing check - not run day or already processed")

            except Exception as e:
                logger.error(f"Billing cycle failed: {e}")

            await asyncio.sleep(check_interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("MonthlyBillingWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Bill now
        python -m src.worker.monthly_billing

        # Replay a billing run for a given civil date
        python -m src.worker.monthly_billing --date 2025-02-01

        # Run continuously
        python -m src.worker.monthly_billing --continuous
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Monthly Billing Worker")
    parser.add_argument("--date", type=str, help="Civil date to bill as (YYYY-MM-DD)")
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously"
    )
    args = parser.parse_args()

    clock = None
    if args.date:
        clock = FixedClock(datetime.strptime(args.date, "%Y-%m-%d"), ApplicationConfig.TIMEZONE)

    worker = MonthlyBillingWorker(clock=clock)

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once()
            print(f"Monthly billing complete:")
            print(f"  Total customers: {result.total_customers}")
            print(f"  Bills created: {result.bills_created}")
            print(f"  Skipped: {result.skipped}")
            print(f"  Failed: {result.failed}")
            print(f"  Execution time: {result.execution_time_ms}ms")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
