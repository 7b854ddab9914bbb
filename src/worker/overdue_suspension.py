"""Overdue Suspension Background Worker

Suspends overdue customers on the suspension day and re-drives router
credential disables that have not been confirmed.
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
from src.adapter.repositories.suspension_action_repository import SqlAlchemySuspensionActionRepository
from src.adapter.services.clock import ZonedClock, FixedClock
from src.adapter.services.router_control import create_router_control_service
from src.app.services.clock import Clock
from src.app.services.router_control import RouterControlService
from src.app.use_cases.billing import (
    SuspendOverdue,
    RetrySuspensionActions,
    SuspendOverdueResultDTO,
    SuspensionRetryResultDTO,
)
from src.depends import build_credential_disabler, suspend_scope, retry_scope

logger = logging.getLogger(__name__)


class OverdueSuspensionWorker:
    """
    Background worker for overdue suspension

    Features:
    - Suspends customers with a pending bill past due, on SUSPENSION_DAY only
    - Retries unconfirmed router credential disables every cycle
    - Can run once or continuously

    Usage:
        worker = OverdueSuspensionWorker()
        suspended = await worker.run_once()
        retried = await worker.retry_once()

        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        clock: Optional[Clock] = None,
        router_control: Optional[RouterControlService] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.clock = clock or ZonedClock(ApplicationConfig.TIMEZONE)
        self.disabler = build_credential_disabler(
            router_control
            or create_router_control_service(
                enabled=ApplicationConfig.ROUTER_CONTROL_ENABLED,
                timeout=ApplicationConfig.ROUTER_CONTROL_TIMEOUT_SECONDS,
            )
        )

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("OverdueSuspensionWorker initialized")

    async def run_once(self, now: Optional[datetime] = None) -> SuspendOverdueResultDTO:
        """
        Suspend overdue customers once

        Returns:
            SuspendOverdueResultDTO; is_suspension_day=False outside the suspension day
        """
        now = now or self.clock.now()

        async with self.async_session_factory() as session:
            use_case = SuspendOverdue(
                customer_repo=SqlAlchemyCustomerRepository(session),
                suspend_scope=suspend_scope(self.async_session_factory, self.disabler),
                suspension_day=ApplicationConfig.SUSPENSION_DAY,
            )
            result = await use_case.execute(now)

        if result.is_err():
            logger.error(f"Overdue suspension failed: {result.error.message}")
            raise RuntimeError(f"Overdue suspension failed: {result.error.message}")

        response = result.value
        for suspended in response.suspended:
            if suspended.router_error:
                logger.error(
                    f"ALERT: customer {suspended.customer_number} suspended but router credential "
                    f"still enabled: {suspended.router_error.message}"
                )
        return response

    async def retry_once(self, now: Optional[datetime] = None) -> SuspensionRetryResultDTO:
        now = now or self.clock.now()

        async with self.async_session_factory() as session:
            use_case = RetrySuspensionActions(
                action_repo=SqlAlchemySuspensionActionRepository(session),
                retry_scope=retry_scope(self.async_session_factory, self.disabler),
            )
            result = await use_case.execute(now)

        if result.is_err():
            logger.error(f"Suspension retry failed: {result.error.message}")
            raise RuntimeError(f"Suspension retry failed: {result.error.message}")

        return result.value

    async def run_forever(self, interval_seconds: int = 3600):
        """
        Run suspension and retries continuously

        Args:
            interval_seconds: Seconds between cycles (default: 1 hour)
        """
        logger.info(
            f"Starting continuous overdue suspension with {interval_seconds}s interval"
        )

        while True:
            try:
                if ApplicationConfig.SUSPENSION_WORKER_ENABLED:
                    now = self.clock.now()
                    suspended = await self.run_once(now)
                    retried = await self.retry_once(now)
                    logger.info(
                        f"Suspension cycle complete: {suspended.message}, "
                        f"{retried.confirmed}/{retried.total_actions} retries confirmed"
                    )
                else:
                    logger.debug("Overdue suspension is disabled, skipping")
            except Exception as e:
                logger.error(f"Suspension cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueSuspensionWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.overdue_suspension --once

        # Run once as of a given civil date
        python -m src.worker.overdue_suspension --once --date 2025-02-06

        # Only retry unconfirmed router disables
        python -m src.worker.overdue_suspension --retry-only

        # Run continuously
        python -m src.worker.overdue_suspension --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Suspension Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument("--retry-only", action="store_true", help="Only retry unconfirmed actions")
    parser.add_argument("--date", type=str, help="Civil date to run as (YYYY-MM-DD)")
    parser.add_argument(
        "--interval", type=int, default=3600,
        help="Interval between runs in seconds (default: 3600 = 1 hour)"
    )
    args = parser.parse_args()

    clock = None
    if args.date:
        clock = FixedClock(datetime.strptime(args.date, "%Y-%m-%d"), ApplicationConfig.TIMEZONE)

    worker = OverdueSuspensionWorker(clock=clock)

    try:
        if args.retry_only:
            retried = await worker.retry_once()
            print(f"Suspension retry complete:")
            print(f"  Actions: {retried.total_actions}")
            print(f"  Confirmed: {retried.confirmed}")
            print(f"  Still pending: {retried.still_pending}")
        elif args.once:
            result = await worker.run_once()
            print(result.message)
            for s in result.suspended:
                status = "router pending" if s.router_error else "router disabled"
                print(f"  - {s.customer_number} {s.name}: {status}")
            for f in result.failures:
                print(f"  ! customer {f.customer_id}: {f.code} {f.message}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
