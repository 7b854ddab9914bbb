"""SuspendOverdue Use Case

Suspends every customer holding a pending bill past its due date.
"""

import logging
from datetime import datetime
from typing import AsyncContextManager, Callable
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.billing_cycle import is_suspension_day, to_storage
from .dtos import CustomerFailureDTO, SuspendedCustomerDTO, SuspendOverdueResultDTO
from .suspend_customer import SuspendCustomer

logger = logging.getLogger(__name__)

# Opens a fresh session and yields a SuspendCustomer bound to it
SuspendScope = Callable[[], AsyncContextManager[SuspendCustomer]]


class SuspendOverdue:
    """
    Use Case: Suspend overdue customers

    Business Rules:
    1. Runs only on the suspension day of the month; otherwise returns
       "Not suspension day" and changes nothing
    2. Candidates: billing_status=belum_lunas, service_status=active and at
       least one pending bill with due_date < now
    3. Each customer is suspended in its own unit of work; failures are
       reported per customer
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        suspend_scope: SuspendScope,
        suspension_day: int = 6,
    ):
        self.customer_repo = customer_repo
        self.suspend_scope = suspend_scope
        self.suspension_day = suspension_day

    async def execute(self, now: datetime) -> Result[SuspendOverdueResultDTO]:
        if not is_suspension_day(now, self.suspension_day):
            return Return.ok(
                SuspendOverdueResultDTO(is_suspension_day=False, message="Not suspension day")
            )

        try:
            customers = await self.customer_repo.get_overdue_customers(to_storage(now))
            customer_ids = [customer.id for customer in customers]
        except Exception as e:
            logger.error(f"Failed to load overdue customers: {e}")
            return Return.err(
                Error(
                    code="SUSPEND_OVERDUE_FAILED",
                    message="Failed to load overdue customers",
                    reason=str(e),
                )
            )

        logger.info(f"Found {len(customer_ids)} overdue customers")

        suspended: list[SuspendedCustomerDTO] = []
        failures: list[CustomerFailureDTO] = []

        for customer_id in customer_ids:
            try:
                async with self.suspend_scope() as suspend_customer:
                    result = await suspend_customer.execute(customer_id, now)
            except Exception as e:
                logger.error(f"Unexpected error suspending customer {customer_id}: {e}")
                failures.append(
                    CustomerFailureDTO(customer_id=customer_id, code="SUSPEND_CUSTOMER_FAILED", message=str(e))
                )
                continue

            if result.is_err():
                failures.append(
                    CustomerFailureDTO(
                        customer_id=customer_id,
                        code=result.error.code,
                        message=result.error.message,
                    )
                )
            elif result.value is not None:
                suspended.append(result.value)

        logger.info(f"Suspended {len(suspended)} customers, {len(failures)} failed")

        return Return.ok(
            SuspendOverdueResultDTO(
                is_suspension_day=True,
                message=f"Suspended {len(suspended)} customers",
                suspended=suspended,
                failures=failures,
            )
        )
