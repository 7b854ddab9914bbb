"""GenerateMonthlyBills Use Case

Bills every active customer, one unit of work per customer.
"""

import logging
import time
from datetime import datetime
from typing import AsyncContextManager, Callable
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from .dtos import BillDTO, CustomerFailureDTO, MonthlyBillingResultDTO
from .generate_customer_bill import GenerateCustomerBill

logger = logging.getLogger(__name__)

# Opens a fresh session and yields a GenerateCustomerBill bound to it
BillScope = Callable[[], AsyncContextManager[GenerateCustomerBill]]


class GenerateMonthlyBills:
    """
    Use Case: Monthly billing run

    Business Rules:
    1. Billable customers: status=active and service_status=active
    2. Each customer is billed in its own unit of work; a failure rolls back
       only that customer and is counted, never propagated
    3. Re-running in the same month creates no new bills
    """

    def __init__(self, customer_repo: CustomerRepository, bill_scope: BillScope):
        self.customer_repo = customer_repo
        self.bill_scope = bill_scope

    async def execute(self, now: datetime) -> Result[MonthlyBillingResultDTO]:
        start_time = time.time()

        try:
            customers = await self.customer_repo.get_billable_customers()
            customer_ids = [customer.id for customer in customers]
        except Exception as e:
            logger.error(f"Failed to load billable customers: {e}")
            return Return.err(
                Error(
                    code="GENERATE_MONTHLY_BILLS_FAILED",
                    message="Failed to load billable customers",
                    reason=str(e),
                )
            )

        logger.info(f"Generating monthly bills for {len(customer_ids)} customers")

        bills: list[BillDTO] = []
        failures: list[CustomerFailureDTO] = []
        skipped = 0

        for customer_id in customer_ids:
            try:
                async with self.bill_scope() as generate_bill:
                    result = await generate_bill.execute(customer_id, now)
            except Exception as e:
                logger.error(f"Unexpected error billing customer {customer_id}: {e}")
                failures.append(
                    CustomerFailureDTO(customer_id=customer_id, code="GENERATE_BILL_FAILED", message=str(e))
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
            elif result.value is None:
                skipped += 1
            else:
                bills.append(result.value)

        execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Monthly billing complete: {len(bills)} created, {skipped} skipped, "
            f"{len(failures)} failed, {execution_time_ms}ms"
        )

        return Return.ok(
            MonthlyBillingResultDTO(
                total_customers=len(customer_ids),
                bills_created=len(bills),
                skipped=skipped,
                failed=len(failures),
                bills=bills,
                failures=failures,
                message=f"{len(bills)} tagihan berhasil dibuat",
                execution_time_ms=execution_time_ms,
            )
        )
