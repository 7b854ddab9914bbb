"""GenerateCustomerBill Use Case

Creates the current month's bill for one customer.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.addon_item_repository import AddonItemRepository
from src.app.repositories.transaction_repository import TransactionRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.addon_item import AddonItemType
from src.domain.billing_cycle import (
    prorate,
    cycle_start,
    next_cycle_start,
    bill_due_date,
    bill_description,
    billing_period,
    to_storage,
)
from src.domain.customer import BillingStatus, CustomerStatus, ServiceStatus
from src.domain.errors import NotFound
from src.domain.transaction import Transaction, TransactionType, TransactionStatus
from .dtos import BillDTO, bill_to_dto

logger = logging.getLogger(__name__)


def _money(amount) -> float:
    return float(Decimal(str(amount)))


class GenerateCustomerBill:
    """
    Use Case: Generate one customer's monthly bill

    Business Rules:
    1. At most one bill per customer per civil calendar month; a bill that
       loses the race to a concurrent run hits the unique billing period
       constraint and the customer is skipped
    2. Pro-rata replaces the package price on the first bill only
       (is_pro_rata_applied is set once and never cleared)
    3. Active monthly addons are billed every month
    4. Active unpaid one-time addons are billed once and marked paid
    5. Discount is subtracted and the final total is clamped at 0
    6. Bill is pending and due on BILL_DUE_DAY of the current month
    7. Customer moves to belum_lunas; a suspended customer stays suspended

    Flow:
    1. Lock customer row
    2. Check for an existing bill this month (skip when found)
    3. Compute package charge, lock and add billable addons, apply discount
    4. Create bill and update customer billing dates and status
    5. Commit transaction

    Returns Ok(None) when the customer is skipped.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        addon_repo: AddonItemRepository,
        transaction_repo: TransactionRepository,
        due_day: int = 5,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.addon_repo = addon_repo
        self.transaction_repo = transaction_repo
        self.due_day = due_day

    async def execute(self, customer_id: int, now: datetime) -> Result[Optional[BillDTO]]:
        """
        Execute bill generation

        Args:
            customer_id: Customer to bill
            now: Current time, timezone-aware in the billing timezone

        Returns:
            Result[Optional[BillDTO]]: The created bill, None when skipped
        """
        try:
            # Step 1: Lock customer
            customer = await self.customer_repo.get_by_id(customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {customer_id} not found")

            if customer.status != CustomerStatus.ACTIVE or customer.service_status != ServiceStatus.ACTIVE:
                logger.info(f"Customer {customer_id} is not billable, skipping")
                await self.uow.rollback()
                return Return.ok(None)

            # Step 2: One bill per month
            month_start = to_storage(cycle_start(now))
            if await self.transaction_repo.exists_bill_since(customer_id, month_start):
                logger.info(f"Customer {customer_id} already billed this month, skipping")
                await self.uow.rollback()
                return Return.ok(None)

            # Step 3: Package charge
            package_price = Decimal(str(customer.package_price))
            package_line = {"name": customer.package, "price": _money(package_price)}
            total = package_price

            if not customer.is_pro_rata_applied and customer.active_date:
                pro_rata = prorate(
                    customer.active_date,
                    package_price,
                    customer.active_period,
                    customer.active_period_unit,
                )
                if pro_rata.is_pro_rata_applied:
                    total = pro_rata.pro_rata_amount
                    package_line["price"] = _money(pro_rata.pro_rata_amount)
                    package_line["note"] = (
                        f"Prorata {pro_rata.remaining_days}/{pro_rata.days_in_month} hari"
                    )
                    customer.is_pro_rata_applied = True
                    customer.pro_rata_amount = pro_rata.pro_rata_amount

            # Addons
            addons, one_time_items = [], []
            for addon in await self.addon_repo.get_billable_by_customer_id(customer_id, for_update=True):
                line = {
                    "name": addon.item_name,
                    "price": _money(addon.price),
                    "quantity": addon.quantity,
                    "total": _money(addon.total),
                }
                total += addon.total

                if addon.item_type == AddonItemType.MONTHLY:
                    addons.append(line)
                else:
                    one_time_items.append(line)
                    addon.mark_billed()
                    await self.addon_repo.update(addon)

            discount = Decimal(str(customer.discount or 0))
            total = max(Decimal("0"), total - discount)

            # Step 4: Bill and customer state
            bill = Transaction(
                customer_id=customer_id,
                type=TransactionType.BILL,
                amount=total,
                description=bill_description(now),
                billing_period=billing_period(now),
                status=TransactionStatus.PENDING,
                due_date=to_storage(bill_due_date(now, self.due_day)),
                breakdown={
                    "package": package_line,
                    "addons": addons,
                    "one_time_items": one_time_items,
                    "discount": _money(discount),
                },
                created_at=to_storage(now),
            )
            bill = await self.transaction_repo.create(bill)

            customer.last_billing_date = to_storage(now)
            customer.next_billing_date = to_storage(next_cycle_start(now))
            if customer.billing_status != BillingStatus.SUSPEND:
                customer.transition_billing_status(BillingStatus.BELUM_LUNAS)
            await self.customer_repo.update(customer)

            response = bill_to_dto(bill)

            # Step 5: Commit
            await self.uow.commit()

            logger.info(
                f"Created bill {response.id} for customer {customer_id}: amount={response.amount}"
            )
            return Return.ok(response)

        except IntegrityError as e:
            await self.uow.rollback()
            logger.info(
                f"Customer {customer_id} already billed for {billing_period(now)} by a concurrent run, skipping: {e.orig}"
            )
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Bill generation failed for customer {customer_id}: {e}")
            return Return.err(
                error_from_exception(e, "GENERATE_BILL_FAILED", "Failed to generate customer bill")
            )
