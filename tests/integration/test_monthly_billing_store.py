"""Integration tests for bill generation against a real database

Checks the one-bill-per-month rule when several runs bill the same
customer at once.
"""

import asyncio
import pytest
import pytz
from datetime import date, datetime
from decimal import Decimal
from sqlmodel import select

from src.depends import bill_scope
from src.domain.addon_item import AddonItem, AddonItemType
from src.domain.customer import Customer
from src.domain.transaction import Transaction

JAKARTA = pytz.timezone("Asia/Jakarta")


async def add_customer(db_session):
    customer = Customer(
        customer_number="LTS0001",
        name="Ani",
        package="Home 20 Mbps",
        package_price=Decimal("300000"),
        active_date=date(2025, 1, 15),
    )
    db_session.add(customer)
    await db_session.commit()
    await db_session.refresh(customer)

    db_session.add(
        AddonItem(
            customer_id=customer.id,
            item_name="Biaya pasang",
            item_type=AddonItemType.ONE_TIME,
            price=Decimal("150000"),
        )
    )
    await db_session.commit()
    return customer


@pytest.mark.asyncio
class TestConcurrentBilling:
    async def test_overlapping_runs_create_one_bill(self, db_session, session_factory):
        """
        Given: A billable customer with an unpaid one-time add-on
        When: Four runs bill the customer for the same month at once
        Then: One bill is stored and the add-on appears on it once
        """
        customer = await add_customer(db_session)
        now = JAKARTA.localize(datetime(2025, 2, 1, 0, 5))
        scope = bill_scope(session_factory)

        async def bill_once():
            async with scope() as use_case:
                return await use_case.execute(customer.id, now)

        results = await asyncio.gather(*(bill_once() for _ in range(4)))

        created = [r.value for r in results if r.is_ok() and r.value is not None]
        assert len(created) == 1
        assert {r.error.code for r in results if r.is_err()} <= {"CONFLICT"}

        async with session_factory() as session:
            bills = (
                await session.execute(select(Transaction).where(Transaction.customer_id == customer.id))
            ).scalars().all()

        assert len(bills) == 1
        assert bills[0].billing_period == "2025-02"
        assert len(bills[0].breakdown["one_time_items"]) == 1
        assert created[0].billing_period == "2025-02"

    async def test_second_run_same_month_is_skipped(self, db_session, session_factory):
        customer = await add_customer(db_session)
        scope = bill_scope(session_factory)

        async with scope() as use_case:
            first = await use_case.execute(customer.id, JAKARTA.localize(datetime(2025, 2, 1, 0, 5)))
        async with scope() as use_case:
            second = await use_case.execute(customer.id, JAKARTA.localize(datetime(2025, 2, 20, 9, 0)))

        assert first.value is not None
        assert second.is_ok()
        assert second.value is None

    async def test_stored_timestamps_are_utc_aware(self, db_session, session_factory):
        customer = await add_customer(db_session)

        async with bill_scope(session_factory)() as use_case:
            result = await use_case.execute(customer.id, JAKARTA.localize(datetime(2025, 2, 1, 0, 5)))

        async with session_factory() as session:
            bill = await session.get(Transaction, result.value.id)
            stored_customer = await session.get(Customer, customer.id)

        assert bill.created_at == datetime(2025, 1, 31, 17, 5, tzinfo=pytz.utc)
        assert bill.created_at.utcoffset().total_seconds() == 0
        assert stored_customer.next_billing_date == datetime(2025, 1, 31, 17, 0, tzinfo=pytz.utc)
