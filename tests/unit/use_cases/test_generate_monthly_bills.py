"""Unit tests for GenerateMonthlyBills use case"""

import pytest
import pytz
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return, Error
from src.app.use_cases.billing import GenerateMonthlyBills, BillDTO
from src.domain.transaction import TransactionType, TransactionStatus

NOW = pytz.timezone("Asia/Jakarta").localize(datetime(2025, 2, 1, 0, 5))


def make_bill(customer_id):
    return BillDTO(
        id=customer_id * 10,
        customer_id=customer_id,
        type=TransactionType.BILL,
        amount=Decimal("300000"),
        description="Tagihan bulanan February 2025",
        status=TransactionStatus.PENDING,
        billing_period="2025-02",
        due_date=datetime(2025, 2, 4, 17, 5),
        breakdown={},
        created_at=datetime(2025, 1, 31, 17, 5),
    )


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_billable_customers = AsyncMock(
        return_value=[MagicMock(id=1), MagicMock(id=2), MagicMock(id=3)]
    )
    return repo


@pytest.fixture
def generate_bill():
    return MagicMock()


@pytest.fixture
def bill_scope(generate_bill):
    entered = []

    @asynccontextmanager
    async def scope():
        entered.append(True)
        yield generate_bill

    scope.entered = entered
    return scope


@pytest.mark.asyncio
class TestGenerateMonthlyBills:
    async def test_each_customer_billed_in_own_scope(self, mock_customer_repo, generate_bill, bill_scope):
        generate_bill.execute = AsyncMock(side_effect=lambda cid, now: Return.ok(make_bill(cid)))

        result = await GenerateMonthlyBills(mock_customer_repo, bill_scope).execute(NOW)

        assert result.is_ok()
        response = result.value
        assert response.total_customers == 3
        assert response.bills_created == 3
        assert response.message == "3 tagihan berhasil dibuat"
        assert len(bill_scope.entered) == 3
        generate_bill.execute.assert_any_call(2, NOW)

    async def test_failures_and_skips_are_counted(self, mock_customer_repo, generate_bill, bill_scope):
        """
        Given: One customer billed, one already billed, one failing
        When: Monthly billing runs
        Then: The run succeeds and reports each outcome
        """
        outcomes = {
            1: Return.ok(make_bill(1)),
            2: Return.ok(None),
            3: Return.err(Error(code="GENERATE_BILL_FAILED", message="boom")),
        }
        generate_bill.execute = AsyncMock(side_effect=lambda cid, now: outcomes[cid])

        result = await GenerateMonthlyBills(mock_customer_repo, bill_scope).execute(NOW)

        assert result.is_ok()
        response = result.value
        assert response.bills_created == 1
        assert response.skipped == 1
        assert response.failed == 1
        assert response.failures[0].customer_id == 3
        assert response.failures[0].code == "GENERATE_BILL_FAILED"
        assert response.message == "1 tagihan berhasil dibuat"

    async def test_scope_exception_does_not_stop_run(self, mock_customer_repo, generate_bill, bill_scope):
        async def execute(customer_id, now):
            if customer_id == 1:
                raise RuntimeError("connection lost")
            return Return.ok(make_bill(customer_id))

        generate_bill.execute = AsyncMock(side_effect=execute)

        result = await GenerateMonthlyBills(mock_customer_repo, bill_scope).execute(NOW)

        assert result.is_ok()
        assert result.value.bills_created == 2
        assert result.value.failed == 1

    async def test_no_billable_customers(self, mock_customer_repo, bill_scope):
        mock_customer_repo.get_billable_customers = AsyncMock(return_value=[])

        result = await GenerateMonthlyBills(mock_customer_repo, bill_scope).execute(NOW)

        assert result.is_ok()
        assert result.value.total_customers == 0
        assert result.value.message == "0 tagihan berhasil dibuat"

    async def test_listing_failure_returns_error(self, mock_customer_repo, bill_scope):
        mock_customer_repo.get_billable_customers = AsyncMock(side_effect=RuntimeError("db down"))

        result = await GenerateMonthlyBills(mock_customer_repo, bill_scope).execute(NOW)

        assert result.is_err()
        assert result.error.code == "GENERATE_MONTHLY_BILLS_FAILED"
