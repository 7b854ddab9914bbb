"""Unit tests for MonthlyBillingWorker

Tests cover:
- Worker initialization with configuration
- run_once delegating to the monthly billing use case
- Error propagation
- Shutdown and cleanup
"""

import pytest
import pytz
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from src.adapter.services.clock import FixedClock
from src.app.use_cases.billing.dtos import MonthlyBillingResultDTO, CustomerFailureDTO
from src.worker.monthly_billing import MonthlyBillingWorker


@pytest.fixture
def fixed_clock():
    return FixedClock(datetime(2025, 2, 1, 0, 5), "Asia/Jakarta")


@pytest.fixture
def sample_billing_result():
    return MonthlyBillingResultDTO(
        total_customers=3,
        bills_created=2,
        skipped=0,
        failed=1,
        failures=[CustomerFailureDTO(customer_id=3, code="CONFLICT", message="locked")],
        message="2 tagihan berhasil dibuat",
        execution_time_ms=40,
    )


def mock_session_factory(mock_sessionmaker):
    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    mock_sessionmaker.return_value = MagicMock(return_value=mock_session)
    return mock_session


class TestMonthlyBillingWorkerInit:
    @patch("src.worker.monthly_billing.ApplicationConfig")
    @patch("src.worker.monthly_billing.create_async_engine")
    def test_initializes_with_default_config(self, mock_create_engine, mock_app_config):
        mock_app_config.DB_URI = "postgresql+asyncpg://default@localhost/db"
        mock_app_config.TIMEZONE = "Asia/Jakarta"

        worker = MonthlyBillingWorker()

        assert worker.db_uri == "postgresql+asyncpg://default@localhost/db"
        assert worker.clock.now().tzinfo is not None
        mock_create_engine.assert_called_once()

    @patch("src.worker.monthly_billing.create_async_engine")
    def test_initializes_with_custom_db_uri(self, mock_create_engine, fixed_clock):
        worker = MonthlyBillingWorker(db_uri="sqlite+aiosqlite:///billing.db", clock=fixed_clock)

        assert worker.db_uri == "sqlite+aiosqlite:///billing.db"
        assert worker.clock is fixed_clock


@pytest.mark.asyncio
class TestMonthlyBillingWorkerRunOnce:
    @patch("src.worker.monthly_billing.GenerateMonthlyBills")
    @patch("src.worker.monthly_billing.SqlAlchemyCustomerRepository")
    @patch("src.worker.monthly_billing.create_async_engine")
    @patch("src.worker.monthly_billing.sessionmaker")
    async def test_run_once_bills_as_of_clock(
        self,
        mock_sessionmaker,
        mock_create_engine,
        mock_customer_repo_class,
        mock_use_case_class,
        fixed_clock,
        sample_billing_result,
    ):
        """
        Given: A clock fixed at 2025-02-01 00:05 WIB
        When: run_once is called
        Then: The monthly billing use case runs as of that instant
        """
        mock_session_factory(mock_sessionmaker)
        mock_result = MagicMock()
        mock_result.is_err.return_value = False
        mock_result.value = sample_billing_result
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(return_value=mock_result)
        mock_use_case_class.return_value = mock_use_case

        worker = MonthlyBillingWorker(clock=fixed_clock)
        result = await worker.run_once()

        assert result.bills_created == 2
        assert result.failed == 1
        mock_use_case.execute.assert_called_once_with(fixed_clock.now())

    @patch("src.worker.monthly_billing.GenerateMonthlyBills")
    @patch("src.worker.monthly_billing.SqlAlchemyCustomerRepository")
    @patch("src.worker.monthly_billing.create_async_engine")
    @patch("src.worker.monthly_billing.sessionmaker")
    async def test_run_once_accepts_explicit_now(
        self,
        mock_sessionmaker,
        mock_create_engine,
        mock_customer_repo_class,
        mock_use_case_class,
        fixed_clock,
        sample_billing_result,
    ):
        mock_session_factory(mock_sessionmaker)
        mock_result = MagicMock()
        mock_result.is_err.return_value = False
        mock_result.value = sample_billing_result
        mock_use_case_class.return_value.execute = AsyncMock(return_value=mock_result)
        replay = pytz.timezone("Asia/Jakarta").localize(datetime(2025, 3, 1, 1, 0))

        worker = MonthlyBillingWorker(clock=fixed_clock)
        await worker.run_once(replay)

        mock_use_case_class.return_value.execute.assert_called_once_with(replay)

    @patch("src.worker.monthly_billing.GenerateMonthlyBills")
    @patch("src.worker.monthly_billing.SqlAlchemyCustomerRepository")
    @patch("src.worker.monthly_billing.create_async_engine")
    @patch("src.worker.monthly_billing.sessionmaker")
    async def test_run_once_raises_on_use_case_error(
        self,
        mock_sessionmaker,
        mock_create_engine,
        mock_customer_repo_class,
        mock_use_case_class,
        fixed_clock,
    ):
        mock_session_factory(mock_sessionmaker)
        mock_error = MagicMock()
        mock_error.message = "Failed to load billable customers"
        mock_result = MagicMock()
        mock_result.is_err.return_value = True
        mock_result.error = mock_error
        mock_use_case_class.return_value.execute = AsyncMock(return_value=mock_result)

        worker = MonthlyBillingWorker(clock=fixed_clock)
        with pytest.raises(RuntimeError, match="Monthly billing failed"):
            await worker.run_once()


@pytest.mark.asyncio
class TestMonthlyBillingWorkerShutdown:
    @patch("src.worker.monthly_billing.create_async_engine")
    async def test_shutdown_disposes_engine(self, mock_create_engine, fixed_clock):
        mock_engine = MagicMock()
        mock_engine.dispose = AsyncMock()
        mock_create_engine.return_value = mock_engine

        worker = MonthlyBillingWorker(clock=fixed_clock)
        await worker.shutdown()

        mock_engine.dispose.assert_called_once()
