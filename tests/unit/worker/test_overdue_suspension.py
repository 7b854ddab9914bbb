"""Unit tests for OverdueSuspensionWorker"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from src.adapter.services.clock import FixedClock
from src.app.use_cases.billing.dtos import (
    SuspendOverdueResultDTO,
    SuspensionRetryResultDTO,
)
from src.worker.overdue_suspension import OverdueSuspensionWorker


@pytest.fixture
def fixed_clock():
    return FixedClock(datetime(2025, 2, 6, 0, 10), "Asia/Jakarta")


@pytest.fixture
def router_control():
    service = MagicMock()
    service.disable_subscriber_credential = AsyncMock(return_value=True)
    return service


def mock_session_factory(mock_sessionmaker):
    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    mock_sessionmaker.return_value = MagicMock(return_value=mock_session)


def ok(value):
    result = MagicMock()
    result.is_err.return_value = False
    result.value = value
    return result


class TestOverdueSuspensionWorkerInit:
    @patch("src.worker.overdue_suspension.ApplicationConfig")
    @patch("src.worker.overdue_suspension.create_async_engine")
    def test_uses_configured_retry_policy(self, mock_create_engine, mock_app_config, router_control, fixed_clock):
        mock_app_config.DB_URI = "postgresql+asyncpg://default@localhost/db"

        worker = OverdueSuspensionWorker(clock=fixed_clock, router_control=router_control)

        assert worker.db_uri == "postgresql+asyncpg://default@localhost/db"
        assert worker.disabler.router_control is router_control


@pytest.mark.asyncio
class TestOverdueSuspensionWorkerRuns:
    @patch("src.worker.overdue_suspension.SuspendOverdue")
    @patch("src.worker.overdue_suspension.SqlAlchemyCustomerRepository")
    @patch("src.worker.overdue_suspension.create_async_engine")
    @patch("src.worker.overdue_suspension.sessionmaker")
    async def test_run_once_suspends_as_of_clock(
        self, mock_sessionmaker, mock_create_engine, mock_repo_class, mock_use_case_class,
        fixed_clock, router_control,
    ):
        mock_session_factory(mock_sessionmaker)
        mock_use_case_class.return_value.execute = AsyncMock(
            return_value=ok(SuspendOverdueResultDTO(is_suspension_day=True, message="Suspended 0 customers"))
        )

        worker = OverdueSuspensionWorker(clock=fixed_clock, router_control=router_control)
        result = await worker.run_once()

        assert result.is_suspension_day is True
        mock_use_case_class.return_value.execute.assert_called_once_with(fixed_clock.now())

    @patch("src.worker.overdue_suspension.RetrySuspensionActions")
    @patch("src.worker.overdue_suspension.SqlAlchemySuspensionActionRepository")
    @patch("src.worker.overdue_suspension.create_async_engine")
    @patch("src.worker.overdue_suspension.sessionmaker")
    async def test_retry_once(
        self, mock_sessionmaker, mock_create_engine, mock_repo_class, mock_use_case_class,
        fixed_clock, router_control,
    ):
        mock_session_factory(mock_sessionmaker)
        mock_use_case_class.return_value.execute = AsyncMock(
            return_value=ok(SuspensionRetryResultDTO(total_actions=2, confirmed=2, still_pending=0, failed=0))
        )

        worker = OverdueSuspensionWorker(clock=fixed_clock, router_control=router_control)
        result = await worker.retry_once()

        assert result.confirmed == 2

    @patch("src.worker.overdue_suspension.SuspendOverdue")
    @patch("src.worker.overdue_suspension.SqlAlchemyCustomerRepository")
    @patch("src.worker.overdue_suspension.create_async_engine")
    @patch("src.worker.overdue_suspension.sessionmaker")
    async def test_run_once_raises_on_error(
        self, mock_sessionmaker, mock_create_engine, mock_repo_class, mock_use_case_class,
        fixed_clock, router_control,
    ):
        mock_session_factory(mock_sessionmaker)
        result = MagicMock()
        result.is_err.return_value = True
        result.error.message = "Failed to load overdue customers"
        mock_use_case_class.return_value.execute = AsyncMock(return_value=result)

        worker = OverdueSuspensionWorker(clock=fixed_clock, router_control=router_control)
        with pytest.raises(RuntimeError, match="Overdue suspension failed"):
            await worker.run_once()
