"""Unit tests for SlotReconcilerWorker"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

from src.app.use_cases.network.dtos import SlotReconciliationResultDTO, SlotDiscrepancyDTO
from src.worker.slot_reconciler import SlotReconcilerWorker


@pytest.fixture
def sample_discrepancy_result():
    return SlotReconciliationResultDTO(
        total_odps_checked=5,
        discrepancies_found=1,
        discrepancies=[
            SlotDiscrepancyDTO(
                odp_id=2,
                name="ODP-02",
                total_slots=8,
                used_slots=3,
                available_slots=5,
                attached_customers=4,
            )
        ],
        reconciliation_time=datetime.now(timezone.utc),
        execution_time_ms=12,
    )


@pytest.mark.asyncio
class TestSlotReconcilerWorkerRunOnce:
    @patch("src.worker.slot_reconciler.ApplicationConfig")
    @patch("src.worker.slot_reconciler.ReconcileSlots")
    @patch("src.worker.slot_reconciler.SqlAlchemyDistributionPointRepository")
    @patch("src.worker.slot_reconciler.SqlAlchemyCustomerRepository")
    @patch("src.worker.slot_reconciler.create_async_engine")
    @patch("src.worker.slot_reconciler.sessionmaker")
    async def test_run_once_reports_discrepancies(
        self,
        mock_sessionmaker,
        mock_create_engine,
        mock_customer_repo_class,
        mock_odp_repo_class,
        mock_use_case_class,
        mock_app_config,
        sample_discrepancy_result,
    ):
        """
        Given: One distribution point disagrees with its attached customers
        When: run_once is called
        Then: The discrepancy is returned
        """
        mock_app_config.DB_URI = "postgresql+asyncpg://test@localhost/db"
        mock_app_config.SLOT_RECONCILIATION_ENABLED = True
        mock_session = MagicMock()
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=False)
        mock_sessionmaker.return_value = MagicMock(return_value=mock_session)

        mock_result = MagicMock()
        mock_result.is_err.return_value = False
        mock_result.value = sample_discrepancy_result
        mock_use_case_class.return_value.execute = AsyncMock(return_value=mock_result)

        worker = SlotReconcilerWorker()
        result = await worker.run_once()

        assert result.discrepancies_found == 1
        assert result.discrepancies[0].attached_customers == 4
        mock_use_case_class.return_value.execute.assert_called_once()

    @patch("src.worker.slot_reconciler.ApplicationConfig")
    @patch("src.worker.slot_reconciler.ReconcileSlots")
    @patch("src.worker.slot_reconciler.create_async_engine")
    async def test_run_once_skips_when_disabled(self, mock_create_engine, mock_use_case_class, mock_app_config):
        mock_app_config.DB_URI = "postgresql+asyncpg://test@localhost/db"
        mock_app_config.SLOT_RECONCILIATION_ENABLED = False

        worker = SlotReconcilerWorker()
        result = await worker.run_once()

        assert result.total_odps_checked == 0
        assert result.execution_time_ms == 0
        mock_use_case_class.assert_not_called()

    @patch("src.worker.slot_reconciler.create_async_engine")
    async def test_shutdown_disposes_engine(self, mock_create_engine):
        mock_engine = MagicMock()
        mock_engine.dispose = AsyncMock()
        mock_create_engine.return_value = mock_engine

        worker = SlotReconcilerWorker()
        await worker.shutdown()

        mock_engine.dispose.assert_called_once()
