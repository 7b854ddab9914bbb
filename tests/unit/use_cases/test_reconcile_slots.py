"""Unit tests for ReconcileSlots use case

Tests cover:
- Counter invariant check (used + available == total)
- Attached customer count check
- Read-only behavior and error handling
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.network import ReconcileSlots
from src.domain.distribution_point import DistributionPoint


def make_odp(odp_id, total, used, available):
    return DistributionPoint(
        id=odp_id,
        name=f"ODP-{odp_id:02d}",
        total_slots=total,
        used_slots=used,
        available_slots=available,
    )


@pytest.fixture
def mock_odp_repo():
    return MagicMock()


@pytest.fixture
def mock_customer_repo():
    return MagicMock()


@pytest.fixture
def reconcile_use_case(mock_odp_repo, mock_customer_repo):
    return ReconcileSlots(odp_repo=mock_odp_repo, customer_repo=mock_customer_repo)


@pytest.mark.asyncio
class TestReconcileSlots:
    async def test_consistent_points_report_no_discrepancy(
        self, reconcile_use_case, mock_odp_repo, mock_customer_repo
    ):
        mock_odp_repo.get_all = AsyncMock(return_value=[make_odp(1, 8, 2, 6), make_odp(2, 4, 0, 4)])
        mock_customer_repo.count_by_odp_id = AsyncMock(side_effect=lambda odp_id: {1: 2, 2: 0}[odp_id])

        result = await reconcile_use_case.execute()

        assert result.is_ok()
        assert result.value.total_odps_checked == 2
        assert result.value.discrepancies_found == 0

    async def test_detects_counter_drift(self, reconcile_use_case, mock_odp_repo, mock_customer_repo):
        """
        Given: used + available differs from total
        When: Reconciliation runs
        Then: The distribution point is reported
        """
        mock_odp_repo.get_all = AsyncMock(return_value=[make_odp(1, 8, 2, 5)])
        mock_customer_repo.count_by_odp_id = AsyncMock(return_value=2)

        result = await reconcile_use_case.execute()

        assert result.value.discrepancies_found == 1
        assert result.value.discrepancies[0].available_slots == 5

    async def test_detects_attached_count_mismatch(self, reconcile_use_case, mock_odp_repo, mock_customer_repo):
        mock_odp_repo.get_all = AsyncMock(return_value=[make_odp(1, 8, 2, 6)])
        mock_customer_repo.count_by_odp_id = AsyncMock(return_value=3)

        result = await reconcile_use_case.execute()

        assert result.value.discrepancies_found == 1
        assert result.value.discrepancies[0].attached_customers == 3

    async def test_does_not_modify_counters(self, reconcile_use_case, mock_odp_repo, mock_customer_repo):
        odp = make_odp(1, 8, 2, 5)
        mock_odp_repo.get_all = AsyncMock(return_value=[odp])
        mock_odp_repo.occupy_slot = AsyncMock()
        mock_odp_repo.release_slot = AsyncMock()
        mock_customer_repo.count_by_odp_id = AsyncMock(return_value=2)

        await reconcile_use_case.execute()

        assert (odp.used_slots, odp.available_slots) == (2, 5)
        mock_odp_repo.occupy_slot.assert_not_called()
        mock_odp_repo.release_slot.assert_not_called()

    async def test_repository_failure_returns_error(self, reconcile_use_case, mock_odp_repo):
        mock_odp_repo.get_all = AsyncMock(side_effect=Exception("Database connection failed"))

        result = await reconcile_use_case.execute()

        assert result.is_err()
        assert result.error.code == "RECONCILIATION_FAILED"
