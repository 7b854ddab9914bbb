"""Unit tests for GetDashboardSummary use case"""

import pytest
import pytz
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.reporting import GetDashboardSummary
from src.domain.customer import (
    Customer,
    BillingStatus,
    CustomerStatus,
    InstallationStatus,
    ServiceStatus,
)
from src.domain.router import Router

NOW = pytz.timezone("Asia/Jakarta").localize(datetime(2025, 2, 10, 12, 0))


def make_customer(customer_id, package, price, area, created_at, **kwargs):
    return Customer(
        id=customer_id,
        customer_number=f"LTS{customer_id:04d}",
        name=f"Customer {customer_id}",
        package=package,
        package_price=Decimal(price),
        area=area,
        created_at=created_at,
        **kwargs,
    )


@pytest.fixture
def customers():
    return [
        make_customer(1, "Home 10", "200000", "Bogor", datetime(2025, 1, 1, tzinfo=pytz.utc),
                      installation_status=InstallationStatus.INSTALLED),
        make_customer(2, "Home 20", "300000", "Bogor", datetime(2025, 2, 8, tzinfo=pytz.utc),
                      billing_status=BillingStatus.BELUM_LUNAS),
        make_customer(3, "Home 20", "300000", "Depok", datetime(2025, 1, 5, tzinfo=pytz.utc),
                      billing_status=BillingStatus.SUSPEND,
                      installation_status=InstallationStatus.INSTALLED,
                      service_status=ServiceStatus.INACTIVE),
        make_customer(4, "Home 10", "200000", None, datetime(2025, 1, 5, tzinfo=pytz.utc),
                      status=CustomerStatus.INACTIVE),
    ]


@pytest.fixture
def use_case(customers):
    customer_repo = MagicMock()
    customer_repo.get_all = AsyncMock(return_value=customers)
    router_repo = MagicMock()
    router_repo.get_all = AsyncMock(
        return_value=[Router(id=1, name="rtr-cbn", ip_address="10.0.0.1", username="api", area="Cibinong")]
    )
    transaction_repo = MagicMock()
    transaction_repo.sum_amount = AsyncMock(
        side_effect=lambda since=None: Decimal("500000") if since else Decimal("1500000")
    )
    transaction_repo.count_since = AsyncMock(return_value=2)
    return GetDashboardSummary(customer_repo, router_repo, transaction_repo)


@pytest.mark.asyncio
class TestGetDashboardSummary:
    async def test_customer_counts(self, use_case):
        result = await use_case.execute(NOW)

        assert result.is_ok()
        summary = result.value
        assert summary.total_customers == 4
        assert summary.active_customers == 2
        assert summary.suspended_customers == 2
        assert summary.unpaid_customers == 1
        assert summary.new_installations == 2
        assert summary.installed_inactive == 1
        assert summary.new_customers_last_7_days == 1

    async def test_revenue_and_arpu(self, use_case):
        """
        Given: 500000 billed this month and two active customers
        When: The summary is built
        Then: ARPU is 250000
        """
        result = await use_case.execute(NOW)

        summary = result.value
        assert summary.monthly_revenue == Decimal("500000")
        assert summary.total_revenue == Decimal("1500000")
        assert summary.arpu == Decimal("250000")
        assert summary.monthly_transactions == 2

    async def test_package_and_area_breakdown(self, use_case):
        result = await use_case.execute(NOW)

        summary = result.value
        assert [(p.name, p.count, p.revenue) for p in summary.package_stats] == [
            ("Home 10", 2, Decimal("400000")),
            ("Home 20", 2, Decimal("600000")),
        ]
        assert [(a.name, a.customers, a.routers) for a in summary.area_stats] == [
            ("Bogor", 2, 0),
            ("Cibinong", 0, 1),
            ("Depok", 1, 0),
        ]
        assert summary.total_routers == 1

    async def test_no_active_customers_gives_zero_arpu(self, use_case, customers):
        for customer in customers:
            customer.billing_status = BillingStatus.BELUM_LUNAS

        result = await use_case.execute(NOW)

        assert result.value.active_customers == 0
        assert result.value.arpu == Decimal("0")
