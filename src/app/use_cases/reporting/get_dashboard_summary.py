"""GetDashboardSummary Use Case

Aggregates customer, revenue and inventory figures for the operator dashboard.
"""

import logging
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.router_repository import RouterRepository
from src.app.repositories.transaction_repository import TransactionRepository
from src.domain.billing_cycle import cycle_start, round_currency, to_storage
from src.domain.customer import BillingStatus, CustomerStatus, InstallationStatus, ServiceStatus
from .dtos import AreaStatDTO, DashboardSummaryDTO, PackageStatDTO

logger = logging.getLogger(__name__)


class GetDashboardSummary:
    """
    Use Case: Dashboard summary

    Definitions:
    - active: billing_status=lunas and service_status=active
    - suspended: billing_status=suspend or status=inactive
    - unpaid: billing_status=belum_lunas
    - new installation: installation_status=not_installed
    - installed inactive: installed and service_status=inactive
    - ARPU: monthly revenue / active customers, rounded to the rupiah
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        router_repo: RouterRepository,
        transaction_repo: TransactionRepository,
    ):
        self.customer_repo = customer_repo
        self.router_repo = router_repo
        self.transaction_repo = transaction_repo

    async def execute(self, now: datetime) -> Result[DashboardSummaryDTO]:
        try:
            customers = await self.customer_repo.get_all()
            routers = await self.router_repo.get_all()

            month_start = to_storage(cycle_start(now))
            last_week = to_storage(now - timedelta(days=7))

            monthly_revenue = await self.transaction_repo.sum_amount(since=month_start)
            total_revenue = await self.transaction_repo.sum_amount()
            monthly_transactions = await self.transaction_repo.count_since(month_start)
            transactions_last_7_days = await self.transaction_repo.count_since(last_week)

            active = sum(
                1
                for c in customers
                if c.billing_status == BillingStatus.LUNAS and c.service_status == ServiceStatus.ACTIVE
            )
            suspended = sum(
                1
                for c in customers
                if c.billing_status == BillingStatus.SUSPEND or c.status == CustomerStatus.INACTIVE
            )
            unpaid = sum(1 for c in customers if c.billing_status == BillingStatus.BELUM_LUNAS)
            new_installations = sum(
                1 for c in customers if c.installation_status == InstallationStatus.NOT_INSTALLED
            )
            installed_inactive = sum(
                1
                for c in customers
                if c.installation_status == InstallationStatus.INSTALLED
                and c.service_status == ServiceStatus.INACTIVE
            )

            arpu = round_currency(monthly_revenue / active) if active else Decimal("0")

            package_counts = Counter(c.package for c in customers)
            package_revenue = defaultdict(Decimal)
            for c in customers:
                package_revenue[c.package] += Decimal(str(c.package_price))
            package_stats = [
                PackageStatDTO(name=name, count=count, revenue=package_revenue[name])
                for name, count in sorted(package_counts.items())
            ]

            customer_areas = Counter(c.area for c in customers if c.area)
            router_areas = Counter(r.area for r in routers if r.area)
            area_stats = [
                AreaStatDTO(name=area, customers=customer_areas[area], routers=router_areas[area])
                for area in sorted(set(customer_areas) | set(router_areas))
            ]

            return Return.ok(
                DashboardSummaryDTO(
                    total_customers=len(customers),
                    active_customers=active,
                    suspended_customers=suspended,
                    unpaid_customers=unpaid,
                    new_installations=new_installations,
                    installed_inactive=installed_inactive,
                    monthly_revenue=monthly_revenue,
                    monthly_transactions=monthly_transactions,
                    total_revenue=total_revenue,
                    arpu=arpu,
                    total_routers=len(routers),
                    package_stats=package_stats,
                    area_stats=area_stats,
                    new_customers_last_7_days=sum(1 for c in customers if c.created_at >= last_week),
                    transactions_last_7_days=transactions_last_7_days,
                    generated_at=to_storage(now),
                )
            )

        except Exception as e:
            logger.error(f"Dashboard summary failed: {e}")
            return Return.err(
                Error(
                    code="DASHBOARD_SUMMARY_FAILED",
                    message="Failed to build dashboard summary",
                    reason=str(e),
                )
            )
