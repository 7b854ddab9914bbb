"""Data Transfer Objects for Reporting Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class PackageStatDTO(BaseModel):
    name: str
    count: int
    revenue: Decimal = Field(..., description="Sum of monthly package prices")


class AreaStatDTO(BaseModel):
    name: Optional[str] = None
    customers: int
    routers: int


class DashboardSummaryDTO(BaseModel):
    """
    Operator dashboard figures

    Revenue figures are billed amounts; monthly figures cover the current
    civil month.
    """

    total_customers: int
    active_customers: int
    suspended_customers: int
    unpaid_customers: int
    new_installations: int
    installed_inactive: int
    monthly_revenue: Decimal
    monthly_transactions: int
    total_revenue: Decimal
    arpu: Decimal
    total_routers: int
    package_stats: List[PackageStatDTO] = Field(default_factory=list)
    area_stats: List[AreaStatDTO] = Field(default_factory=list)
    new_customers_last_7_days: int
    transactions_last_7_days: int
    generated_at: datetime
