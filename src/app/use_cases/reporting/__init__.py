"""Reporting use cases"""
from .get_dashboard_summary import GetDashboardSummary
from .dtos import DashboardSummaryDTO, PackageStatDTO, AreaStatDTO

__all__ = [
    "GetDashboardSummary",
    "DashboardSummaryDTO",
    "PackageStatDTO",
    "AreaStatDTO",
]
