from .unit_of_work import SqlAlchemyUnitOfWork
from .clock import ZonedClock, FixedClock
from .router_control import (
    LoggingRouterControlService,
    MikrotikRouterControlService,
    create_router_control_service,
)
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ZonedClock",
    "FixedClock",
    "LoggingRouterControlService",
    "MikrotikRouterControlService",
    "create_router_control_service",
    "ReportLabPdfService",
]
