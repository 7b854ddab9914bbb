from .unit_of_work import UnitOfWork
from .clock import Clock
from .router_control import RouterControlService
from .pdf_service import PdfService

__all__ = [
    "UnitOfWork",
    "Clock",
    "RouterControlService",
    "PdfService",
]
