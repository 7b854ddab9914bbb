"""Network use cases: slot ledger and inventory"""
from .slot_ledger import SlotLedger, SlotChange
from .attach_customer import AttachCustomerToODP
from .move_customer import MoveCustomerODP
from .detach_customer import DetachCustomerFromODP
from .reconcile_slots import ReconcileSlots
from .distribution_points import CreateDistributionPoint, GetDistributionPoint, ListDistributionPoints
from .routers import CreateRouter, ListRouters
from .dtos import (
    AttachCustomerCommandDTO,
    MoveCustomerCommandDTO,
    DetachCustomerCommandDTO,
    CreateDistributionPointCommandDTO,
    CreateRouterCommandDTO,
    DistributionPointDTO,
    RouterDTO,
    SlotAssignmentResponseDTO,
    SlotDiscrepancyDTO,
    SlotReconciliationResultDTO,
)

__all__ = [
    "SlotLedger",
    "SlotChange",
    "AttachCustomerToODP",
    "MoveCustomerODP",
    "DetachCustomerFromODP",
    "ReconcileSlots",
    "CreateDistributionPoint",
    "GetDistributionPoint",
    "ListDistributionPoints",
    "CreateRouter",
    "ListRouters",
    "AttachCustomerCommandDTO",
    "MoveCustomerCommandDTO",
    "DetachCustomerCommandDTO",
    "CreateDistributionPointCommandDTO",
    "CreateRouterCommandDTO",
    "DistributionPointDTO",
    "RouterDTO",
    "SlotAssignmentResponseDTO",
    "SlotDiscrepancyDTO",
    "SlotReconciliationResultDTO",
]
