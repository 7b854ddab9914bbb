"""Data Transfer Objects for Network Use Cases

Pydantic models for slot ledger commands and inventory responses.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.distribution_point import DistributionPoint
from src.domain.router import Router


class AttachCustomerCommandDTO(BaseModel):
    """
    Command DTO for attaching a customer to a distribution point

    Used as input to AttachCustomerToODP use case.
    """

    customer_id: int = Field(..., description="Customer ID")
    odp_id: int = Field(..., description="Distribution point to take a slot from")


class MoveCustomerCommandDTO(BaseModel):
    """
    Command DTO for moving a customer between distribution points

    Used as input to MoveCustomerODP use case. old_odp_id, when given, must
    match the customer's current distribution point.
    """

    customer_id: int = Field(..., description="Customer ID")
    old_odp_id: Optional[int] = Field(default=None, description="Expected current distribution point")
    new_odp_id: int = Field(..., description="Distribution point to move to")


class DetachCustomerCommandDTO(BaseModel):
    customer_id: int = Field(..., description="Customer ID")


class DistributionPointDTO(BaseModel):
    """Distribution point with its slot counters"""

    id: int
    name: str
    location: Optional[str] = None
    area: Optional[str] = None
    total_slots: int
    used_slots: int
    available_slots: int


class SlotAssignmentResponseDTO(BaseModel):
    """
    Response DTO for attach, move and detach

    Slot counters are snapshots taken inside the unit of work.
    """

    customer_id: int
    odp_id: Optional[int] = Field(default=None, description="Distribution point now held (None after detach)")
    released_odp: Optional[DistributionPointDTO] = Field(default=None, description="Distribution point released")
    occupied_odp: Optional[DistributionPointDTO] = Field(default=None, description="Distribution point occupied")


class CreateDistributionPointCommandDTO(BaseModel):
    name: str = Field(..., min_length=1)
    location: Optional[str] = None
    area: Optional[str] = None
    total_slots: int = Field(..., ge=0, description="Number of customer ports")


class CreateRouterCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, description="Router identifier")
    ip_address: str = Field(..., min_length=1)
    api_port: int = Field(default=8728, gt=0)
    username: str = Field(..., min_length=1)
    password: str = Field(default="")
    area: Optional[str] = None


class RouterDTO(BaseModel):
    """Router inventory entry; credentials are never returned"""

    id: int
    name: str
    ip_address: str
    api_port: int
    area: Optional[str] = None
    created_at: datetime


class SlotDiscrepancyDTO(BaseModel):
    """
    A distribution point whose counters disagree with the invariant or with
    the number of customers actually attached
    """

    odp_id: int
    name: str
    total_slots: int
    used_slots: int
    available_slots: int
    attached_customers: int


class SlotReconciliationResultDTO(BaseModel):
    total_odps_checked: int
    discrepancies_found: int
    discrepancies: List[SlotDiscrepancyDTO] = Field(default_factory=list)
    reconciliation_time: datetime
    execution_time_ms: int


def odp_to_dto(odp: DistributionPoint) -> DistributionPointDTO:
    return DistributionPointDTO(
        id=odp.id,
        name=odp.name,
        location=odp.location,
        area=odp.area,
        total_slots=odp.total_slots,
        used_slots=odp.used_slots,
        available_slots=odp.available_slots,
    )


def router_to_dto(router: Router) -> RouterDTO:
    return RouterDTO(
        id=router.id,
        name=router.name,
        ip_address=router.ip_address,
        api_port=router.api_port,
        area=router.area,
        created_at=router.created_at,
    )
