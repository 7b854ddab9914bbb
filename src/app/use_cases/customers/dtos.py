"""Data Transfer Objects for Customer Use Cases

Pydantic models for customer commands and the customer read model.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.customer import (
    Customer,
    CustomerStatus,
    BillingStatus,
    ServiceStatus,
    InstallationStatus,
    CredentialStatus,
    PeriodUnit,
)
from src.domain.distribution_point import DistributionPoint
from src.domain.router import Router
from src.app.use_cases.network.dtos import DistributionPointDTO, odp_to_dto


class CreateCustomerCommandDTO(BaseModel):
    """
    Command DTO for creating a customer

    Used as input to CreateCustomer use case. When odp_id is given a slot is
    taken on that distribution point in the same transaction.
    """

    name: str = Field(..., min_length=1, max_length=150)
    phone: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    package: str = Field(..., min_length=1, description="Package name")
    package_price: Decimal = Field(..., ge=0, description="Monthly package price")
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    active_date: Optional[date] = Field(default=None, description="Service activation date")
    active_period: int = Field(default=1, ge=1)
    active_period_unit: PeriodUnit = Field(default=PeriodUnit.MONTHS)
    status: CustomerStatus = Field(default=CustomerStatus.ACTIVE)
    service_status: ServiceStatus = Field(default=ServiceStatus.ACTIVE)
    installation_status: InstallationStatus = Field(default=InstallationStatus.NOT_INSTALLED)
    odp_id: Optional[int] = None
    router_id: Optional[int] = None
    ppp_secret: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Budi Santoso",
                "phone": "081234567890",
                "area": "Cibinong",
                "package": "Home 20 Mbps",
                "package_price": "300000",
                "active_date": "2025-01-15",
                "odp_id": 1,
                "router_id": 1,
                "ppp_secret": "budi-cbn",
            }
        }


class UpdateCustomerCommandDTO(BaseModel):
    """
    Command DTO for updating a customer

    Only fields explicitly set are applied. Setting odp_id moves the
    customer's slot; setting it to None releases it.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    phone: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    package: Optional[str] = Field(default=None, min_length=1)
    package_price: Optional[Decimal] = Field(default=None, ge=0)
    discount: Optional[Decimal] = Field(default=None, ge=0)
    active_date: Optional[date] = None
    active_period: Optional[int] = Field(default=None, ge=1)
    active_period_unit: Optional[PeriodUnit] = None
    status: Optional[CustomerStatus] = None
    service_status: Optional[ServiceStatus] = None
    installation_status: Optional[InstallationStatus] = None
    odp_id: Optional[int] = None
    router_id: Optional[int] = None
    ppp_secret: Optional[str] = None


class RouterSummaryDTO(BaseModel):
    id: int
    name: str
    ip_address: str
    area: Optional[str] = None


class CustomerDTO(BaseModel):
    """Customer read model with distribution point and router summaries"""

    id: int
    customer_number: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    package: str
    package_price: Decimal
    discount: Decimal
    active_date: Optional[date] = None
    active_period: int
    active_period_unit: PeriodUnit
    is_pro_rata_applied: bool
    pro_rata_amount: Optional[Decimal] = None
    status: CustomerStatus
    billing_status: BillingStatus
    service_status: ServiceStatus
    installation_status: InstallationStatus
    credential_status: CredentialStatus
    odp_id: Optional[int] = None
    router_id: Optional[int] = None
    ppp_secret: Optional[str] = None
    last_billing_date: Optional[datetime] = None
    next_billing_date: Optional[datetime] = None
    last_suspend_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    odp: Optional[DistributionPointDTO] = None
    router: Optional[RouterSummaryDTO] = None


class DeleteCustomerResponseDTO(BaseModel):
    customer_id: int
    released_odp_id: Optional[int] = None
    message: str


def customer_to_dto(
    customer: Customer,
    odp: Optional[DistributionPoint] = None,
    router: Optional[Router] = None,
) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        customer_number=customer.customer_number,
        name=customer.name,
        phone=customer.phone,
        address=customer.address,
        area=customer.area,
        package=customer.package,
        package_price=customer.package_price,
        discount=customer.discount,
        active_date=customer.active_date,
        active_period=customer.active_period,
        active_period_unit=customer.active_period_unit,
        is_pro_rata_applied=customer.is_pro_rata_applied,
        pro_rata_amount=customer.pro_rata_amount,
        status=customer.status,
        billing_status=customer.billing_status,
        service_status=customer.service_status,
        installation_status=customer.installation_status,
        credential_status=customer.credential_status,
        odp_id=customer.odp_id,
        router_id=customer.router_id,
        ppp_secret=customer.ppp_secret,
        last_billing_date=customer.last_billing_date,
        next_billing_date=customer.next_billing_date,
        last_suspend_date=customer.last_suspend_date,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
        odp=odp_to_dto(odp) if odp else None,
        router=RouterSummaryDTO(
            id=router.id,
            name=router.name,
            ip_address=router.ip_address,
            area=router.area,
        ) if router else None,
    )
