"""Request schemas for Customer API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.customer import CustomerStatus, InstallationStatus, PeriodUnit, ServiceStatus


class CreateCustomerRequestSchema(BaseModel):
    """
    Request schema for creating a customer

    Used for POST /customers endpoint.
    """

    name: str = Field(..., min_length=1, max_length=150, description="Customer full name")
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = None
    area: Optional[str] = Field(default=None, description="Coverage area name")
    package: str = Field(..., min_length=1, description="Package name")
    package_price: Decimal = Field(..., ge=0, description="Monthly package price")
    discount: Decimal = Field(default=Decimal("0"), ge=0, description="Flat discount per bill")
    active_date: Optional[date] = Field(default=None, description="Service activation date")
    active_period: int = Field(default=1, ge=1)
    active_period_unit: PeriodUnit = Field(default=PeriodUnit.MONTHS)
    status: CustomerStatus = Field(default=CustomerStatus.ACTIVE)
    service_status: ServiceStatus = Field(default=ServiceStatus.ACTIVE)
    installation_status: InstallationStatus = Field(default=InstallationStatus.NOT_INSTALLED)
    odp_id: Optional[int] = Field(default=None, description="Distribution point to take a slot from")
    router_id: Optional[int] = None
    ppp_secret: Optional[str] = Field(default=None, max_length=100, description="PPP secret name on the router")

    @field_validator("name", "package")
    @classmethod
    def strip_required_text(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Budi Santoso",
                "phone": "081234567890",
                "address": "Jl. Kenanga 12",
                "area": "Cibinong",
                "package": "Home 20 Mbps",
                "package_price": "300000",
                "active_date": "2025-01-15",
                "odp_id": 1,
                "router_id": 1,
                "ppp_secret": "budi-cbn",
            }
        }


class UpdateCustomerRequestSchema(BaseModel):
    """
    Request schema for updating a customer

    Used for PUT /customers/{id}. Omitted fields are left unchanged; an
    explicit "odp_id": null releases the customer's slot.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    phone: Optional[str] = Field(default=None, max_length=30)
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
    ppp_secret: Optional[str] = Field(default=None, max_length=100)
