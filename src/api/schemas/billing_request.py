"""Request schemas for Billing API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.addon_item import AddonItemType
from src.domain.customer import PeriodUnit


class CalculateProrataRequestSchema(BaseModel):
    """
    Request schema for previewing a pro-rata charge

    Used for POST /billing/calculate-prorata endpoint.
    """

    active_date: date = Field(..., description="Service activation date")
    package_price: Decimal = Field(..., ge=0, description="Monthly package price")
    active_period: int = Field(default=1, ge=1)
    active_period_unit: str = Field(default=PeriodUnit.MONTHS.value)

    class Config:
        json_schema_extra = {
            "example": {
                "active_date": "2025-01-15",
                "package_price": "300000",
                "active_period": 1,
                "active_period_unit": "months",
            }
        }


class CreateAddonRequestSchema(BaseModel):
    """
    Request schema for adding a line item

    Used for POST /billing/customers/{id}/addons. Quantity and price are
    range-checked by the use case and rejected with VALIDATION_ERROR.
    """

    item_name: str = Field(..., min_length=1, max_length=150)
    item_type: AddonItemType = Field(..., description="monthly or one_time")
    price: Decimal = Field(..., description="Unit price")
    quantity: int = Field(default=1, description="Number of units")
    description: Optional[str] = None

    @field_validator("item_name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Item name must not be blank")
        return v


class UpdateAddonRequestSchema(BaseModel):
    item_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    item_type: Optional[AddonItemType] = None
    price: Optional[Decimal] = None
    quantity: Optional[int] = None
    description: Optional[str] = None
