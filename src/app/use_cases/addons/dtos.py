"""Data Transfer Objects for Addon Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.addon_item import AddonItem, AddonItemType, AddonLifecycle


class CreateAddonCommandDTO(BaseModel):
    """
    Command DTO for adding a line item to a customer's bills

    Quantity and price are checked by the use case (VALIDATION_ERROR).
    """

    item_name: str = Field(..., min_length=1, max_length=150)
    item_type: AddonItemType = Field(..., description="monthly or one_time")
    price: Decimal = Field(..., description="Unit price (>= 0)")
    quantity: int = Field(default=1, description="Number of units (>= 1)")
    description: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "item_name": "Static IP",
                "item_type": "monthly",
                "price": "50000",
                "quantity": 1,
            }
        }


class UpdateAddonCommandDTO(BaseModel):
    item_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    item_type: Optional[AddonItemType] = None
    price: Optional[Decimal] = None
    quantity: Optional[int] = None
    description: Optional[str] = None


class AddonDTO(BaseModel):
    id: int
    customer_id: int
    item_name: str
    item_type: AddonItemType
    price: Decimal
    quantity: int
    total: Decimal
    description: Optional[str] = None
    is_paid: bool
    lifecycle: AddonLifecycle
    created_at: datetime
    updated_at: datetime


def addon_to_dto(addon: AddonItem) -> AddonDTO:
    return AddonDTO(
        id=addon.id,
        customer_id=addon.customer_id,
        item_name=addon.item_name,
        item_type=addon.item_type,
        price=addon.price,
        quantity=addon.quantity,
        total=addon.total,
        description=addon.description,
        is_paid=addon.is_paid,
        lifecycle=addon.lifecycle,
        created_at=addon.created_at,
        updated_at=addon.updated_at,
    )
