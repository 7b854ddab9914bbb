"""Addon Item Domain Entity

Billable line item attached to a customer on top of the package price.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType, UTCDateTime, utc_now


class AddonItemType(str, Enum):
    """Addon billing types"""
    MONTHLY = "monthly"      # Billed every cycle
    ONE_TIME = "one_time"    # Billed once, then marked paid


class AddonLifecycle(str, Enum):
    """Addon lifecycle states (deactivation is a soft delete)"""
    ACTIVE = "active"
    DEACTIVATED = "deactivated"


class AddonItem(BaseModel, table=True):
    """
    AddonItem - Extra charge on a customer's bill

    Domain Rules:
    - MONTHLY items are added to every bill while ACTIVE
    - ONE_TIME items are added to the first bill after creation, then is_paid=True
    - DEACTIVATED items are never listed nor billed
    - quantity >= 1, price >= 0
    """

    __tablename__ = "addon_items"
    __table_args__ = (
        CheckConstraint('quantity >= 1', name='quantity_positive'),
        CheckConstraint('price >= 0', name='price_non_negative'),
        Index('ix_addon_items_customer_lifecycle', 'customer_id', 'lifecycle'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique addon identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Customer"
    )

    item_name: str = Field(
        sa_column=Column(String(150), nullable=False),
        description="Line item name shown on the bill"
    )

    item_type: AddonItemType = Field(
        description="Billing type (monthly, one_time)"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Unit price"
    )

    quantity: int = Field(
        default=1,
        description="Number of units"
    )

    description: Optional[str] = Field(default=None)

    is_paid: bool = Field(
        default=False,
        description="True once a one-time item has been billed"
    )

    lifecycle: AddonLifecycle = Field(
        default=AddonLifecycle.ACTIVE,
        description="Lifecycle state (active, deactivated)"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    @property
    def is_active(self) -> bool:
        return self.lifecycle == AddonLifecycle.ACTIVE

    @property
    def total(self) -> Decimal:
        return Decimal(self.price) * self.quantity

    def is_billable(self) -> bool:
        if not self.is_active:
            return False
        if self.item_type == AddonItemType.ONE_TIME:
            return not self.is_paid
        return True

    def deactivate(self) -> None:
        self.lifecycle = AddonLifecycle.DEACTIVATED
        self.updated_at = utc_now()

    def mark_billed(self) -> None:
        if self.item_type == AddonItemType.ONE_TIME:
            self.is_paid = True
            self.updated_at = utc_now()
