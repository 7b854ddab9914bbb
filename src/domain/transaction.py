"""Transaction Domain Entity

Immutable billing record. A bill is created once per customer per
calendar month; afterwards only payment changes its status.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, JSON, Numeric, String, UniqueConstraint
from src.domain.base import BaseModel, IdType, UTCDateTime, utc_now


class TransactionType(str, Enum):
    """Transaction types"""
    BILL = "bill"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class Transaction(BaseModel, table=True):
    """
    Transaction - Monthly bill for a customer

    Domain Rules:
    - At most one BILL per customer per calendar month, enforced by the
      unique (customer_id, type, billing_period) constraint
    - amount is never negative
    - breakdown is a snapshot of how amount was computed:
      {"package": {"name", "price", "note"?}, "addons": [...],
       "one_time_items": [...], "discount"}
    """

    __tablename__ = "transactions"
    __table_args__ = (
        Index('ix_transactions_customer_type_created', 'customer_id', 'type', 'created_at'),
        Index('ix_transactions_status_due_date', 'status', 'due_date'),
        UniqueConstraint('customer_id', 'type', 'billing_period', name='uq_transactions_customer_type_period'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Customer"
    )

    type: TransactionType = Field(
        default=TransactionType.BILL,
        description="Transaction type"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Billed amount (>= 0)"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Human readable description (e.g., Tagihan bulanan Januari 2025)"
    )

    status: TransactionStatus = Field(
        default=TransactionStatus.PENDING,
        description="Payment status (pending, paid)"
    )

    billing_period: str = Field(
        sa_column=Column(String(7), nullable=False),
        description="Civil month the bill covers (YYYY-MM)"
    )

    due_date: datetime = Field(
        sa_type=UTCDateTime,
        description="Payment due date (UTC)"
    )

    breakdown: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Snapshot of package, addons, one-time items and discount"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=UTCDateTime,
        description="Bill creation timestamp (UTC)"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 10,
                "customer_id": 1,
                "type": "bill",
                "amount": "164516.00",
                "description": "Tagihan bulanan Januari 2025",
                "status": "pending",
                "billing_period": "2025-01",
                "due_date": "2025-01-04T17:00:00Z",
                "breakdown": {
                    "package": {"name": "Home 20 Mbps", "price": 164516.0, "note": "Prorata 17/31 hari"},
                    "addons": [],
                    "one_time_items": [],
                    "discount": 0.0,
                },
                "created_at": "2025-01-15T03:00:00Z"
            }
        }
