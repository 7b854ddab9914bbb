"""Suspension Action Domain Entity

Records the intent to disable a customer's router credential. It is written
in the same commit as the customer's suspend status, then confirmed once the
router-control call succeeds or left for retry when it fails.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String, Text
from src.domain.base import BaseModel, IdType, UTCDateTime, utc_now


class SuspensionActionStatus(str, Enum):
    PENDING = "pending"              # Status committed, router not yet called
    CONFIRMED = "confirmed"          # Router credential disabled
    RETRY_PENDING = "retry_pending"  # Router call failed, waiting for retry


class SuspensionAction(BaseModel, table=True):
    __tablename__ = "suspension_actions"
    __table_args__ = (
        Index('ix_suspension_actions_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
    )

    router_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("routers.id", ondelete="SET NULL"), nullable=True),
    )

    secret_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    status: SuspensionActionStatus = Field(default=SuspensionActionStatus.PENDING)

    attempts: int = Field(default=0)

    last_error: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def confirm(self) -> None:
        self.status = SuspensionActionStatus.CONFIRMED
        self.last_error = None
        self.updated_at = utc_now()

    def schedule_retry(self, error: str) -> None:
        self.status = SuspensionActionStatus.RETRY_PENDING
        self.last_error = error
        self.updated_at = utc_now()
