"""Distribution Point (ODP) Domain Entity

A fibre distribution point with a fixed number of customer slots.
Slot counters are only mutated through occupy()/release(), driven by
customer attach, move and detach operations.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, String
from src.domain.base import BaseModel, IdType, UTCDateTime, utc_now
from src.domain.errors import CapacityExceeded


class DistributionPoint(BaseModel, table=True):
    """
    DistributionPoint - Capacity resource customers attach to

    Domain Rules:
    - used_slots + available_slots == total_slots at all times
    - 0 <= used_slots <= total_slots
    - occupy() fails with CapacityExceeded when no slot is available
    - release() clamps to [0, total_slots] so earlier drift never goes negative
    """

    __tablename__ = "distribution_points"
    __table_args__ = (
        CheckConstraint('total_slots >= 0', name='total_slots_non_negative'),
        CheckConstraint('used_slots >= 0 AND used_slots <= total_slots', name='used_slots_in_range'),
        CheckConstraint('available_slots >= 0', name='available_slots_non_negative'),
        Index('ix_distribution_points_area', 'area'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique distribution point identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Distribution point name (e.g., ODP-JKT-01)"
    )

    location: Optional[str] = Field(
        default=None,
        description="Physical location description or coordinates"
    )

    area: Optional[str] = Field(
        default=None,
        description="Coverage area name"
    )

    total_slots: int = Field(
        description="Total number of customer ports"
    )

    used_slots: int = Field(
        default=0,
        description="Ports currently assigned to customers"
    )

    available_slots: int = Field(
        default=0,
        description="Ports still free"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=UTCDateTime,
        description="Creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=UTCDateTime,
        description="Last slot update timestamp"
    )

    def occupy(self) -> None:
        if self.available_slots <= 0:
            raise CapacityExceeded(
                f"Distribution point {self.name} has no available slot",
                reason=f"odp_id={self.id}, total={self.total_slots}, used={self.used_slots}",
            )
        self.used_slots += 1
        self.available_slots -= 1
        self.updated_at = utc_now()

    def release(self) -> None:
        self.used_slots = max(0, self.used_slots - 1)
        self.available_slots = min(self.total_slots, self.available_slots + 1)
        self.updated_at = utc_now()

    def is_consistent(self) -> bool:
        return (
            self.used_slots + self.available_slots == self.total_slots
            and 0 <= self.used_slots <= self.total_slots
        )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "ODP-JKT-01",
                "location": "Jl. Merdeka 10",
                "area": "Jakarta Pusat",
                "total_slots": 16,
                "used_slots": 4,
                "available_slots": 12,
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-01-01T00:00:00Z"
            }
        }
