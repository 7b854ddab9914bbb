"""Router Domain Entity

Network inventory record for a MikroTik router serving an area.
Holds the API credentials the router-control adapter connects with.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, IdType, UTCDateTime, utc_now


class Router(BaseModel, table=True):
    __tablename__ = "routers"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique router identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
        description="Router identifier used by the router-control API"
    )

    ip_address: str = Field(
        description="Management IP address"
    )

    api_port: int = Field(
        default=8728,
        description="RouterOS API port"
    )

    username: str = Field(
        description="RouterOS API username"
    )

    password: str = Field(
        default="",
        description="RouterOS API password"
    )

    area: Optional[str] = Field(
        default=None,
        description="Coverage area served by the router"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=UTCDateTime,
        description="Creation timestamp"
    )
