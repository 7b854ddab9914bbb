"""Request schemas for slot ledger and network inventory endpoints"""

from typing import Optional
from pydantic import BaseModel, Field


class AttachOdpRequestSchema(BaseModel):
    """Used for POST /customers/{id}/odp"""

    odp_id: int = Field(..., gt=0, description="Distribution point to take a slot from")


class MoveOdpRequestSchema(BaseModel):
    """
    Used for PUT /customers/{id}/odp

    old_odp_id guards against moving a customer whose attachment changed
    since the caller read it.
    """

    old_odp_id: Optional[int] = Field(default=None, gt=0)
    new_odp_id: int = Field(..., gt=0)


class CreateOdpRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    location: Optional[str] = None
    area: Optional[str] = None
    total_slots: int = Field(..., ge=0, le=1024, description="Number of customer ports")

    class Config:
        json_schema_extra = {
            "example": {"name": "ODP-CBN-01", "location": "Tiang 14", "area": "Cibinong", "total_slots": 16}
        }


class CreateRouterRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    ip_address: str = Field(..., min_length=1, max_length=64)
    api_port: int = Field(default=8728, gt=0, lt=65536)
    username: str = Field(..., min_length=1)
    password: str = Field(default="")
    area: Optional[str] = None
