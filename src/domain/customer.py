"""Customer Domain Entity

Subscription record for an ISP customer: package, billing state,
installation state, distribution point slot and router credential.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Date
from src.domain.base import BaseModel, IdType, UTCDateTime, utc_now
from src.domain.errors import ValidationError


class CustomerStatus(str, Enum):
    """Customer record status"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class BillingStatus(str, Enum):
    """Billing status types"""
    LUNAS = "lunas"              # Paid up
    BELUM_LUNAS = "belum_lunas"  # Unpaid bill outstanding
    SUSPEND = "suspend"          # Suspended for an overdue bill


class ServiceStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class InstallationStatus(str, Enum):
    NOT_INSTALLED = "not_installed"
    INSTALLED = "installed"


class CredentialStatus(str, Enum):
    """State of the customer's PPP secret on the router"""
    ENABLED = "enabled"
    DISABLED = "disabled"


class PeriodUnit(str, Enum):
    MONTHS = "months"
    DAYS = "days"


# lunas -> belum_lunas -> suspend -> lunas; payment (-> lunas) is handled elsewhere
BILLING_TRANSITIONS = {
    BillingStatus.LUNAS: {BillingStatus.BELUM_LUNAS},
    BillingStatus.BELUM_LUNAS: {BillingStatus.SUSPEND, BillingStatus.LUNAS},
    BillingStatus.SUSPEND: {BillingStatus.LUNAS},
}


class Customer(BaseModel, table=True):
    """
    Customer - ISP subscription record

    Domain Rules:
    - customer_number is sequential and human readable (LTS0001)
    - odp_id, when set, references a distribution point whose slot is held
    - Pro-rata is applied at most once per customer lifetime
    - Billing status transitions follow BILLING_TRANSITIONS
    """

    __tablename__ = "customers"
    __table_args__ = (
        Index('ix_customers_status', 'status', 'service_status'),
        Index('ix_customers_billing_status', 'billing_status'),
        Index('ix_customers_odp_id', 'odp_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique customer identifier (auto-increment)"
    )

    customer_number: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Sequential customer code (e.g., LTS0001)"
    )

    name: str = Field(
        sa_column=Column(String(150), nullable=False),
        description="Customer full name"
    )

    phone: Optional[str] = Field(default=None)

    address: Optional[str] = Field(default=None)

    area: Optional[str] = Field(
        default=None,
        description="Coverage area name"
    )

    package: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Subscribed package name"
    )

    package_price: Decimal = Field(
        sa_column=Column(Numeric(14, 2), nullable=False),
        description="Monthly package price"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(14, 2), nullable=False, default=0),
        description="Flat discount subtracted from every bill"
    )

    active_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Service activation date"
    )

    active_period: int = Field(
        default=1,
        description="Subscription period length"
    )

    active_period_unit: PeriodUnit = Field(
        default=PeriodUnit.MONTHS,
        description="Subscription period unit"
    )

    is_pro_rata_applied: bool = Field(
        default=False,
        description="True once the first-month pro-rata charge has been billed"
    )

    pro_rata_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(14, 2), nullable=True),
        description="Pro-rated first month charge"
    )

    status: CustomerStatus = Field(default=CustomerStatus.ACTIVE)

    billing_status: BillingStatus = Field(default=BillingStatus.LUNAS)

    service_status: ServiceStatus = Field(default=ServiceStatus.ACTIVE)

    installation_status: InstallationStatus = Field(default=InstallationStatus.NOT_INSTALLED)

    odp_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("distribution_points.id", ondelete="SET NULL"), nullable=True),
        description="Distribution point holding this customer's slot"
    )

    router_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("routers.id", ondelete="SET NULL"), nullable=True),
        description="Router serving this customer"
    )

    ppp_secret: Optional[str] = Field(
        default=None,
        description="PPP secret name on the router"
    )

    credential_status: CredentialStatus = Field(default=CredentialStatus.ENABLED)

    last_billing_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)

    next_billing_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)

    last_suspend_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=UTCDateTime,
        description="Customer creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=UTCDateTime,
        description="Last update timestamp"
    )

    def can_transition_to(self, status: BillingStatus) -> bool:
        return status in BILLING_TRANSITIONS.get(self.billing_status, set())

    def transition_billing_status(self, status: BillingStatus) -> None:
        if status == self.billing_status:
            return
        if not self.can_transition_to(status):
            raise ValidationError(
                f"Cannot change billing status from {self.billing_status.value} to {status.value}",
                reason=f"customer_id={self.id}",
            )
        self.billing_status = status
        self.updated_at = utc_now()

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "customer_number": "LTS0001",
                "name": "Budi Santoso",
                "package": "Home 20 Mbps",
                "package_price": "300000.00",
                "discount": "0.00",
                "active_date": "2025-01-15",
                "active_period": 1,
                "active_period_unit": "months",
                "billing_status": "lunas",
                "service_status": "active",
                "odp_id": 3,
            }
        }
