"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field
from src.domain.customer import PeriodUnit
from src.domain.suspension_action import SuspensionAction, SuspensionActionStatus
from src.domain.transaction import Transaction, TransactionType, TransactionStatus


class CalculateProrataCommandDTO(BaseModel):
    """
    Command DTO for previewing a pro-rata charge

    Used as input to CalculateProrata use case.
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


class ProRataResponseDTO(BaseModel):
    is_pro_rata_applied: bool
    pro_rata_amount: Decimal
    remaining_days: int
    days_in_month: int


class BillDTO(BaseModel):
    """
    Response DTO for a bill

    breakdown mirrors the snapshot stored with the bill.
    """

    id: int
    customer_id: int
    type: TransactionType
    amount: Decimal
    description: str
    status: TransactionStatus
    billing_period: str
    due_date: datetime
    breakdown: Dict[str, Any]
    created_at: datetime


class CustomerFailureDTO(BaseModel):
    """A customer whose unit of work failed during a bulk run"""

    customer_id: int
    code: str
    message: str


class MonthlyBillingResultDTO(BaseModel):
    """
    Result DTO for a monthly billing run

    Per-customer failures are reported here instead of failing the run.
    """

    total_customers: int
    bills_created: int
    skipped: int
    failed: int
    bills: List[BillDTO] = Field(default_factory=list)
    failures: List[CustomerFailureDTO] = Field(default_factory=list)
    message: str
    execution_time_ms: int = 0


class SuspensionActionDTO(BaseModel):
    id: int
    customer_id: int
    router_id: Optional[int] = None
    secret_name: Optional[str] = None
    status: SuspensionActionStatus
    attempts: int
    last_error: Optional[str] = None


class SuspendedCustomerDTO(BaseModel):
    """
    A customer whose billing status was set to suspend

    router_error is set when the router-control call was exhausted; the
    suspension itself is committed and the action is left for retry.
    """

    customer_id: int
    customer_number: str
    name: str
    action: SuspensionActionDTO
    router_error: Optional[CustomerFailureDTO] = None


class SuspendOverdueResultDTO(BaseModel):
    is_suspension_day: bool
    message: str
    suspended: List[SuspendedCustomerDTO] = Field(default_factory=list)
    failures: List[CustomerFailureDTO] = Field(default_factory=list)


class SuspensionRetryResultDTO(BaseModel):
    total_actions: int
    confirmed: int
    still_pending: int
    failed: int


class ListBillsResponseDTO(BaseModel):
    bills: List[BillDTO]
    limit: int
    offset: int


class BillPdfDTO(BaseModel):
    bill_id: int
    filename: str
    content: bytes


def bill_to_dto(bill: Transaction) -> BillDTO:
    return BillDTO(
        id=bill.id,
        customer_id=bill.customer_id,
        type=bill.type,
        amount=bill.amount,
        description=bill.description,
        status=bill.status,
        billing_period=bill.billing_period,
        due_date=bill.due_date,
        breakdown=bill.breakdown or {},
        created_at=bill.created_at,
    )


def action_to_dto(action: SuspensionAction) -> SuspensionActionDTO:
    return SuspensionActionDTO(
        id=action.id,
        customer_id=action.customer_id,
        router_id=action.router_id,
        secret_name=action.secret_name,
        status=action.status,
        attempts=action.attempts,
        last_error=action.last_error,
    )
