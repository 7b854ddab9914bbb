"""Billing API Routes

FastAPI routes for pro-rata preview, monthly bill generation, overdue
suspension and bill documents.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.billing_request import CalculateProrataRequestSchema
from src.app.services.clock import Clock
from src.app.services.router_control import RouterControlService
from src.app.use_cases.billing import (
    CalculateProrata,
    GenerateMonthlyBills,
    SuspendOverdue,
    RetrySuspensionActions,
    ListCustomerBills,
    GenerateBillPdf,
    CalculateProrataCommandDTO,
    ProRataResponseDTO,
    MonthlyBillingResultDTO,
    SuspendOverdueResultDTO,
    SuspensionRetryResultDTO,
    ListBillsResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemySuspensionActionRepository,
    SqlAlchemyTransactionRepository,
)
from src.adapter.services.pdf_service import ReportLabPdfService
from src.depends import (
    get_session,
    get_session_factory,
    get_clock,
    get_router_control,
    build_credential_disabler,
    bill_scope,
    suspend_scope,
    retry_scope,
)
from src.api.error import ClientError

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.post("/calculate-prorata", response_model=ProRataResponseDTO)
async def calculate_prorata(request: CalculateProrataRequestSchema):
    """
    Preview the first-month charge for a mid-month activation.

    **Example request:**
    ```json
    {"active_date": "2025-01-15", "package_price": "300000"}
    ```

    **Example response:**
    ```json
    {"is_pro_rata_applied": true, "pro_rata_amount": "164516", "remaining_days": 17, "days_in_month": 31}
    ```
    """
    result = await CalculateProrata().execute(CalculateProrataCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/generate-monthly-bills", response_model=MonthlyBillingResultDTO)
async def generate_monthly_bills(
    session: AsyncSession = Depends(get_session),
    session_factory=Depends(get_session_factory),
    clock: Clock = Depends(get_clock),
):
    """
    Generate this month's bill for every active customer.

    Each customer is billed in its own transaction. Customers already billed
    this month are skipped, so the endpoint is safe to call repeatedly.
    Per-customer failures are listed in `failures` and do not fail the run.
    """
    use_case = GenerateMonthlyBills(
        customer_repo=SqlAlchemyCustomerRepository(session),
        bill_scope=bill_scope(session_factory),
    )
    result = await use_case.execute(clock.now())

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value


@router.post("/suspend-overdue", response_model=SuspendOverdueResultDTO)
async def suspend_overdue(
    session: AsyncSession = Depends(get_session),
    session_factory=Depends(get_session_factory),
    clock: Clock = Depends(get_clock),
    router_control: RouterControlService = Depends(get_router_control),
):
    """
    Suspend customers holding a pending bill past its due date.

    Only runs on the configured suspension day; on any other day the response
    is `{"is_suspension_day": false, "message": "Not suspension day"}`.
    Router failures are reported per customer with EXTERNAL_SERVICE_FAILURE
    while the suspension itself stays committed and is retried later.
    """
    use_case = SuspendOverdue(
        customer_repo=SqlAlchemyCustomerRepository(session),
        suspend_scope=suspend_scope(session_factory, build_credential_disabler(router_control)),
        suspension_day=ApplicationConfig.SUSPENSION_DAY,
    )
    result = await use_case.execute(clock.now())

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value


@router.post("/suspension-actions/retry", response_model=SuspensionRetryResultDTO)
async def retry_suspension_actions(
    session: AsyncSession = Depends(get_session),
    session_factory=Depends(get_session_factory),
    clock: Clock = Depends(get_clock),
    router_control: RouterControlService = Depends(get_router_control),
):
    """Re-drive router credential disables that have not been confirmed."""
    use_case = RetrySuspensionActions(
        action_repo=SqlAlchemySuspensionActionRepository(session),
        retry_scope=retry_scope(session_factory, build_credential_disabler(router_control)),
    )
    result = await use_case.execute(clock.now())

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value


@router.get("/customers/{customer_id}/bills", response_model=ListBillsResponseDTO)
async def list_customer_bills(
    customer_id: int,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    use_case = ListCustomerBills(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyTransactionRepository(session),
    )
    result = await use_case.execute(customer_id, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/bills/{bill_id}/pdf",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        404: {
            "description": "Bill not found",
            "content": {
                "application/json": {
                    "example": {"error": {"code": "NOT_FOUND", "message": "Bill 123 not found"}}
                }
            },
        },
    },
)
async def download_bill_pdf(bill_id: int, session: AsyncSession = Depends(get_session)):
    """Download a bill with its breakdown as a PDF file."""
    use_case = GenerateBillPdf(
        transaction_repo=SqlAlchemyTransactionRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        pdf_service=ReportLabPdfService(),
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )
    result = await use_case.execute(bill_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={result.value.filename}"},
    )
