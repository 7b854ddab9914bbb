"""Dashboard API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.clock import Clock
from src.app.use_cases.reporting import GetDashboardSummary, DashboardSummaryDTO
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyRouterRepository,
    SqlAlchemyTransactionRepository,
)
from src.depends import get_session, get_clock
from src.api.error import ClientError

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummaryDTO)
async def dashboard_summary(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    use_case = GetDashboardSummary(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyRouterRepository(session),
        SqlAlchemyTransactionRepository(session),
    )
    result = await use_case.execute(clock.now())

    if result.is_err():
        raise ClientError(result.error, status_code=500)

    return result.value
