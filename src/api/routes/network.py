"""Network inventory API Routes

Distribution points (ODP) and routers.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.network_request import CreateOdpRequestSchema, CreateRouterRequestSchema
from src.app.use_cases.network import (
    CreateDistributionPoint,
    GetDistributionPoint,
    ListDistributionPoints,
    CreateRouter,
    ListRouters,
    ReconcileSlots,
    CreateDistributionPointCommandDTO,
    CreateRouterCommandDTO,
    DistributionPointDTO,
    RouterDTO,
    SlotReconciliationResultDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDistributionPointRepository,
    SqlAlchemyRouterRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(tags=["Network"])


@router.get("/odps", response_model=List[DistributionPointDTO])
async def list_odps(session: AsyncSession = Depends(get_session)):
    result = await ListDistributionPoints(SqlAlchemyDistributionPointRepository(session)).execute()
    return result.value


@router.post("/odps", response_model=DistributionPointDTO, status_code=status.HTTP_201_CREATED)
async def create_odp(request: CreateOdpRequestSchema, session: AsyncSession = Depends(get_session)):
    """Register a distribution point; it starts with every slot available."""
    use_case = CreateDistributionPoint(
        uow=SqlAlchemyUnitOfWork(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
    )
    result = await use_case.execute(CreateDistributionPointCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/odps/reconciliation", response_model=SlotReconciliationResultDTO)
async def reconcile_odp_slots(session: AsyncSession = Depends(get_session)):
    """Report distribution points whose slot counters disagree with attached customers."""
    use_case = ReconcileSlots(
        odp_repo=SqlAlchemyDistributionPointRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/odps/{odp_id}", response_model=DistributionPointDTO)
async def get_odp(odp_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetDistributionPoint(SqlAlchemyDistributionPointRepository(session)).execute(odp_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/routers", response_model=List[RouterDTO])
async def list_routers(session: AsyncSession = Depends(get_session)):
    result = await ListRouters(SqlAlchemyRouterRepository(session)).execute()
    return result.value


@router.post("/routers", response_model=RouterDTO, status_code=status.HTTP_201_CREATED)
async def create_router(request: CreateRouterRequestSchema, session: AsyncSession = Depends(get_session)):
    use_case = CreateRouter(
        uow=SqlAlchemyUnitOfWork(session),
        router_repo=SqlAlchemyRouterRepository(session),
    )
    result = await use_case.execute(CreateRouterCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value
