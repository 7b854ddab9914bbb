"""Customer API Routes

FastAPI routes for the customer lifecycle and its distribution point slot.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.customer_request import CreateCustomerRequestSchema, UpdateCustomerRequestSchema
from src.api.schemas.network_request import AttachOdpRequestSchema, MoveOdpRequestSchema
from src.app.use_cases.customers import (
    CreateCustomer,
    UpdateCustomer,
    DeleteCustomer,
    GetCustomer,
    ListCustomers,
    CreateCustomerCommandDTO,
    UpdateCustomerCommandDTO,
    CustomerDTO,
    DeleteCustomerResponseDTO,
)
from src.app.use_cases.network import (
    AttachCustomerToODP,
    MoveCustomerODP,
    DetachCustomerFromODP,
    AttachCustomerCommandDTO,
    MoveCustomerCommandDTO,
    DetachCustomerCommandDTO,
    SlotAssignmentResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDistributionPointRepository,
    SqlAlchemyRouterRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/customers", tags=["Customers"])

SLOT_ERROR_RESPONSES = {
    404: {
        "description": "Customer or distribution point not found",
        "content": {
            "application/json": {
                "example": {"error": {"code": "NOT_FOUND", "message": "Distribution point 7 not found"}}
            }
        },
    },
    409: {
        "description": "Distribution point full or concurrent modification",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "CAPACITY_EXCEEDED",
                        "message": "Distribution point ODP-CBN-01 has no available slots",
                    }
                }
            }
        },
    },
}


@router.get("", response_model=List[CustomerDTO])
async def list_customers(
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """List customers, newest first, with distribution point and router summaries."""
    use_case = ListCustomers(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyDistributionPointRepository(session),
        SqlAlchemyRouterRepository(session),
    )
    result = await use_case.execute(limit=limit, offset=offset)
    return result.value


@router.post(
    "",
    response_model=CustomerDTO,
    status_code=status.HTTP_201_CREATED,
    responses=SLOT_ERROR_RESPONSES,
)
async def create_customer(
    request: CreateCustomerRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Create a customer.

    When `odp_id` is given a slot is taken on that distribution point in the
    same transaction; a full or unknown distribution point aborts the create.

    **Returns:**
    - 201: Customer created
    - 404: Distribution point or router not found
    - 409: Distribution point has no available slot
    """
    use_case = CreateCustomer(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
        router_repo=SqlAlchemyRouterRepository(session),
        customer_number_prefix=ApplicationConfig.CUSTOMER_NUMBER_PREFIX,
    )
    result = await use_case.execute(CreateCustomerCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{customer_id}", response_model=CustomerDTO)
async def get_customer(customer_id: int, session: AsyncSession = Depends(get_session)):
    use_case = GetCustomer(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyDistributionPointRepository(session),
        SqlAlchemyRouterRepository(session),
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{customer_id}", response_model=CustomerDTO, responses=SLOT_ERROR_RESPONSES)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Update a customer.

    Only fields present in the body change. Changing `odp_id` moves the slot
    (null releases it) atomically with the other field changes.
    """
    use_case = UpdateCustomer(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
        router_repo=SqlAlchemyRouterRepository(session),
    )
    command = UpdateCustomerCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(customer_id, command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/{customer_id}", response_model=DeleteCustomerResponseDTO)
async def delete_customer(customer_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a customer and release its distribution point slot."""
    use_case = DeleteCustomer(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{customer_id}/odp", response_model=SlotAssignmentResponseDTO, responses=SLOT_ERROR_RESPONSES)
async def attach_customer_odp(
    customer_id: int,
    request: AttachOdpRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Attach a customer without a distribution point to one."""
    use_case = AttachCustomerToODP(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
    )
    result = await use_case.execute(AttachCustomerCommandDTO(customer_id=customer_id, odp_id=request.odp_id))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{customer_id}/odp", response_model=SlotAssignmentResponseDTO, responses=SLOT_ERROR_RESPONSES)
async def move_customer_odp(
    customer_id: int,
    request: MoveOdpRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Move a customer to another distribution point.

    If the new distribution point is full or unknown nothing changes and the
    customer keeps its current slot.
    """
    use_case = MoveCustomerODP(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
    )
    command = MoveCustomerCommandDTO(
        customer_id=customer_id,
        old_odp_id=request.old_odp_id,
        new_odp_id=request.new_odp_id,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/{customer_id}/odp", response_model=SlotAssignmentResponseDTO)
async def detach_customer_odp(customer_id: int, session: AsyncSession = Depends(get_session)):
    use_case = DetachCustomerFromODP(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        odp_repo=SqlAlchemyDistributionPointRepository(session),
    )
    result = await use_case.execute(DetachCustomerCommandDTO(customer_id=customer_id))

    if result.is_err():
        raise ClientError(result.error)

    return result.value
