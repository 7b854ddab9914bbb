"""Add-on item API Routes"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.billing_request import CreateAddonRequestSchema, UpdateAddonRequestSchema
from src.app.use_cases.addons import (
    CreateAddon,
    UpdateAddon,
    DeactivateAddon,
    ListAddons,
    CreateAddonCommandDTO,
    UpdateAddonCommandDTO,
    AddonDTO,
)
from src.adapter.repositories import SqlAlchemyAddonItemRepository, SqlAlchemyCustomerRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/billing", tags=["Add-ons"])


@router.get("/customers/{customer_id}/addons", response_model=List[AddonDTO])
async def list_addons(customer_id: int, session: AsyncSession = Depends(get_session)):
    """List a customer's active add-on items."""
    use_case = ListAddons(SqlAlchemyCustomerRepository(session), SqlAlchemyAddonItemRepository(session))
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/customers/{customer_id}/addons",
    response_model=AddonDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_addon(
    customer_id: int,
    request: CreateAddonRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Add a line item to a customer's bills.

    `monthly` items are billed every month; `one_time` items are billed once.

    **Returns:**
    - 201: Add-on created
    - 400: Quantity below 1 or negative price
    - 404: Customer not found
    """
    use_case = CreateAddon(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        addon_repo=SqlAlchemyAddonItemRepository(session),
    )
    result = await use_case.execute(customer_id, CreateAddonCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/addons/{addon_id}", response_model=AddonDTO)
async def update_addon(
    addon_id: int,
    request: UpdateAddonRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    use_case = UpdateAddon(uow=SqlAlchemyUnitOfWork(session), addon_repo=SqlAlchemyAddonItemRepository(session))
    result = await use_case.execute(addon_id, UpdateAddonCommandDTO(**request.model_dump(exclude_unset=True)))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/addons/{addon_id}", response_model=AddonDTO)
async def deactivate_addon(addon_id: int, session: AsyncSession = Depends(get_session)):
    """Deactivate an add-on item; it is no longer listed nor billed."""
    use_case = DeactivateAddon(uow=SqlAlchemyUnitOfWork(session), addon_repo=SqlAlchemyAddonItemRepository(session))
    result = await use_case.execute(addon_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
