"""Distribution point inventory use cases"""

from typing import List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.distribution_point_repository import DistributionPointRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.distribution_point import DistributionPoint
from .dtos import CreateDistributionPointCommandDTO, DistributionPointDTO, odp_to_dto


class CreateDistributionPoint:
    """
    Use Case: Register a new distribution point

    New distribution points start empty: used_slots=0, available_slots=total_slots.
    """

    def __init__(self, uow: UnitOfWork, odp_repo: DistributionPointRepository):
        self.uow = uow
        self.odp_repo = odp_repo

    async def execute(self, command: CreateDistributionPointCommandDTO) -> Result[DistributionPointDTO]:
        try:
            odp = DistributionPoint(
                name=command.name,
                location=command.location,
                area=command.area,
                total_slots=command.total_slots,
                used_slots=0,
                available_slots=command.total_slots,
            )
            odp = await self.odp_repo.create(odp)
            response = odp_to_dto(odp)

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                error_from_exception(e, "CREATE_ODP_FAILED", "Failed to create distribution point")
            )


class GetDistributionPoint:
    def __init__(self, odp_repo: DistributionPointRepository):
        self.odp_repo = odp_repo

    async def execute(self, odp_id: int) -> Result[DistributionPointDTO]:
        odp = await self.odp_repo.get_by_id(odp_id)
        if not odp:
            return Return.err(
                Error(code="NOT_FOUND", message=f"Distribution point {odp_id} not found")
            )
        return Return.ok(odp_to_dto(odp))


class ListDistributionPoints:
    def __init__(self, odp_repo: DistributionPointRepository):
        self.odp_repo = odp_repo

    async def execute(self) -> Result[List[DistributionPointDTO]]:
        odps = await self.odp_repo.get_all()
        return Return.ok([odp_to_dto(odp) for odp in odps])
