"""CalculateProrata Use Case

Previews the first-month charge for a mid-month activation.
"""

from libs.result import Result, Return, Error
from src.domain.billing_cycle import prorate
from .dtos import CalculateProrataCommandDTO, ProRataResponseDTO


class CalculateProrata:
    """
    Use Case: Preview pro-rata charge

    Business Rules:
    1. Monthly unit: price / days_in_month * remaining_days, rounded half-up
       to the rupiah; the activation day is billable
    2. Activation on the 1st bills the full price (not applied)
    3. Any other unit returns the full price with days = active_period
    """

    async def execute(self, command: CalculateProrataCommandDTO) -> Result[ProRataResponseDTO]:
        try:
            result = prorate(
                command.active_date,
                command.package_price,
                command.active_period,
                command.active_period_unit,
            )
            return Return.ok(
                ProRataResponseDTO(
                    is_pro_rata_applied=result.is_pro_rata_applied,
                    pro_rata_amount=result.pro_rata_amount,
                    remaining_days=result.remaining_days,
                    days_in_month=result.days_in_month,
                )
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="CALCULATE_PRORATA_FAILED",
                    message="Failed to calculate pro-rata charge",
                    reason=str(e),
                )
            )
