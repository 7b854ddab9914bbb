"""RetrySuspensionActions Use Case

Re-drives suspension actions whose router call was exhausted, and pending
actions left behind by an interrupted run.
"""

import logging
from datetime import datetime, timedelta
from typing import AsyncContextManager, Callable
from libs.result import Result, Return, Error
from src.app.repositories.suspension_action_repository import SuspensionActionRepository
from src.domain.billing_cycle import to_storage
from src.domain.suspension_action import SuspensionActionStatus
from .dtos import SuspensionRetryResultDTO
from .suspend_customer import RetrySuspensionAction

logger = logging.getLogger(__name__)

# Opens a fresh session and yields a RetrySuspensionAction bound to it
RetryScope = Callable[[], AsyncContextManager[RetrySuspensionAction]]


class RetrySuspensionActions:
    """
    Use Case: Retry unconfirmed suspension actions

    Business Rules:
    1. retry_pending actions are always retried
    2. pending actions are retried only once untouched for stale_after
    3. Each action is retried in its own unit of work
    """

    def __init__(
        self,
        action_repo: SuspensionActionRepository,
        retry_scope: RetryScope,
        batch_size: int = 100,
        stale_after: timedelta = timedelta(minutes=15),
    ):
        self.action_repo = action_repo
        self.retry_scope = retry_scope
        self.batch_size = batch_size
        self.stale_after = stale_after

    async def execute(self, now: datetime) -> Result[SuspensionRetryResultDTO]:
        try:
            actions = await self.action_repo.get_by_status(
                SuspensionActionStatus.RETRY_PENDING, limit=self.batch_size
            )
            actions += await self.action_repo.get_by_status(
                SuspensionActionStatus.PENDING,
                limit=self.batch_size,
                updated_before=to_storage(now) - self.stale_after,
            )
            action_ids = [action.id for action in actions]
        except Exception as e:
            return Return.err(
                Error(
                    code="RETRY_SUSPENSION_FAILED",
                    message="Failed to load unconfirmed suspension actions",
                    reason=str(e),
                )
            )

        confirmed = still_pending = failed = 0

        for action_id in action_ids:
            try:
                async with self.retry_scope() as retry_action:
                    result = await retry_action.execute(action_id)
            except Exception as e:
                logger.error(f"Unexpected error retrying suspension action {action_id}: {e}")
                failed += 1
                continue

            if result.is_err():
                failed += 1
            elif result.value.status == SuspensionActionStatus.CONFIRMED:
                confirmed += 1
            else:
                still_pending += 1

        if action_ids:
            logger.info(
                f"Suspension retry: {confirmed} confirmed, {still_pending} still pending, "
                f"{failed} failed out of {len(action_ids)}"
            )

        return Return.ok(
            SuspensionRetryResultDTO(
                total_actions=len(action_ids),
                confirmed=confirmed,
                still_pending=still_pending,
                failed=failed,
            )
        )
