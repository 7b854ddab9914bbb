"""Customer suspension Use Cases

Suspending a customer is a two step saga: the billing status and a pending
SuspensionAction are committed together, then the router credential is
disabled and the action confirmed or left for retry.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.router_control import RouterControlService
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.router_repository import RouterRepository
from src.app.repositories.suspension_action_repository import SuspensionActionRepository
from src.app.use_cases.errors import error_from_exception
from src.domain.billing_cycle import to_storage
from src.domain.customer import BillingStatus, CredentialStatus, ServiceStatus
from src.domain.errors import ExternalServiceFailure, NotFound
from src.domain.router import Router
from src.domain.suspension_action import SuspensionAction, SuspensionActionStatus
from .dtos import (
    CustomerFailureDTO,
    SuspendedCustomerDTO,
    SuspensionActionDTO,
    action_to_dto,
)

logger = logging.getLogger(__name__)


class CredentialDisabler:
    """
    Calls the router-control service with retry and exponential backoff

    Updates the action in memory; callers persist it.
    """

    def __init__(
        self,
        router_control: RouterControlService,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
    ):
        self.router_control = router_control
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds

    async def disable(self, action: SuspensionAction, router: Optional[Router]) -> Optional[str]:
        """
        Disable the action's credential

        Args:
            action: Suspension action to drive
            router: Router holding the secret (None when unassigned)

        Returns:
            None on success, otherwise the last error message
        """
        if router is None or not action.secret_name:
            error = f"No router credential configured for customer {action.customer_id}"
            action.schedule_retry(error)
            return error

        last_error = None
        for attempt in range(self.max_attempts):
            action.attempts += 1
            try:
                if await self.router_control.disable_subscriber_credential(router, action.secret_name):
                    action.confirm()
                    return None
                last_error = f"Router {router.name} did not disable '{action.secret_name}'"
            except Exception as e:
                last_error = f"Router {router.name} call failed: {e}"

            logger.warning(
                f"Suspension action {action.id} attempt {action.attempts} failed: {last_error}"
            )
            if attempt + 1 < self.max_attempts:
                await asyncio.sleep(self.backoff_seconds * 2 ** attempt)

        action.schedule_retry(last_error)
        return last_error


class SuspendCustomer:
    """
    Use Case: Suspend one overdue customer

    Business Rules:
    1. Only belum_lunas customers with active service are suspended
    2. billing_status=suspend, credential_status=disabled, last_suspend_date
       and a pending SuspensionAction are committed together
    3. The router is called after that commit; success confirms the action,
       exhaustion leaves it retry_pending and reports EXTERNAL_SERVICE_FAILURE
       for this customer while the suspension stays committed

    Returns Ok(None) when the customer is no longer eligible.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        router_repo: RouterRepository,
        action_repo: SuspensionActionRepository,
        disabler: CredentialDisabler,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.router_repo = router_repo
        self.action_repo = action_repo
        self.disabler = disabler

    async def execute(self, customer_id: int, now: datetime) -> Result[Optional[SuspendedCustomerDTO]]:
        # Step 1: Suspend and record intent atomically
        try:
            customer = await self.customer_repo.get_by_id(customer_id, for_update=True)
            if not customer:
                raise NotFound(f"Customer {customer_id} not found")

            if (
                customer.billing_status != BillingStatus.BELUM_LUNAS
                or customer.service_status != ServiceStatus.ACTIVE
            ):
                logger.info(f"Customer {customer_id} no longer eligible for suspension, skipping")
                await self.uow.rollback()
                return Return.ok(None)

            customer.transition_billing_status(BillingStatus.SUSPEND)
            customer.credential_status = CredentialStatus.DISABLED
            customer.last_suspend_date = to_storage(now)
            await self.customer_repo.update(customer)

            action = await self.action_repo.create(
                SuspensionAction(
                    customer_id=customer.id,
                    router_id=customer.router_id,
                    secret_name=customer.ppp_secret,
                )
            )
            customer_number = customer.customer_number
            name = customer.name

            await self.uow.commit()
            logger.info(f"Suspended customer {customer_number} (action {action.id})")

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Suspension failed for customer {customer_id}: {e}")
            return Return.err(error_from_exception(e, "SUSPEND_CUSTOMER_FAILED", "Failed to suspend customer"))

        # Step 2: Disable router credential
        action_id, router_id, secret_name = action.id, action.router_id, action.secret_name
        attempts, router_error = 0, None
        try:
            router = await self.router_repo.get_by_id(router_id) if router_id else None
            error = await self.disabler.disable(action, router)
            attempts = action.attempts
            await self.action_repo.update(action)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            error = f"Failed to record router result: {e}"

        if error:
            logger.error(f"Router credential for customer {customer_number} left for retry: {error}")
            router_error = CustomerFailureDTO(
                customer_id=customer_id,
                code=ExternalServiceFailure.code,
                message=error,
            )

        return Return.ok(
            SuspendedCustomerDTO(
                customer_id=customer_id,
                customer_number=customer_number,
                name=name,
                action=SuspensionActionDTO(
                    id=action_id,
                    customer_id=customer_id,
                    router_id=router_id,
                    secret_name=secret_name,
                    status=SuspensionActionStatus.RETRY_PENDING if error else SuspensionActionStatus.CONFIRMED,
                    attempts=attempts,
                    last_error=error,
                ),
                router_error=router_error,
            )
        )


class RetrySuspensionAction:
    """
    Use Case: Re-drive one unconfirmed suspension action

    The action row stays locked while the router is called so concurrent
    retry workers cannot drive the same action twice. Missing router or
    secret on the action falls back to the customer's current assignment.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        action_repo: SuspensionActionRepository,
        customer_repo: CustomerRepository,
        router_repo: RouterRepository,
        disabler: CredentialDisabler,
    ):
        self.uow = uow
        self.action_repo = action_repo
        self.customer_repo = customer_repo
        self.router_repo = router_repo
        self.disabler = disabler

    async def execute(self, action_id: int) -> Result[SuspensionActionDTO]:
        try:
            action = await self.action_repo.get_by_id(action_id, for_update=True)
            if not action:
                raise NotFound(f"Suspension action {action_id} not found")

            if action.status == SuspensionActionStatus.CONFIRMED:
                response = action_to_dto(action)
                await self.uow.rollback()
                return Return.ok(response)

            if action.router_id is None or not action.secret_name:
                customer = await self.customer_repo.get_by_id(action.customer_id)
                if customer:
                    action.router_id = action.router_id or customer.router_id
                    action.secret_name = action.secret_name or customer.ppp_secret

            router = await self.router_repo.get_by_id(action.router_id) if action.router_id else None
            error = await self.disabler.disable(action, router)
            action = await self.action_repo.update(action)
            response = action_to_dto(action)

            await self.uow.commit()

            if error:
                logger.warning(f"Suspension action {action_id} still pending: {error}")
            else:
                logger.info(f"Suspension action {action_id} confirmed")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                error_from_exception(e, "RETRY_SUSPENSION_FAILED", "Failed to retry suspension action")
            )
