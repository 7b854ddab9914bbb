from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyAddonItemRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyRouterRepository,
    SqlAlchemySuspensionActionRepository,
    SqlAlchemyTransactionRepository,
)
from src.adapter.services.clock import ZonedClock
from src.adapter.services.router_control import create_router_control_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock
from src.app.services.router_control import RouterControlService
from src.app.use_cases.billing import (
    CredentialDisabler,
    GenerateCustomerBill,
    RetrySuspensionAction,
    SuspendCustomer,
)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory():
    """Session factory used to open one session per customer in bulk operations"""
    return AsyncSessionLocal


def get_clock() -> Clock:
    return ZonedClock(ApplicationConfig.TIMEZONE)


def get_router_control() -> RouterControlService:
    return create_router_control_service(
        enabled=ApplicationConfig.ROUTER_CONTROL_ENABLED,
        timeout=ApplicationConfig.ROUTER_CONTROL_TIMEOUT_SECONDS,
    )


def build_credential_disabler(router_control: RouterControlService) -> CredentialDisabler:
    return CredentialDisabler(
        router_control,
        max_attempts=ApplicationConfig.ROUTER_CONTROL_MAX_ATTEMPTS,
        backoff_seconds=ApplicationConfig.ROUTER_CONTROL_BACKOFF_SECONDS,
    )


def bill_scope(session_factory):
    """
    Build a per-customer billing scope

    Each call opens a fresh session and yields a GenerateCustomerBill bound
    to it, so every customer is billed in its own transaction.
    """

    @asynccontextmanager
    async def scope():
        async with session_factory() as session:
            yield GenerateCustomerBill(
                uow=SqlAlchemyUnitOfWork(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                addon_repo=SqlAlchemyAddonItemRepository(session),
                transaction_repo=SqlAlchemyTransactionRepository(session),
                due_day=ApplicationConfig.BILL_DUE_DAY,
            )

    return scope


def suspend_scope(session_factory, disabler: CredentialDisabler):
    @asynccontextmanager
    async def scope():
        async with session_factory() as session:
            yield SuspendCustomer(
                uow=SqlAlchemyUnitOfWork(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                router_repo=SqlAlchemyRouterRepository(session),
                action_repo=SqlAlchemySuspensionActionRepository(session),
                disabler=disabler,
            )

    return scope


def retry_scope(session_factory, disabler: CredentialDisabler):
    @asynccontextmanager
    async def scope():
        async with session_factory() as session:
            yield RetrySuspensionAction(
                uow=SqlAlchemyUnitOfWork(session),
                action_repo=SqlAlchemySuspensionActionRepository(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                router_repo=SqlAlchemyRouterRepository(session),
                disabler=disabler,
            )

    return scope
