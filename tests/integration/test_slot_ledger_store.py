"""Integration tests for distribution point slot accounting

Runs the customer and slot use cases against a real database and checks
the slot counters after every operation.
"""

import asyncio
import pytest
from decimal import Decimal
from sqlmodel import select

from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDistributionPointRepository,
    SqlAlchemyRouterRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.customers import (
    CreateCustomer,
    DeleteCustomer,
    CreateCustomerCommandDTO,
)
from src.app.use_cases.network import (
    AttachCustomerToODP,
    MoveCustomerODP,
    ReconcileSlots,
    AttachCustomerCommandDTO,
    MoveCustomerCommandDTO,
)
from src.domain.customer import Customer
from src.domain.distribution_point import DistributionPoint


async def add_odp(db_session, name, total):
    odp = DistributionPoint(name=name, total_slots=total, used_slots=0, available_slots=total)
    db_session.add(odp)
    await db_session.commit()
    await db_session.refresh(odp)
    return odp


async def create_customer(session_factory, name, odp_id=None):
    async with session_factory() as session:
        use_case = CreateCustomer(
            uow=SqlAlchemyUnitOfWork(session),
            customer_repo=SqlAlchemyCustomerRepository(session),
            odp_repo=SqlAlchemyDistributionPointRepository(session),
            router_repo=SqlAlchemyRouterRepository(session),
        )
        return await use_case.execute(
            CreateCustomerCommandDTO(
                name=name, package="Home 20 Mbps", package_price=Decimal("300000"), odp_id=odp_id
            )
        )


async def load_odp(session_factory, odp_id):
    async with session_factory() as session:
        return await session.get(DistributionPoint, odp_id)


async def load_customer(session_factory, customer_id):
    async with session_factory() as session:
        return await session.get(Customer, customer_id)


@pytest.mark.asyncio
class TestSlotCapacity:
    async def test_attach_until_full_then_capacity_exceeded(self, db_session, session_factory):
        """
        Given: A distribution point with two slots
        When: Three customers are created on it
        Then: The third create fails and the point stays at 2/2
        """
        odp = await add_odp(db_session, "ODP-CBN-01", 2)

        first = await create_customer(session_factory, "Ani", odp.id)
        second = await create_customer(session_factory, "Budi", odp.id)
        third = await create_customer(session_factory, "Citra", odp.id)

        assert first.is_ok() and second.is_ok()
        assert third.is_err()
        assert third.error.code == "CAPACITY_EXCEEDED"

        stored = await load_odp(session_factory, odp.id)
        assert (stored.used_slots, stored.available_slots) == (2, 0)

        async with session_factory() as session:
            names = (await session.execute(select(Customer.name))).scalars().all()
        assert sorted(names) == ["Ani", "Budi"]

    async def test_customer_numbers_are_sequential(self, session_factory):
        first = await create_customer(session_factory, "Ani")
        second = await create_customer(session_factory, "Budi")

        assert first.value.customer_number == "LTS0001"
        assert second.value.customer_number == "LTS0002"


@pytest.mark.asyncio
class TestSlotMove:
    async def test_move_to_full_point_keeps_old_slot(self, db_session, session_factory):
        """
        Given: Customer on ODP A, ODP B is full
        When: Customer is moved to B
        Then: The move fails and A still holds the customer's slot
        """
        odp_a = await add_odp(db_session, "ODP-A", 4)
        odp_b = await add_odp(db_session, "ODP-B", 1)
        customer = (await create_customer(session_factory, "Ani", odp_a.id)).value
        await create_customer(session_factory, "Budi", odp_b.id)

        async with session_factory() as session:
            result = await MoveCustomerODP(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyDistributionPointRepository(session),
            ).execute(MoveCustomerCommandDTO(customer_id=customer.id, old_odp_id=odp_a.id, new_odp_id=odp_b.id))

        assert result.is_err()
        assert result.error.code == "CAPACITY_EXCEEDED"
        assert (await load_customer(session_factory, customer.id)).odp_id == odp_a.id
        assert (await load_odp(session_factory, odp_a.id)).used_slots == 1
        assert (await load_odp(session_factory, odp_b.id)).used_slots == 1

    async def test_move_transfers_slot(self, db_session, session_factory):
        odp_a = await add_odp(db_session, "ODP-A", 4)
        odp_b = await add_odp(db_session, "ODP-B", 4)
        customer = (await create_customer(session_factory, "Ani", odp_a.id)).value

        async with session_factory() as session:
            result = await MoveCustomerODP(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyDistributionPointRepository(session),
            ).execute(MoveCustomerCommandDTO(customer_id=customer.id, new_odp_id=odp_b.id))

        assert result.is_ok()
        stored_a = await load_odp(session_factory, odp_a.id)
        stored_b = await load_odp(session_factory, odp_b.id)
        assert (stored_a.used_slots, stored_a.available_slots) == (0, 4)
        assert (stored_b.used_slots, stored_b.available_slots) == (1, 3)


@pytest.mark.asyncio
class TestSlotCountersMatchCustomers:
    async def test_counters_stay_reconciled_through_lifecycle(self, db_session, session_factory):
        """
        Given: A sequence of creates, attaches, moves and deletes
        When: Reconciliation runs
        Then: Every distribution point matches its attached customers
        """
        odp_a = await add_odp(db_session, "ODP-A", 3)
        odp_b = await add_odp(db_session, "ODP-B", 3)

        ani = (await create_customer(session_factory, "Ani", odp_a.id)).value
        budi = (await create_customer(session_factory, "Budi")).value
        citra = (await create_customer(session_factory, "Citra", odp_a.id)).value

        async with session_factory() as session:
            await AttachCustomerToODP(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyDistributionPointRepository(session),
            ).execute(AttachCustomerCommandDTO(customer_id=budi.id, odp_id=odp_b.id))

        async with session_factory() as session:
            await MoveCustomerODP(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyDistributionPointRepository(session),
            ).execute(MoveCustomerCommandDTO(customer_id=ani.id, new_odp_id=odp_b.id))

        async with session_factory() as session:
            deleted = await DeleteCustomer(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyDistributionPointRepository(session),
            ).execute(citra.id)
        assert deleted.value.released_odp_id == odp_a.id

        async with session_factory() as session:
            result = await ReconcileSlots(
                SqlAlchemyDistributionPointRepository(session),
                SqlAlchemyCustomerRepository(session),
            ).execute()

        assert result.is_ok()
        assert result.value.total_odps_checked == 2
        assert result.value.discrepancies_found == 0
        assert (await load_odp(session_factory, odp_a.id)).used_slots == 0
        assert (await load_odp(session_factory, odp_b.id)).used_slots == 2


@pytest.mark.asyncio
class TestConcurrentAttach:
    async def test_concurrent_attaches_never_overcommit(self, db_session, session_factory):
        """
        Given: A distribution point with one slot and five unattached customers
        When: All five are attached to it at the same time
        Then: Exactly one attach succeeds and the counters match the customers
        """
        odp = await add_odp(db_session, "ODP-SINGLE", 1)
        customers = [(await create_customer(session_factory, f"Pelanggan {i}")).value for i in range(5)]

        async def attach(customer_id):
            async with session_factory() as session:
                return await AttachCustomerToODP(
                    SqlAlchemyUnitOfWork(session),
                    SqlAlchemyCustomerRepository(session),
                    SqlAlchemyDistributionPointRepository(session),
                ).execute(AttachCustomerCommandDTO(customer_id=customer_id, odp_id=odp.id))

        results = await asyncio.gather(*(attach(c.id) for c in customers))

        succeeded = [r for r in results if r.is_ok()]
        assert len(succeeded) == 1
        assert {r.error.code for r in results if r.is_err()} <= {"CAPACITY_EXCEEDED", "CONFLICT"}

        stored = await load_odp(session_factory, odp.id)
        assert (stored.used_slots, stored.available_slots) == (1, 0)

        async with session_factory() as session:
            attached = await SqlAlchemyCustomerRepository(session).count_by_odp_id(odp.id)
        assert attached == 1

    async def test_detach_from_empty_point_keeps_counters(self, db_session, session_factory):
        """
        Given: A customer referencing a point whose counters already read 0 used
        When: The customer is deleted
        Then: The counters are not pushed below zero
        """
        odp = await add_odp(db_session, "ODP-DRIFT", 2)
        customer = (await create_customer(session_factory, "Ani", odp.id)).value

        async with session_factory() as session:
            drifted = await session.get(DistributionPoint, odp.id)
            drifted.used_slots, drifted.available_slots = 0, 2
            session.add(drifted)
            await session.commit()

        async with session_factory() as session:
            result = await DeleteCustomer(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyCustomerRepository(session),
                SqlAlchemyDistributionPointRepository(session),
            ).execute(customer.id)

        assert result.is_ok()
        stored = await load_odp(session_factory, odp.id)
        assert (stored.used_slots, stored.available_slots) == (0, 2)
