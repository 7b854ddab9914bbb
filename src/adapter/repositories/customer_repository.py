"""SQLAlchemy Customer Repository Implementation

Implements customer persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.base import utc_now
from src.domain.customer import Customer, CustomerStatus, BillingStatus, ServiceStatus
from src.domain.transaction import Transaction, TransactionStatus


class SqlAlchemyCustomerRepository(CustomerRepository):
    """
    SQLAlchemy implementation of CustomerRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, customer_id: int, for_update: bool = False) -> Optional[Customer]:
        """
        Retrieve customer by ID with optional row-level locking

        Args:
            customer_id: Customer ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Customer if found, None otherwise
        """
        stmt = select(Customer).where(Customer.id == customer_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[Customer]:
        stmt = select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc())

        if limit is not None:
            stmt = stmt.limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_billable_customers(self) -> List[Customer]:
        """
        Retrieve all customers with status=active and service_status=active

        Returns:
            List of billable customers ordered by ID
        """
        stmt = (
            select(Customer)
            .where(Customer.status == CustomerStatus.ACTIVE)
            .where(Customer.service_status == ServiceStatus.ACTIVE)
            .order_by(Customer.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_overdue_customers(self, as_of: datetime) -> List[Customer]:
        """
        Retrieve unpaid, service-active customers holding a pending bill past due

        Args:
            as_of: Reference time (naive UTC)

        Returns:
            List of overdue customers ordered by ID
        """
        overdue_bill = (
            select(Transaction.id)
            .where(Transaction.customer_id == Customer.id)
            .where(Transaction.status == TransactionStatus.PENDING)
            .where(Transaction.due_date < as_of)
            .exists()
        )
        stmt = (
            select(Customer)
            .where(Customer.billing_status == BillingStatus.BELUM_LUNAS)
            .where(Customer.service_status == ServiceStatus.ACTIVE)
            .where(overdue_bill)
            .order_by(Customer.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_odp_id(self, odp_id: int) -> int:
        stmt = select(func.count()).select_from(Customer).where(Customer.odp_id == odp_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def generate_customer_number(self, prefix: str) -> str:
        """
        Generate the next customer number

        Format: {prefix}NNNN (e.g., LTS0001). Continues from the highest
        existing number so deleted customers never cause a collision.

        Args:
            prefix: Customer number prefix

        Returns:
            Unique customer number string
        """
        # Longest first: "LTS10000" sorts below "LTS9999" as text
        stmt = (
            select(Customer.customer_number)
            .where(Customer.customer_number.like(f"{prefix}%"))
            .order_by(func.length(Customer.customer_number).desc(), Customer.customer_number.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        max_number = result.scalar_one_or_none()

        if max_number:
            sequence = int(max_number[len(prefix):]) + 1
        else:
            sequence = 1

        return f"{prefix}{sequence:04d}"

    async def create(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def update(self, customer: Customer) -> Customer:
        customer.updated_at = utc_now()
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def delete(self, customer: Customer) -> None:
        await self.session.delete(customer)
        await self.session.flush()
