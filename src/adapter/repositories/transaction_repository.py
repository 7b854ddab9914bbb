"""SQLAlchemy Transaction Repository Implementation

Implements bill persistence using SQLAlchemy async session.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.transaction_repository import TransactionRepository
from src.domain.transaction import Transaction, TransactionType


class SqlAlchemyTransactionRepository(TransactionRepository):
    """
    SQLAlchemy implementation of TransactionRepository

    Bills are append-only; no update method is exposed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: Transaction) -> Transaction:
        """
        Create a new bill

        Args:
            transaction: Transaction entity to persist

        Returns:
            Created Transaction with generated ID
        """
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        stmt = select(Transaction).where(Transaction.id == transaction_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_customer_id(
        self, customer_id: int, limit: int = 20, offset: int = 0
    ) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.customer_id == customer_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def exists_bill_since(self, customer_id: int, since: datetime) -> bool:
        """
        Check if a bill exists for the customer created on/after ``since``

        Args:
            customer_id: Customer ID
            since: Start of the current billing month (naive UTC)

        Returns:
            True if bill exists, False otherwise
        """
        stmt = (
            select(func.count())
            .select_from(Transaction)
            .where(Transaction.customer_id == customer_id)
            .where(Transaction.type == TransactionType.BILL)
            .where(Transaction.created_at >= since)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one()
        return count > 0

    async def sum_amount(self, since: Optional[datetime] = None) -> Decimal:
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0))

        if since is not None:
            stmt = stmt.where(Transaction.created_at >= since)

        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))

    async def count_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(Transaction).where(Transaction.created_at >= since)
        result = await self.session.execute(stmt)
        return result.scalar_one()
