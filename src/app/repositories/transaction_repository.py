"""Transaction Repository Interface

Defines the contract for bill persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from src.domain.transaction import Transaction


class TransactionRepository(ABC):
    """
    Repository interface for Transaction persistence

    Bills are immutable and append-only. Idempotency of monthly generation
    is enforced via exists_bill_since().
    """

    @abstractmethod
    async def create(self, transaction: Transaction) -> Transaction:
        """
        Create a new bill

        Args:
            transaction: Transaction entity to persist

        Returns:
            Created Transaction with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        pass

    @abstractmethod
    async def get_by_customer_id(
        self, customer_id: int, limit: int = 20, offset: int = 0
    ) -> List[Transaction]:
        """
        Retrieve a customer's bills, newest first

        Args:
            customer_id: Customer ID
            limit: Maximum number of bills to return
            offset: Offset for pagination

        Returns:
            List of Transactions
        """
        pass

    @abstractmethod
    async def exists_bill_since(self, customer_id: int, since: datetime) -> bool:
        """
        Check if a bill was already created for the customer on/after ``since``

        Used to prevent duplicate bills within one calendar month.

        Args:
            customer_id: Customer ID
            since: Start of the current billing month (naive UTC)

        Returns:
            True if a bill exists, False otherwise
        """
        pass

    @abstractmethod
    async def sum_amount(self, since: Optional[datetime] = None) -> Decimal:
        """Total billed amount, optionally only for bills created on/after ``since``"""
        pass

    @abstractmethod
    async def count_since(self, since: datetime) -> int:
        pass
