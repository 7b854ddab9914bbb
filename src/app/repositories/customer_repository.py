"""Customer Repository Interface

Defines the contract for customer persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """
    Repository interface for Customer persistence

    Provides access to customer subscription data for slot allocation,
    bill generation and overdue suspension.
    """

    @abstractmethod
    async def get_by_id(self, customer_id: int, for_update: bool = False) -> Optional[Customer]:
        """
        Retrieve customer by ID

        Args:
            customer_id: Customer ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[Customer]:
        """
        Retrieve customers, newest first

        Args:
            limit: Maximum number of customers (None = all)
            offset: Offset for pagination

        Returns:
            List of customers
        """
        pass

    @abstractmethod
    async def get_billable_customers(self) -> List[Customer]:
        """
        Retrieve customers eligible for monthly billing

        Used by bill generation to process every customer with
        status=active and service_status=active.

        Returns:
            List of billable customers
        """
        pass

    @abstractmethod
    async def get_overdue_customers(self, as_of: datetime) -> List[Customer]:
        """
        Retrieve customers to suspend

        A customer is overdue when billing_status=belum_lunas,
        service_status=active and at least one pending bill has
        due_date strictly before ``as_of``.

        Args:
            as_of: Reference time (naive UTC)

        Returns:
            List of overdue customers
        """
        pass

    @abstractmethod
    async def count_by_odp_id(self, odp_id: int) -> int:
        """Number of customers currently attached to a distribution point"""
        pass

    @abstractmethod
    async def generate_customer_number(self, prefix: str) -> str:
        """
        Generate the next sequential customer number

        Format: {prefix}NNNN (e.g., LTS0001)

        Args:
            prefix: Customer number prefix

        Returns:
            Unique customer number string
        """
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def delete(self, customer: Customer) -> None:
        pass
