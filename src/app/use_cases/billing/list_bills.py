"""
List Bills Use Case

Retrieves a customer's bill history with pagination.
"""
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.transaction_repository import TransactionRepository
from .dtos import ListBillsResponseDTO, bill_to_dto


class ListCustomerBills:
    """
    Use case: View a customer's bills

    Bills are ordered by created_at DESC (most recent first).
    """

    def __init__(self, customer_repo: CustomerRepository, transaction_repo: TransactionRepository):
        self.customer_repo = customer_repo
        self.transaction_repo = transaction_repo

    async def execute(
        self, customer_id: int, limit: int = 20, offset: int = 0
    ) -> Result[ListBillsResponseDTO]:
        if not await self.customer_repo.get_by_id(customer_id):
            return Return.err(Error(code="NOT_FOUND", message=f"Customer {customer_id} not found"))

        bills = await self.transaction_repo.get_by_customer_id(
            customer_id=customer_id,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListBillsResponseDTO(
                bills=[bill_to_dto(bill) for bill in bills],
                limit=limit,
                offset=offset,
            )
        )
