"""GenerateBillPdf Use Case

Renders a bill and its breakdown as a PDF document.
"""

from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.transaction_repository import TransactionRepository
from src.app.services.pdf_service import PdfService
from .dtos import BillPdfDTO


class GenerateBillPdf:
    """
    Use Case: Generate bill PDF

    Business Rules:
    1. Bill and its customer must exist (NOT_FOUND)
    2. Line items come from the breakdown snapshot, never from current
       customer or addon state
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        customer_repo: CustomerRepository,
        pdf_service: PdfService,
        company_name: str,
        company_address: str,
    ):
        self.transaction_repo = transaction_repo
        self.customer_repo = customer_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, bill_id: int) -> Result[BillPdfDTO]:
        try:
            bill = await self.transaction_repo.get_by_id(bill_id)
            if not bill:
                return Return.err(Error(code="NOT_FOUND", message=f"Bill {bill_id} not found"))

            customer = await self.customer_repo.get_by_id(bill.customer_id)
            if not customer:
                return Return.err(
                    Error(code="NOT_FOUND", message=f"Customer {bill.customer_id} not found")
                )

            content = self.pdf_service.generate_bill(
                bill=bill,
                customer=customer,
                company_name=self.company_name,
                company_address=self.company_address,
            )

            return Return.ok(
                BillPdfDTO(
                    bill_id=bill.id,
                    filename=f"tagihan_{customer.customer_number}_{bill.id:06d}.pdf",
                    content=content,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_BILL_PDF_FAILED",
                    message="Failed to generate bill PDF",
                    reason=str(e),
                )
            )
