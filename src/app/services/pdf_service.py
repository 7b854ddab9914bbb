"""PDF Generation Service Interface

Defines the contract for rendering bills as PDF documents.
"""

from abc import ABC, abstractmethod
from src.domain.customer import Customer
from src.domain.transaction import Transaction


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides printable bills built from the transaction breakdown snapshot.
    """

    @abstractmethod
    def generate_bill(
        self,
        bill: Transaction,
        customer: Customer,
        company_name: str,
        company_address: str,
    ) -> bytes:
        """
        Generate a bill PDF

        Args:
            bill: Bill transaction with its breakdown
            customer: Billed customer
            company_name: Company name to display on the bill
            company_address: Company address to display on the bill

        Returns:
            PDF document as bytes
        """
        pass
