"""Billing domain use cases"""
from .calculate_prorata import CalculateProrata
from .generate_customer_bill import GenerateCustomerBill
from .generate_monthly_bills import GenerateMonthlyBills, BillScope
from .suspend_customer import CredentialDisabler, SuspendCustomer, RetrySuspensionAction
from .suspend_overdue import SuspendOverdue, SuspendScope
from .retry_suspension_actions import RetrySuspensionActions, RetryScope
from .list_bills import ListCustomerBills
from .generate_bill_pdf import GenerateBillPdf
from .dtos import (
    CalculateProrataCommandDTO,
    ProRataResponseDTO,
    BillDTO,
    CustomerFailureDTO,
    MonthlyBillingResultDTO,
    SuspensionActionDTO,
    SuspendedCustomerDTO,
    SuspendOverdueResultDTO,
    SuspensionRetryResultDTO,
    ListBillsResponseDTO,
    BillPdfDTO,
)

__all__ = [
    "CalculateProrata",
    "GenerateCustomerBill",
    "GenerateMonthlyBills",
    "BillScope",
    "CredentialDisabler",
    "SuspendCustomer",
    "RetrySuspensionAction",
    "SuspendOverdue",
    "SuspendScope",
    "RetrySuspensionActions",
    "RetryScope",
    "ListCustomerBills",
    "GenerateBillPdf",
    "CalculateProrataCommandDTO",
    "ProRataResponseDTO",
    "BillDTO",
    "CustomerFailureDTO",
    "MonthlyBillingResultDTO",
    "SuspensionActionDTO",
    "SuspendedCustomerDTO",
    "SuspendOverdueResultDTO",
    "SuspensionRetryResultDTO",
    "ListBillsResponseDTO",
    "BillPdfDTO",
]
