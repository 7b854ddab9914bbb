"""Customer lifecycle use cases"""
from .create_customer import CreateCustomer
from .update_customer import UpdateCustomer
from .delete_customer import DeleteCustomer
from .get_customer import GetCustomer, ListCustomers
from .dtos import (
    CreateCustomerCommandDTO,
    UpdateCustomerCommandDTO,
    CustomerDTO,
    RouterSummaryDTO,
    DeleteCustomerResponseDTO,
)

__all__ = [
    "CreateCustomer",
    "UpdateCustomer",
    "DeleteCustomer",
    "GetCustomer",
    "ListCustomers",
    "CreateCustomerCommandDTO",
    "UpdateCustomerCommandDTO",
    "CustomerDTO",
    "RouterSummaryDTO",
    "DeleteCustomerResponseDTO",
]
