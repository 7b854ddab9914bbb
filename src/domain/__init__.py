from .base import BaseModel, generate_uuid
from .errors import DomainError, NotFound, CapacityExceeded, ValidationError, ExternalServiceFailure, Conflict
from .distribution_point import DistributionPoint
from .router import Router
from .customer import (
    Customer,
    CustomerStatus,
    BillingStatus,
    ServiceStatus,
    InstallationStatus,
    CredentialStatus,
    PeriodUnit,
)
from .addon_item import AddonItem, AddonItemType, AddonLifecycle
from .transaction import Transaction, TransactionType, TransactionStatus
from .suspension_action import SuspensionAction, SuspensionActionStatus

__all__ = [
    "BaseModel",
    "generate_uuid",
    "DomainError",
    "NotFound",
    "CapacityExceeded",
    "ValidationError",
    "ExternalServiceFailure",
    "Conflict",
    "DistributionPoint",
    "Router",
    "Customer",
    "CustomerStatus",
    "BillingStatus",
    "ServiceStatus",
    "InstallationStatus",
    "CredentialStatus",
    "PeriodUnit",
    "AddonItem",
    "AddonItemType",
    "AddonLifecycle",
    "Transaction",
    "TransactionType",
    "TransactionStatus",
    "SuspensionAction",
    "SuspensionActionStatus",
]
