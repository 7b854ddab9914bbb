"""Domain errors

Raised inside units of work by the slot ledger and the billing engine.
Use cases translate them into ``libs.result.Error`` values after rolling back.
"""


class DomainError(Exception):
    """Base class for business rule violations"""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, reason: str = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class NotFound(DomainError):
    """Referenced customer, distribution point, router or addon item is absent"""

    code = "NOT_FOUND"


class CapacityExceeded(DomainError):
    """Distribution point has no available slot"""

    code = "CAPACITY_EXCEEDED"


class ValidationError(DomainError):
    """Malformed input or forbidden state transition"""

    code = "VALIDATION_ERROR"


class ExternalServiceFailure(DomainError):
    """Router-control call failed"""

    code = "EXTERNAL_SERVICE_FAILURE"


class Conflict(DomainError):
    """Concurrent modification detected by the store"""

    code = "CONFLICT"
