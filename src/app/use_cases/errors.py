"""Translation of exceptions raised inside a unit of work into Result errors"""

from sqlalchemy.exc import OperationalError
from libs.result import Error
from src.domain.errors import DomainError


def error_from_exception(exc: Exception, code: str, message: str) -> Error:
    """
    Build the Error returned by a use case after it rolled back

    Args:
        exc: Exception caught inside the unit of work
        code: Fallback error code for unexpected failures
        message: Fallback human-readable message

    Returns:
        Error carrying the domain code, CONFLICT for lock/serialization
        failures, or the fallback code otherwise
    """
    if isinstance(exc, DomainError):
        return Error(code=exc.code, message=exc.message, reason=exc.reason)
    if isinstance(exc, OperationalError):
        return Error(
            code="CONFLICT",
            message="The record was modified concurrently, please retry",
            reason=str(exc),
        )
    return Error(code=code, message=message, reason=str(exc))
