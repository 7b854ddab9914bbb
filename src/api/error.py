"""HTTP error translation for use case Results"""

import logging
from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CAPACITY_EXCEEDED": status.HTTP_409_CONFLICT,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "EXTERNAL_SERVICE_FAILURE": status.HTTP_502_BAD_GATEWAY,
}


class ClientError(Exception):
    """
    Raised by routes for a failed Result

    When status_code is omitted it is derived from the error code;
    unknown codes map to 400.
    """

    def __init__(self, error: Error, status_code: Optional[int] = None):
        self.error = error
        self.status_code = status_code or ERROR_STATUS_CODES.get(error.code, status.HTTP_400_BAD_REQUEST)
        super().__init__(error.message)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.error.reason:
        logger.info(
            f"{request.method} {request.url.path} -> {exc.status_code} "
            f"{exc.error.code}: {exc.error.reason}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )
