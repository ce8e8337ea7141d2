"""Translate ledger errors into the ``{message, error}`` response body."""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from backend.app.core.errors import LedgerError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def ledger_error_response(message: str, exc: LedgerError) -> JSONResponse:
    status_code = next((code for cls, code in _STATUS_CODES if isinstance(exc, cls)), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s: %s", message, exc)
    return JSONResponse(status_code=status_code, content={"message": message, "error": str(exc)})
