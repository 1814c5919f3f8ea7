"""
Application errors and their JSON rendering.

``APIError`` and its subclasses are raised by endpoints and security
dependencies and rendered by ``api_error_handler`` as a JSON body with a
``message`` (and optionally a ``status``) field.  ``NotFoundError`` is a
domain error raised by services; endpoints decide which HTTP error it
becomes.
"""

import logging
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """A referenced entity does not exist."""


class APIError(Exception):
    """An error that is returned to the client as-is."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_label: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_label = status_label


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class InternalServerError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Render an ``APIError`` as ``{"message": ..., "status": ...}``."""
    logger.debug("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    body = {"message": exc.message}
    if exc.status_label is not None:
        body["status"] = exc.status_label
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)
