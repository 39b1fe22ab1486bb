"""Exception handler for structured error responses."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from ..exceptions import CatalogException

logger = logging.getLogger(__name__)


async def catalog_exception_handler(request: Request, exc: CatalogException) -> JSONResponse:
    """Render a CatalogException as ``{"error", "message", "details"}``.

    Client errors are logged at WARNING, server-side failures at ERROR.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.error_code.value}: {exc.message}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
