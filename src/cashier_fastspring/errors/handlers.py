"""FastAPI exception handlers producing ErrorResponse bodies."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cashier_fastspring.errors.exceptions import CashierError, IntegrityViolation
from cashier_fastspring.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(CashierError)
    async def cashier_error_handler(request: Request, exc: CashierError):
        trace_id = getattr(request.state, "trace_id", "unknown")
        if isinstance(exc, IntegrityViolation):
            logger.warning(
                "webhook_signature_rejected",
                extra={
                    "path": request.url.path,
                    "trace_id": trace_id,
                    "client": request.client.host if request.client else None,
                },
            )
        error_response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                trace_id=trace_id,
                timestamp=datetime.now(timezone.utc),
            ),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(mode="json", exclude_none=True),
        )
