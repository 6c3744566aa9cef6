"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from cashier_fastspring.webhooks.processor import WebhookProcessor


def get_webhook_processor(request: Request) -> WebhookProcessor:
    """Return the processor built at startup."""
    return request.app.state.webhook_processor


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")


# Type aliases for dependency injection
Processor = Annotated[WebhookProcessor, Depends(get_webhook_processor)]
TraceId = Annotated[str, Depends(get_trace_id)]
