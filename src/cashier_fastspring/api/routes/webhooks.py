"""FastSpring webhook endpoint."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from cashier_fastspring.dependencies import Processor, TraceId
from cashier_fastspring.webhooks.signature import SIGNATURE_HEADER

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])


@router.post("/webhooks/fastspring", response_class=PlainTextResponse, status_code=202)
async def handle_fastspring_webhook(request: Request, processor: Processor, trace_id: TraceId):
    """Process a FastSpring webhook delivery.

    The body lists the ids of the events that were handled, one per line.
    FastSpring marks those as processed and redelivers the others. The status
    is always 202 unless the delivery as a whole is rejected.
    """
    # Signature covers the exact bytes received
    body = await request.body()
    # Subscribers and the audit sink block; keep them off the event loop
    result = await run_in_threadpool(processor.process, body, request.headers.get(SIGNATURE_HEADER))

    if result.failures:
        logger.warning(
            "Webhook delivery had unprocessed events",
            extra={"trace_id": trace_id, "event_ids": [f.event_id for f in result.failures]},
        )
    return PlainTextResponse(result.body, status_code=202)
