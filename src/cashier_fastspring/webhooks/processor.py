"""Processing of one FastSpring webhook delivery.

A delivery is verified as a whole, then each event is validated, classified
and dispatched on its own. An event that fails any of these steps is logged
and left out of the acknowledgment list, which tells FastSpring to deliver it
again later; its siblings are unaffected.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from cashier_fastspring.errors.exceptions import CashierError, MalformedPayload
from cashier_fastspring.events.bus import Publisher
from cashier_fastspring.events.dispatcher import dispatch
from cashier_fastspring.events.registry import EventRegistry
from cashier_fastspring.models.webhook import RawEvent, WebhookEnvelope
from cashier_fastspring.webhooks.audit import NullPayloadSink, PayloadSink
from cashier_fastspring.webhooks.signature import verify_signature

logger = logging.getLogger(__name__)


@dataclass
class EventFailure:
    """An event that was not acknowledged."""

    index: int
    event_id: str | None
    error: CashierError


@dataclass
class WebhookResult:
    acknowledged: list[str] = field(default_factory=list)
    failures: list[EventFailure] = field(default_factory=list)

    @property
    def body(self) -> str:
        """Response body listing the processed ids, one per line."""
        return "\n".join(self.acknowledged)


def parse_envelope(body: bytes) -> WebhookEnvelope:
    """Decode the request body into a :class:`WebhookEnvelope`.

    Raises:
        MalformedPayload: The body is not JSON or has no ``events`` list.
    """
    try:
        decoded = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedPayload("Webhook body is not valid JSON", details=str(exc)) from exc

    try:
        return WebhookEnvelope.model_validate(decoded)
    except ValidationError as exc:
        raise MalformedPayload(
            "Webhook body must be an object with an 'events' list",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc


class WebhookProcessor:
    """Verifies, classifies and dispatches the events of a webhook batch."""

    def __init__(
        self,
        registry: EventRegistry,
        bus: Publisher,
        secret: str | None = None,
        audit_sink: PayloadSink | None = None,
    ) -> None:
        self.registry = registry
        self.bus = bus
        self.secret = secret
        self.audit_sink = audit_sink or NullPayloadSink()

    def process(self, body: bytes, signature: str | None) -> WebhookResult:
        """Handle one delivery.

        Raises:
            IntegrityViolation: The signature check failed; nothing was dispatched.
            MalformedPayload: The body could not be parsed; nothing was dispatched.
        """
        verify_signature(body, signature, self.secret)
        self.audit_sink.record(body)
        envelope = parse_envelope(body)

        result = WebhookResult()
        seen: set[str] = set()
        for index, raw in enumerate(envelope.events):
            event_id = _raw_id(raw)
            if event_id is not None and event_id in seen:
                logger.debug("Event %s already processed in this delivery", event_id)
                continue
            try:
                event = self.process_event(raw)
            except CashierError as exc:
                logger.error("Webhook event %s not processed: %s", event_id or f"#{index}", exc.message)
                result.failures.append(EventFailure(index=index, event_id=event_id, error=exc))
                continue
            seen.add(event.id)
            result.acknowledged.append(event.id)

        logger.info(
            "Webhook delivery processed",
            extra={"acknowledged": len(result.acknowledged), "failed": len(result.failures)},
        )
        return result

    def process_event(self, raw: Any) -> RawEvent:
        """Validate, classify and dispatch a single raw event."""
        try:
            event = RawEvent.model_validate(raw)
        except ValidationError as exc:
            raise MalformedPayload(
                "Webhook event is malformed",
                details=exc.errors(include_url=False, include_context=False),
            ) from exc

        classified = self.registry.classify(event.type)
        dispatch(event, classified, self.bus)
        return event


def _raw_id(raw: Any) -> str | None:
    if isinstance(raw, dict) and isinstance(raw.get("id"), str):
        return raw["id"]
    return None
