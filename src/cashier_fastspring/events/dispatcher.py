"""Publishes classified webhook events on the event bus."""

import logging

from cashier_fastspring.errors.exceptions import DispatchFailure
from cashier_fastspring.events.bus import Publisher
from cashier_fastspring.events.registry import ANY, ClassifiedEvent
from cashier_fastspring.models.webhook import RawEvent

logger = logging.getLogger(__name__)


def dispatch(event: RawEvent, classified: ClassifiedEvent, bus: Publisher) -> None:
    """Publish ``Any``, then the category variant, then the activity variant.

    Raises:
        DispatchFailure: A subscriber raised; earlier notifications are not rolled back.
    """
    for kind in (ANY, classified.category, classified.activity):
        try:
            bus.publish(kind, event)
        except Exception as exc:
            raise DispatchFailure(event.id, kind, str(exc) or type(exc).__name__) from exc
    logger.debug("Dispatched event %s as %s/%s", event.id, classified.category, classified.activity)
