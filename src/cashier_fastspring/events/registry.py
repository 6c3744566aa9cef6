"""Registry of event variants and classification of FastSpring event types.

Every webhook event is published under three names:

* ``Any`` for every event,
* a category variant such as ``OrderAny`` built from the first segment of the type,
* an activity variant such as ``OrderCompleted`` built from the whole type.

An event is only dispatched when both its category and activity variants are
registered.
"""

import re
from dataclasses import dataclass

from cashier_fastspring.errors.exceptions import UnknownEventType

ANY = "Any"
CATEGORY_SUFFIX = "Any"

# Event types FastSpring delivers by webhook
FASTSPRING_EVENT_TYPES = (
    "account.created",
    "account.updated",
    "fulfillment.failed",
    "mailingListEntry.removed",
    "mailingListEntry.updated",
    "order.approval.pending",
    "order.canceled",
    "order.completed",
    "order.failed",
    "order.payment.pending",
    "payoutEntry.created",
    "return.created",
    "subscription.activated",
    "subscription.canceled",
    "subscription.charge.completed",
    "subscription.charge.failed",
    "subscription.deactivated",
    "subscription.payment.overdue",
    "subscription.payment.reminder",
    "subscription.trial.reminder",
    "subscription.uncanceled",
    "subscription.updated",
)

_WORD_SEPARATORS = re.compile(r"[\s_\-]+")


def studly(value: str) -> str:
    """Convert ``"order completed"`` to ``"OrderCompleted"``.

    Only the first letter of each word is upper-cased, so camel-cased words
    keep their inner capitals (``mailingListEntry`` -> ``MailingListEntry``).
    """
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SEPARATORS.split(value) if word)


def category_name(event_type: str) -> str:
    return studly(event_type.split(".", 1)[0]) + CATEGORY_SUFFIX


def activity_name(event_type: str) -> str:
    return studly(event_type.replace(".", " "))


@dataclass(frozen=True)
class ClassifiedEvent:
    """Variant names selected for one event type."""

    category: str
    activity: str


class EventRegistry:
    """Set of variant names that may be published on the bus."""

    def __init__(self, event_types=()) -> None:
        self._variants: set[str] = {ANY}
        for event_type in event_types:
            self.register(event_type)

    def register(self, event_type: str) -> None:
        """Register an event type together with its category variant."""
        self._variants.add(category_name(event_type))
        self._variants.add(activity_name(event_type))

    def register_variant(self, name: str) -> None:
        self._variants.add(name)

    def __contains__(self, name: str) -> bool:
        return name in self._variants

    def variants(self) -> list[str]:
        return sorted(self._variants)

    def classify(self, event_type: str) -> ClassifiedEvent:
        """Resolve the category and activity variants of ``event_type``.

        Raises:
            UnknownEventType: Either variant is not registered.
        """
        classified = ClassifiedEvent(
            category=category_name(event_type),
            activity=activity_name(event_type),
        )
        if classified.category not in self or classified.activity not in self:
            raise UnknownEventType(event_type)
        return classified


def default_registry() -> EventRegistry:
    """Return a registry holding every FastSpring webhook event type."""
    return EventRegistry(FASTSPRING_EVENT_TYPES)
