"""Pydantic models for inbound FastSpring webhook deliveries."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawEvent(BaseModel):
    """A single event as delivered by FastSpring."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1)
    type: str
    live: bool = False
    processed: bool = False
    created: int | float | str | None = None
    # Opaque; forwarded to subscribers as delivered
    data: Any = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def type_has_category(cls, value: str) -> str:
        if not value.split(".")[0].strip():
            raise ValueError("event type must start with a category segment")
        return value

    def as_tuple(self) -> tuple:
        """Return the ``(id, type, live, processed, created, data)`` tuple carried by every notification."""
        return (self.id, self.type, self.live, self.processed, self.created, self.data)


class WebhookEnvelope(BaseModel):
    """Body of one webhook call.

    Events are kept as raw mappings; each one is validated on its own so that
    a single malformed event does not reject its siblings.
    """

    model_config = ConfigDict(extra="ignore")

    events: list[Any]
