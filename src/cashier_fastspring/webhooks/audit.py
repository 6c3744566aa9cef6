"""Sinks that keep a copy of raw webhook bodies for debugging.

The file sink is write-only: there is no read path and no rotation, so the
directory grows with every delivery.
"""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class PayloadSink(Protocol):
    def record(self, body: bytes) -> None: ...


class NullPayloadSink:
    """Discards payloads."""

    def record(self, body: bytes) -> None:
        return None


class FilePayloadSink:
    """Writes each body verbatim to ``<directory>/payload.<timestamp>.<nonce>.json``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, received_at: datetime, nonce: str) -> Path:
        return self.directory / f"payload.{received_at:%Y%m%dT%H%M%S%f}.{nonce}.json"

    def record(self, body: bytes) -> None:
        path = self.path_for(datetime.now(timezone.utc), uuid.uuid4().hex[:8])
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)
        except OSError as exc:
            logger.warning("Failed to write webhook payload to %s: %s", path, exc)


def sink_from_directory(directory: str | None) -> PayloadSink:
    """Return a file sink for ``directory``, or a null sink when it is empty."""
    if not directory:
        return NullPayloadSink()
    return FilePayloadSink(directory)
