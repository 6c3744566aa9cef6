"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from cashier_fastspring import __version__
from cashier_fastspring.config import Settings, settings
from cashier_fastspring.events.bus import Publisher, event_bus
from cashier_fastspring.events.registry import EventRegistry, default_registry
from cashier_fastspring.logging_config import configure_logging
from cashier_fastspring.webhooks.audit import sink_from_directory
from cashier_fastspring.webhooks.processor import WebhookProcessor

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


def build_webhook_processor(
    config: Settings,
    registry: EventRegistry | None = None,
    bus: Publisher | None = None,
) -> WebhookProcessor:
    """Wire the webhook processor from configuration."""
    if not config.verification_enabled:
        logger.warning("FASTSPRING_HMAC_SECRET not set, webhook signatures will not be verified")
    return WebhookProcessor(
        registry=registry or default_registry(),
        bus=bus or event_bus,
        secret=config.hmac_secret,
        audit_sink=sink_from_directory(config.payload_audit_dir),
    )


def create_app(
    config: Settings | None = None,
    registry: EventRegistry | None = None,
    bus: Publisher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or settings
    app = FastAPI(
        title="Cashier FastSpring",
        version=__version__,
        description="FastSpring billing integration: webhook ingestion and subscription sessions.",
    )

    app.state.settings = config
    app.state.webhook_processor = build_webhook_processor(config, registry, bus)

    # Add middleware (order matters: last added = first executed)
    from cashier_fastspring.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    # Register error handlers
    from cashier_fastspring.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    # Import and mount routers
    from cashier_fastspring.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
