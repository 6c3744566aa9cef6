"""Health check endpoints."""

from fastapi import APIRouter, Request

from cashier_fastspring import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": "cashier-fastspring", "version": __version__}


@router.get("/health/webhooks")
async def webhook_status(request: Request):
    """Report how incoming webhooks are handled, without exposing secrets."""
    config = request.app.state.settings
    processor = request.app.state.webhook_processor
    return {
        "signature_verification": config.verification_enabled,
        "audit_trail": bool(config.payload_audit_dir),
        "registered_variants": len(processor.registry.variants()),
    }
