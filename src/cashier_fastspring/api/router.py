"""Master API router mounted at /api/v1."""

from fastapi import APIRouter
from cashier_fastspring.api.routes import (
    health,
    webhooks,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(webhooks.router)
