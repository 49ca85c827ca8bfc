"""
System routes: health check and metrics
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import BaseModel

from capabilities import CapabilityRegistry
from config import Settings
from metrics import get_metrics


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    capabilities: Dict[str, Optional[List[str]]]


def build_router(registry: CapabilityRegistry, app_settings: Settings) -> APIRouter:
    router = APIRouter(tags=["System"])

    @router.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint listing the keys loaded for each capability"""
        return HealthResponse(
            status="healthy",
            version=app_settings.version,
            timestamp=datetime.now(timezone.utc).isoformat(),
            capabilities=registry.key_sets()
        )

    if app_settings.enable_metrics:
        @router.get("/metrics")
        async def metrics():
            """Prometheus metrics endpoint"""
            return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)

    return router
