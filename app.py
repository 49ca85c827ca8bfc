"""
NLP Server - FastAPI application exposing the loaded NLP capabilities
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capabilities import CapabilityRegistry, build_registry
from config import Settings, settings
from error_handlers import register_exception_handlers
from logger import get_logger
from metrics import capability_keys
from middleware import RequestIDMiddleware
from resolver import Resolver
from routes import bind_routes

logger = get_logger(__name__)


def create_app(registry: CapabilityRegistry, app_settings: Optional[Settings] = None) -> FastAPI:
    """Create the application serving an already built registry"""
    app_settings = app_settings or settings
    commands = []

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle"""
        logger.info(f"{app_settings.app_name} {app_settings.version} started")
        yield
        for command in commands:
            command.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.version,
        lifespan=lifespan,
        docs_url="/api/docs" if app_settings.debug else None,
        redoc_url="/api/redoc" if app_settings.debug else None,
        openapi_url="/openapi.json" if app_settings.debug else None
    )

    app.add_middleware(RequestIDMiddleware)
    if app_settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"]
        )

    register_exception_handlers(app)

    resolver = Resolver(registry)
    commands.extend(bind_routes(app, registry, resolver, app_settings))

    # Single capabilities count as one key
    for name, keys in registry.key_sets().items():
        if keys is None:
            capability_keys.labels(name).set(0)
        else:
            capability_keys.labels(name).set(len(keys) or 1)

    app.state.registry = registry
    app.state.resolver = resolver
    return app


def build_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Load the configured capabilities and create the application"""
    app_settings = app_settings or settings
    return create_app(build_registry(app_settings), app_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        build_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
