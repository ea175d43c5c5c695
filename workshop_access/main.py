"""ASGI entry point: `uvicorn workshop_access.main:app`.

Wiring only. Services are built in core.lifespan; error mapping lives in
core.exception_handlers. Settings are read inside create_app() so tests
can adjust the environment first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workshop_access.api.v1.router import api_router
from workshop_access.core.config import Settings, get_settings
from workshop_access.core.exception_handlers import register_exception_handlers
from workshop_access.core.lifespan import create_lifespan


def _cors_origins(settings: Settings) -> list[str]:
    return [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Build the FastAPI application with the permission and role routers."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*", settings.actor_header_name],
    )
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
