"""Taskhub ASGI application.

create_app() wires settings, error handlers, middleware and the v1 router;
behaviour lives in the use cases behind app.api.v1.dependencies. Settings are
read when create_app() runs, so tests can set the environment first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import RequestIDMiddleware, TimeoutMiddleware


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: timeout wraps request id, which wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Tasks with trash/restore, direct messages and notification inbox.",
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.limiter = limiter
    register_exception_handlers(app)
    _add_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
