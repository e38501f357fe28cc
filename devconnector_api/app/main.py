"""
ASGI application for the DevConnector API.

``create_app`` wires logging, the v1 routers, the 400 field-error
handler for unparseable bodies and the Mongo startup/shutdown hooks.
The module-level ``app`` is what uvicorn serves::

    uvicorn devconnector_api.app.main:app --reload

Routes are served under ``/api/v1`` and, for the web client which has
always called ``/api/...``, under ``/api`` as well.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .core.config import settings
from .core.db import close_db, init_db
from .core.logging_config import setup_logging
from .api.v1.errors import request_validation_handler
from .api.v1.router import router as v1_router


def create_app() -> FastAPI:
    """Build the API application.

    The Mongo client is not touched here; ``init_db`` runs on startup, so
    tests can install their own client with ``core.db.set_client`` first.
    """
    # Handlers are attached once per process; later calls are no-ops.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(v1_router, prefix="/api", include_in_schema=False)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        # Indexes back the one-profile-per-user rule and the post listing.
        await init_db()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        close_db()

    return app


app = create_app()
