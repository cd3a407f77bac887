from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tailorbook.api.v1.api import api_router
from tailorbook.core.config import Settings, get_settings
from tailorbook.core.errors import register_exception_handlers
from tailorbook.core.logging import configure_logging
from tailorbook.db.session import init_db, make_engine, open_ssh_tunnel


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicit Settings value.

    The settings and the database engine live on ``app.state``; nothing is
    read from process-wide globals once the app exists. Serve it with
    ``uvicorn tailorbook.main:create_app --factory``.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    tunnel = open_ssh_tunnel(settings) if settings.USE_SSH else None
    engine = make_engine(settings, tunnel)
    if settings.AUTO_CREATE_TABLES:
        init_db(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        engine.dispose()
        if tunnel is not None:
            tunnel.stop()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # The mobile client connects from arbitrary device hosts
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app
