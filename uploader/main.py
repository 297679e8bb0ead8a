from contextlib import asynccontextmanager

from fastapi import FastAPI

from uploader.infrastructure.database import engine, initialize_database
from uploader.interfaces.api.dependencies import get_uploader_service
from uploader.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and check the upload configuration before serving requests."""

    initialize_database()
    uploader = app.dependency_overrides.get(get_uploader_service, get_uploader_service)
    uploader()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
