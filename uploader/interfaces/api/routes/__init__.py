from fastapi import FastAPI

from .uploads import router as uploads_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(uploads_router)
