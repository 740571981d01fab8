"""
Recipe Capture Web API - FastAPI application.

Stateless: every request parses its own input. The optional category image
library is the only thing attached to the app.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_capture import __version__
from recipe_capture.config import settings
from recipe_capture.recipe_import import CategoryImageLibrary
from recipe_capture.web.routes import router as recipe_router

logger = logging.getLogger(__name__)


def create_app(category_images: CategoryImageLibrary | None = None) -> FastAPI:
    """Build the FastAPI app."""
    app = FastAPI(title="Recipe Capture", version=__version__)
    app.state.category_images = category_images

    if settings.is_development:
        # CORS for the frontend dev server
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                "http://localhost:5173",  # Vite dev server
                "http://127.0.0.1:5173",
            ],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(recipe_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    logger.info(f"Recipe Capture API ready (environment: {settings.environment})")
    return app
