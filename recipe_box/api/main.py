"""
FastAPI application for Recipe Box.

Serves recipe browsing, scaling and shopping list endpoints over the
JSON dataset. Run with:

    uvicorn recipe_box.api.main:app --reload --port 8080
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import get_settings
from ..data.database import RecipeStore
from ..errors import DatasetError
from ..service import RecipeService
from .routes import cache, recipes, shop

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Preloads the dataset so the first request does not pay for the read.
    A missing dataset is logged, not fatal; requests will report it.
    """
    logger.info("Starting Recipe Box API...")
    try:
        app.state.store.get_data()
    except DatasetError as e:
        logger.warning(f"Dataset preload failed: {e}")

    yield

    logger.info("Recipe Box API shutdown complete")


def create_app(store: Optional[RecipeStore] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        store: Dataset store to serve; defaults to one built from settings
    """
    app = FastAPI(
        title="Recipe Box API",
        description="Recipe browsing, scaling and shopping lists",
        version="1.0.0",
        lifespan=lifespan,
    )

    if store is None:
        store = RecipeStore(
            data_path=settings.data_path,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    app.state.store = store
    app.state.service = RecipeService(store, max_servings=settings.max_servings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.get("/api/health")
    def health_check():
        """Health check endpoint for load balancers."""
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(recipes.router, prefix="/api", tags=["recipes"])
    app.include_router(shop.router, prefix="/api", tags=["shopping"])
    app.include_router(cache.router, prefix="/api", tags=["cache"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recipe_box.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
