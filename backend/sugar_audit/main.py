"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router
from .services import supported_claims
from .config import get_settings
from . import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    # Startup
    logger.info("Starting Sugar Audit API...")
    settings = get_settings()
    logger.info(
        f"Thresholds: sugar>={settings.sugar_present_threshold}g, "
        f"polyols>={settings.polyol_present_threshold}g, "
        f"negation window={settings.negation_window_chars} chars"
    )
    logger.info(f"{len(supported_claims())} claim rules loaded")
    logger.info(f"API ready - Version {__version__}")

    yield

    # Shutdown
    logger.info("Shutting down Sugar Audit API...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
## Packaged-Food Label Sugar Audit API

This API reads the OCR text of a food label and checks it for hidden sugar
and for misleading marketing claims.

### Features
- **Zone Scoping**: Isolate the nutrition table and ingredients list from marketing copy
- **Nutrient Extraction**: Read sugar, polyols, fat, protein, carbs, energy and more, tolerating OCR errors
- **Ingredient Classification**: Find sugar aliases, sweeteners and fats, honouring "no added" / "free from"
- **Claim Verification**: Check claims like "No added sugar" or "High protein" against thresholds
- **Batch Processing**: Analyze many products from a CSV file

### Quick Start
1. Use `/health` to check API status
2. Use `/analyze` with OCR lines to analyze a label
3. Use `/claims` to list the claims that can be verified
4. Use `/sweeteners` for sweetener intake limits and gut effects
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Include routes
    app.include_router(router, prefix="/api/v1")

    # Root redirect to docs
    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "Sugar Audit API",
            "version": __version__,
            "docs": "/docs"
        }

    return app


# Create app instance
app = create_app()
