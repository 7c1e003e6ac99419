import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from phrasebook.config import get_app_settings
from phrasebook.db import get_settings, initialize_storage, close_client, storage_status
from phrasebook.errors import unhandled_exception_handler
from phrasebook.routers import (
    export_router,
    phrases_router,
    review_router,
    stats_router,
    tags_router,
    translate_router,
)
from phrasebook.translation import get_translation_settings

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()

    if settings.is_configured():
        try:
            initialize_storage()
            logger.info("Connected to Cosmos DB database %s", settings.database_name)
        except Exception:
            logger.exception("Failed to initialize Cosmos DB - check configuration")
    else:
        logger.warning("Cosmos DB not configured (COSMOS_ENDPOINT/COSMOS_EMULATOR not set)")

    if not get_translation_settings().is_configured():
        logger.warning("DEEPSEEK_API_KEY not set - /translate and /expand will return 503")

    yield

    # Shutdown
    close_client()
    logger.info("Cosmos DB connection closed")


app = FastAPI(
    title="Phrasebook API",
    description="Translate phrases, save them with tags and review them with spaced repetition",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(Exception, unhandled_exception_handler)

# Include routers
app.include_router(translate_router)
app.include_router(phrases_router)
app.include_router(tags_router)
app.include_router(review_router)
app.include_router(stats_router)
app.include_router(export_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Phrasebook API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "translate": "/translate",
            "expand": "/expand",
            "phrases": "/phrases",
            "tags": "/tags",
            "review": "/review/due-cards",
            "stats": "/stats/review",
            "export": "/export/anki",
        },
    }


@app.get("/healthz")
def healthz():
    """Health check endpoint; also reports whether Cosmos DB answers."""
    return {"status": "healthy", "storage": storage_status()}
