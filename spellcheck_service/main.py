"""
Main FastAPI application for the spell-check suggestion service.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI

from spellcheck_service.config import settings
from spellcheck_service.middleware.logging import RequestLoggingMiddleware
from spellcheck_service.routes import health, spellcheck
from spellcheck_service.services.spellcheck import get_spellcheck_client, initialize_spellcheck
from spellcheck_service.utils.logger import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Starts the spell-check worker if enabled and stops it on shutdown.
    """
    logger.info("Starting spell-check service")
    logger.info(f"Log level: {settings.LOG_LEVEL}")

    # Spellchecking is optional - the service runs without suggestions if it fails
    if settings.SPELLCHECK_ENABLED:
        if not await initialize_spellcheck():
            logger.warning("Spell-check failed to initialize (spell-check disabled)")
    else:
        logger.info("Spell-check disabled via configuration")

    yield

    logger.info("Shutting down spell-check service")
    await get_spellcheck_client().disable()


app = FastAPI(
    title="Spell-check Suggestion Service",
    description="Ranked spelling corrections from a word dictionary by edit distance",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router, tags=["Health"])
app.include_router(spellcheck.router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint redirect to docs."""
    return {
        "message": "Spell-check Suggestion Service",
        "docs": "/docs",
        "health": "/health"
    }


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "spellcheck_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
