"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from georules.config import settings
from georules.services import ConfigurationError, get_block_catalog, get_rules_engine
from georules.utils.logging import setup_logging, get_logger
from georules.api.routes import health, rules, blocks

# Setup logging before anything else
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Loads the knowledge base and validates it once before serving. A broken
    registry is logged and left to the health endpoint to report.
    """
    logger.info("Starting application", environment=settings.environment)

    stats = get_block_catalog().get_statistics()
    logger.info(
        "Knowledge base loaded",
        total_blocks=stats.total_blocks,
        total_variants=stats.total_variants,
        sections=len(stats.blocks_by_section),
        work_generating_blocks=stats.work_generating_blocks,
    )
    try:
        engine = get_rules_engine()
        logger.info(
            "Rules engine ready",
            max_dependency_depth=engine.config.max_dependency_depth,
            include_reference_blocks=engine.config.include_reference_blocks,
        )
    except ConfigurationError as e:
        logger.error("Knowledge base failed validation", block_id=e.block_id, error=e.message)

    yield
    logger.info("Shutting down application")


# Create FastAPI application
app = FastAPI(
    title="Geo Survey Rules API",
    description="Rules engine deriving engineering-geological survey works from project parameters",
    version=settings.api_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(
    rules.router,
    prefix=f"/api/{settings.api_version}",
    tags=["Rules"]
)
app.include_router(
    blocks.router,
    prefix=f"/api/{settings.api_version}",
    tags=["Blocks"]
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Geo Survey Rules API",
        "version": settings.api_version,
        "environment": settings.environment,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "georules.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
        log_level=settings.log_level.lower(),
    )
