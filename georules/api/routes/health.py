"""Health check endpoints."""
from fastapi import APIRouter

from georules.models import HealthResponse
from georules.services import get_block_catalog, get_rules_engine
from georules.services.errors import ConfigurationError
from georules.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint.

    Returns:
        HealthResponse with the state of the knowledge base and the engine
    """
    logger.info("Performing health check")

    services_status = {
        "knowledge_base": False,
        "rules_engine": False,
    }

    services_status["knowledge_base"] = get_block_catalog().get_statistics().total_blocks > 0

    try:
        get_rules_engine()
        services_status["rules_engine"] = True
    except ConfigurationError as e:
        logger.error("Rules engine health check error", block_id=e.block_id, error=e.message)

    all_healthy = all(services_status.values())
    status = "healthy" if all_healthy else "degraded"

    logger.info("Health check completed", status=status, services=services_status)

    return HealthResponse(
        status=status,
        services=services_status
    )
