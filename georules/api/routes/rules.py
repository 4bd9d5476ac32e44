"""Rules engine endpoints."""
from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from georules.knowledge import ALL_INSTRUCTION_BLOCKS
from georules.models import GeologicalInput, RulesEngineConfig, RulesEngineResult
from georules.services import ConfigurationError, RulesEngine, get_rules_engine
from georules.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/rules")


@router.post("/run", response_model=RulesEngineResult)
async def run_rules(
    project: GeologicalInput,
    include_reference_blocks: Optional[bool] = Query(
        None, description="Override whether REFERENCE-tier blocks are kept"
    ),
):
    """Evaluate the knowledge base against project parameters.

    Args:
        project: Project input (camelCase or snake_case keys)
        include_reference_blocks: Optional override of the engine default

    Returns:
        RulesEngineResult with applied blocks, works and statistics

    Raises:
        HTTPException: If the knowledge base is misconfigured
    """
    logger.info("Received rules run request", project_name=project.project_name)

    try:
        if include_reference_blocks is None:
            engine = get_rules_engine()
        else:
            engine = RulesEngine(
                ALL_INSTRUCTION_BLOCKS,
                RulesEngineConfig(include_reference_blocks=include_reference_blocks),
            )
        return engine.run(project)
    except ConfigurationError as e:
        logger.error("Rules run failed", block_id=e.block_id, error=e.message)
        raise HTTPException(status_code=500, detail=f"Knowledge base error: {e}")
