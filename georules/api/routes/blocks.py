"""Instruction block endpoints - read access to the knowledge base."""
from fastapi import APIRouter, HTTPException, Query
from typing import List, Optional

from georules.models import BlockSummary, CatalogStatistics, GeologicalInput, VariantOptionsResponse
from georules.services import get_block_catalog
from georules.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/blocks")


@router.get("", response_model=List[BlockSummary])
async def list_blocks(
    tag: Optional[str] = Query(None, description="Only blocks carrying this tag"),
    min_priority: Optional[int] = Query(None, description="Only blocks with priority >= this value"),
):
    """List instruction blocks in registry order."""
    catalog = get_block_catalog()
    blocks = catalog.get_blocks_by_tag(tag) if tag else list(catalog.blocks)
    if min_priority is not None:
        blocks = [block for block in blocks if block.priority >= min_priority]
    return [catalog.summarize(block) for block in blocks]


@router.get("/statistics", response_model=CatalogStatistics)
async def get_statistics():
    """Knowledge base statistics."""
    return get_block_catalog().get_statistics()


@router.get("/{block_id}", response_model=BlockSummary)
async def get_block(block_id: str):
    """Get one instruction block.

    Args:
        block_id: Block identifier

    Returns:
        BlockSummary

    Raises:
        HTTPException: If the block is unknown
    """
    catalog = get_block_catalog()
    block = catalog.get_block_by_id(block_id)
    if block is None:
        raise HTTPException(status_code=404, detail=f"Block {block_id} not found")
    return catalog.summarize(block)


@router.post("/{block_id}/variants", response_model=VariantOptionsResponse)
async def get_variant_options(
    block_id: str,
    project: GeologicalInput,
    variant_id: Optional[str] = Query(None, description="Manual choice to validate"),
):
    """Rank the variants of a block for a project and validate a manual choice.

    Args:
        block_id: Block identifier
        project: Project input
        variant_id: Optional variant the user intends to pick

    Returns:
        VariantOptionsResponse with ranked options
    """
    catalog = get_block_catalog()
    block = catalog.get_block_by_id(block_id)
    if block is None:
        raise HTTPException(status_code=404, detail=f"Block {block_id} not found")

    logger.info("Preparing variant options", block_id=block_id, variant_id=variant_id)
    return catalog.variant_options(block, project, variant_id)
