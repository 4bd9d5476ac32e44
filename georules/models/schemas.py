"""Pydantic models for API requests and responses."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from georules.models.rules import DocumentClass, Tier


class HealthResponse(BaseModel):
    """Health check response."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Overall health status")
    services: Dict[str, bool] = Field(..., description="Status of individual services")


class VariantSummary(BaseModel):
    """Public description of an instruction variant."""
    id: str
    tier: Tier
    normative: str = Field(..., description="Normative citation")
    recommendation: str
    conditional: bool = Field(..., description="Whether the variant has its own applicability condition")
    promote_to_works: bool = False


class BlockSummary(BaseModel):
    """Public description of an instruction block."""
    id: str
    section: str
    title: str
    description: str
    priority: int
    tags: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)
    generates_works: bool = Field(..., description="Whether the block can emit work items")
    variants: List[VariantSummary] = Field(default_factory=list)


class VariantOption(BaseModel):
    """A ranked variant offered for manual choice."""
    variant_id: str
    rank: int = Field(..., description="1-based position after priority ordering")
    score: int = Field(..., description="Higher is preferred")
    tier: Tier
    document_class: DocumentClass
    is_recommended: bool = Field(..., description="Whether automatic selection would pick this variant")
    description: str


class VariantChoiceValidation(BaseModel):
    """Outcome of validating a manually chosen variant."""
    valid: bool
    warnings: List[str] = Field(default_factory=list)


class VariantOptionsResponse(BaseModel):
    """Ranked options of a block for a given project input."""
    block_id: str
    applicable: bool = Field(..., description="Whether the block condition holds for the input")
    options: List[VariantOption] = Field(default_factory=list)
    choice: Optional[VariantChoiceValidation] = Field(None, description="Validation of the requested choice, if any")


class CatalogStatistics(BaseModel):
    """Knowledge base statistics."""
    total_blocks: int
    total_variants: int
    blocks_by_section: Dict[str, int] = Field(default_factory=dict)
    variants_by_tier: Dict[str, int] = Field(default_factory=dict)
    mandatory_blocks: int = Field(..., description="Blocks with at least one MANDATORY variant")
    work_generating_blocks: int
    tags: List[str] = Field(default_factory=list)
