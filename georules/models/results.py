"""Rules engine configuration and result models."""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from georules.config import settings
from georules.models.rules import RecommendedValue, Tier
from georules.models.survey import GeologicalInput
from georules.models.works import WorkItem


class EngineState(str, Enum):
    """Step of a rules engine run."""
    IDLE = "idle"
    FILTERING = "filtering"
    ORDERING = "ordering"
    RESOLVING = "resolving"
    GENERATING = "generating"
    AGGREGATING = "aggregating"
    DONE = "done"
    ERROR = "error"


class SkipReason(str, Enum):
    """Why a block did not make it into the result."""
    CONDITION = "condition"
    NO_VARIANTS = "no_variants"
    CONFLICT = "conflict"
    REFERENCE_EXCLUDED = "reference_excluded"
    RULE_ERROR = "rule_error"


class DiagnosticStage(str, Enum):
    """Rule function that raised while a block was being evaluated."""
    CONDITION = "condition"
    VARIANT_CONDITION = "variant_condition"
    CALCULATE_VALUES = "calculate_values"
    GENERATE_WORKS = "generate_works"


class RulesEngineConfig(BaseModel):
    """Options of a rules engine run. Defaults come from application settings."""
    auto_select_variant: bool = Field(
        default_factory=lambda: settings.engine_auto_select_variant,
        description="Pick the best variant by priority; otherwise the first applicable one",
    )
    include_reference_blocks: bool = Field(
        default_factory=lambda: settings.engine_include_reference_blocks,
        description="Keep blocks whose winning variant is of REFERENCE tier",
    )
    verbose_logging: bool = Field(
        default_factory=lambda: settings.engine_verbose_logging,
        description="Log per-block decisions at info level",
    )
    max_dependency_depth: int = Field(
        default_factory=lambda: settings.engine_max_dependency_depth,
        ge=1,
        description="Maximum length of a dependency chain",
    )
    variant_overrides: Dict[str, str] = Field(
        default_factory=dict,
        description="Manually chosen variant IDs keyed by block ID",
    )


class AppliedBlock(BaseModel):
    """Audit record of a block that was applied."""
    block_id: str
    section: str
    title: str
    variant_id: str
    tier: Tier
    normative: str = Field(..., description="Citation of the chosen variant")
    recommendation: str
    alternatives: int = Field(0, description="Number of other applicable variants")
    calculated_values: Dict[str, RecommendedValue] = Field(default_factory=dict)
    work_ids: List[str] = Field(default_factory=list, description="Works the block emitted, before merging")


class SkippedBlock(BaseModel):
    """A block that was evaluated but not applied."""
    block_id: str
    reason: SkipReason
    details: Optional[str] = None


class RuleDiagnostic(BaseModel):
    """A rule function failure recovered by the engine."""
    block_id: str
    stage: DiagnosticStage
    error_type: str
    message: str
    variant_id: Optional[str] = None


class Statistics(BaseModel):
    """Summary counts of a run."""
    total_blocks_evaluated: int = 0
    blocks_applied: int = 0
    blocks_skipped: int = 0
    total_works: int = 0
    mandatory_works: int = 0
    recommended_works: int = 0
    optional_works: int = 0
    works_by_module: Dict[str, int] = Field(default_factory=dict)
    quantities_by_module: Dict[str, Dict[str, float]] = Field(
        default_factory=dict, description="Total quantity per module and unit"
    )


class RulesEngineResult(BaseModel):
    """Outcome of a rules engine run."""
    model_config = ConfigDict(frozen=True)

    input: GeologicalInput
    applied_blocks: List[AppliedBlock] = Field(default_factory=list)
    works: List[WorkItem] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)
    skipped_blocks: List[SkippedBlock] = Field(default_factory=list)
    diagnostics: List[RuleDiagnostic] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)

    def get_work(self, work_id: str) -> Optional[WorkItem]:
        """Get a work item by its ID."""
        for work in self.works:
            if work.work_id == work_id:
                return work
        return None

    def get_applied_block(self, block_id: str) -> Optional[AppliedBlock]:
        """Get the audit record of an applied block."""
        for applied in self.applied_blocks:
            if applied.block_id == block_id:
                return applied
        return None
