"""Data models initialization."""
from georules.models.survey import GeologicalInput
from georules.models.rules import (
    Tier,
    DocumentClass,
    NormativeReference,
    RecommendedValue,
    InstructionVariant,
    InstructionBlock,
)
from georules.models.works import (
    WorkCategory,
    SurveyModule,
    WorkItem,
)
from georules.models.results import (
    EngineState,
    SkipReason,
    DiagnosticStage,
    RulesEngineConfig,
    AppliedBlock,
    SkippedBlock,
    RuleDiagnostic,
    Statistics,
    RulesEngineResult,
)
from georules.models.schemas import (
    HealthResponse,
    VariantSummary,
    BlockSummary,
    VariantOption,
    VariantChoiceValidation,
    VariantOptionsResponse,
    CatalogStatistics,
)

__all__ = [
    "GeologicalInput",
    "Tier",
    "DocumentClass",
    "NormativeReference",
    "RecommendedValue",
    "InstructionVariant",
    "InstructionBlock",
    "WorkCategory",
    "SurveyModule",
    "WorkItem",
    "EngineState",
    "SkipReason",
    "DiagnosticStage",
    "RulesEngineConfig",
    "AppliedBlock",
    "SkippedBlock",
    "RuleDiagnostic",
    "Statistics",
    "RulesEngineResult",
    "HealthResponse",
    "VariantSummary",
    "BlockSummary",
    "VariantOption",
    "VariantChoiceValidation",
    "VariantOptionsResponse",
    "CatalogStatistics",
]
