"""Instruction block model: blocks, variants and their normative references."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from georules.models.survey import GeologicalInput


class Tier(str, Enum):
    """Priority tier of a normative requirement, strictest first."""
    MANDATORY = "mandatory"
    RECOMMENDED = "recommended"
    REFERENCE = "reference"

    @property
    def rank(self) -> int:
        """Position in the tier hierarchy (0 is the strictest)."""
        return _TIER_ORDER.index(self)


_TIER_ORDER = (Tier.MANDATORY, Tier.RECOMMENDED, Tier.REFERENCE)


class DocumentClass(str, Enum):
    """Class of a normative document, highest precedence first."""
    RULES = "rules"
    STATE_NORMS = "state_norms"
    BUILDING_CODE = "building_code"
    STATE_STANDARD = "state_standard"
    GOST = "gost"
    INDUSTRY_NORMS = "industry_norms"
    UNCLASSIFIED = "unclassified"

    @property
    def rank(self) -> int:
        """Precedence level, 1 for the governing rules and 99 for unknown documents."""
        return _DOCUMENT_LEVELS[self]


_DOCUMENT_LEVELS = {
    DocumentClass.RULES: 1,
    DocumentClass.STATE_NORMS: 2,
    DocumentClass.BUILDING_CODE: 3,
    DocumentClass.STATE_STANDARD: 4,
    DocumentClass.GOST: 5,
    DocumentClass.INDUSTRY_NORMS: 6,
    DocumentClass.UNCLASSIFIED: 99,
}


class NormativeReference(BaseModel):
    """Citation of the regulatory provision a variant is based on."""
    model_config = ConfigDict(frozen=True)

    document: str = Field(..., description="Normative document title, e.g. 'СП РК 1.02-105-2014'")
    section: str = Field(..., description="Clause or section within the document")
    tier: Tier = Field(..., description="Priority tier of the provision")
    document_class: Optional[DocumentClass] = Field(
        None, description="Explicit document class; classified from the title when omitted"
    )

    @property
    def citation(self) -> str:
        """Human readable citation."""
        return f"{self.document}, {self.section}"


class RecommendedValue(BaseModel):
    """A recommended parameter value with its bounds and derivation."""
    model_config = ConfigDict(frozen=True)

    value: Union[float, str, List[str]] = Field(..., description="Recommended value")
    min: Optional[float] = Field(None, description="Lower bound")
    max: Optional[float] = Field(None, description="Upper bound")
    unit: Optional[str] = Field(None, description="Unit of measurement")
    formula: Optional[str] = Field(None, description="Formula the value is derived from")
    explanation: Optional[str] = Field(None, description="How the value was obtained")
    confidence: Optional[int] = Field(None, ge=0, le=100, description="Confidence in percent")


Condition = Callable[[GeologicalInput], bool]


@dataclass(frozen=True)
class InstructionVariant:
    """One regulatory option of a block.

    The variant tier is the tier of its normative reference. A REFERENCE variant
    contributes billable work only when ``promote_to_works`` is set.
    """
    id: str
    normative: NormativeReference
    recommendation: str
    recommended_values: Mapping[str, RecommendedValue] = field(default_factory=dict)
    condition: Optional[Condition] = None
    note: Optional[str] = None
    warnings: Tuple[str, ...] = ()
    promote_to_works: bool = False

    @property
    def tier(self) -> Tier:
        return self.normative.tier


@dataclass(frozen=True)
class InstructionBlock:
    """A unit of survey knowledge: applicability predicate, variants and work rules.

    ``generate_works`` receives the project input and the variant chosen by the
    priority resolver. ``dependencies`` are block ids that must be ordered
    before this block; ``conflicts`` are block ids that exclude it once applied.
    """
    id: str
    section: str
    title: str
    description: str
    priority: int
    condition: Condition
    variants: Tuple[InstructionVariant, ...]
    tags: Tuple[str, ...] = ()
    dependencies: Tuple[str, ...] = ()
    conflicts: Tuple[str, ...] = ()
    calculate_values: Optional[Callable[[GeologicalInput], Dict[str, RecommendedValue]]] = None
    generate_works: Optional[Callable[[GeologicalInput, InstructionVariant], list]] = None

    def get_variant(self, variant_id: str) -> Optional[InstructionVariant]:
        """Get a variant of this block by its ID."""
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None
