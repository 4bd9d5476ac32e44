"""Priority resolver - picks the winning variant of a block.

Variants are ranked by tier first (MANDATORY > RECOMMENDED > REFERENCE) and by
the class of their normative document second. Equal variants keep their
declaration order.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from georules.models import (
    DocumentClass,
    GeologicalInput,
    InstructionBlock,
    InstructionVariant,
    NormativeReference,
    Tier,
    VariantChoiceValidation,
    VariantOption,
)
from georules.services.condition_evaluator import get_applicable_variants

# Checked in order, the first marker found in the document title wins
_DOCUMENT_MARKERS: Tuple[Tuple[str, DocumentClass], ...] = (
    ("Правила осуществления", DocumentClass.RULES),
    ("СН РК", DocumentClass.STATE_NORMS),
    ("СП РК", DocumentClass.BUILDING_CODE),
    ("СТ РК", DocumentClass.STATE_STANDARD),
    ("ГОСТ", DocumentClass.GOST),
    ("ВСН", DocumentClass.INDUSTRY_NORMS),
)

_TIER_WEIGHTS: Dict[Tier, int] = {
    Tier.MANDATORY: 100,
    Tier.RECOMMENDED: 50,
    Tier.REFERENCE: 10,
}

_TIER_LABELS: Dict[Tier, str] = {
    Tier.MANDATORY: "Обязательный",
    Tier.RECOMMENDED: "Рекомендуемый",
    Tier.REFERENCE: "Справочный",
}


@dataclass(frozen=True)
class VariantSelection:
    """Winning variant of a block together with the variants it beat."""
    variant: InstructionVariant
    tier: Tier
    document_class: DocumentClass
    reason: str
    alternatives: Tuple[InstructionVariant, ...] = ()


@dataclass(frozen=True)
class VariantComparison:
    """Outcome of comparing two variants."""
    winner: InstructionVariant
    reason: str
    tier_difference: int
    document_difference: int


def classify_document(document: str) -> DocumentClass:
    """Map a normative document title to its document class."""
    for marker, document_class in _DOCUMENT_MARKERS:
        if marker in document:
            return document_class
    return DocumentClass.UNCLASSIFIED


def document_class_of(normative: NormativeReference) -> DocumentClass:
    """Document class of a reference, honouring an explicit classification."""
    return normative.document_class or classify_document(normative.document)


def _priority_key(variant: InstructionVariant) -> Tuple[int, int]:
    return variant.tier.rank, document_class_of(variant.normative).rank


def sort_variants_by_priority(variants: Sequence[InstructionVariant]) -> Tuple[InstructionVariant, ...]:
    """Order variants from the most to the least authoritative (stable)."""
    return tuple(sorted(variants, key=_priority_key))


def get_variants_by_tier(variants: Sequence[InstructionVariant], tier: Tier) -> Tuple[InstructionVariant, ...]:
    """Filter variants to a single tier, preserving declaration order."""
    return tuple(v for v in variants if v.tier == tier)


def select_best_variant(variants: Sequence[InstructionVariant]) -> Optional[VariantSelection]:
    """Select the winning variant among the applicable ones.

    Args:
        variants: Applicable variants in declaration order

    Returns:
        VariantSelection, or None when no variant applies
    """
    if not variants:
        return None

    if len(variants) == 1:
        only = variants[0]
        return VariantSelection(
            variant=only,
            tier=only.tier,
            document_class=document_class_of(only.normative),
            reason="only applicable variant",
        )

    ranked = sort_variants_by_priority(variants)
    best, runner_up = ranked[0], ranked[1]

    if best.tier != runner_up.tier:
        reason = f"highest tier ({best.tier.value})"
    elif _priority_key(best) != _priority_key(runner_up):
        reason = f"{best.tier.value} tier, governing document {best.normative.document}"
    else:
        reason = f"{best.tier.value} tier, first declared of equal priority"

    return VariantSelection(
        variant=best,
        tier=best.tier,
        document_class=document_class_of(best.normative),
        reason=reason,
        alternatives=ranked[1:],
    )


def compare_variants(first: InstructionVariant, second: InstructionVariant) -> VariantComparison:
    """Compare two variants; on equal priority the first one wins."""
    first_tier, first_doc = _priority_key(first)
    second_tier, second_doc = _priority_key(second)

    if first_tier != second_tier:
        winner = first if first_tier < second_tier else second
        reason = f"tier {winner.tier.value} outranks"
    elif first_doc != second_doc:
        winner = first if first_doc < second_doc else second
        reason = f"document {winner.normative.document} outranks"
    else:
        winner = first
        reason = "equal priority"

    return VariantComparison(
        winner=winner,
        reason=reason,
        tier_difference=abs(first_tier - second_tier),
        document_difference=abs(first_doc - second_doc),
    )


def variant_score(variant: InstructionVariant) -> int:
    """Numeric preference of a variant, consistent with the priority order."""
    level = document_class_of(variant.normative).rank
    return _TIER_WEIGHTS[variant.tier] * 10 + (100 - level)


def prepare_variant_options(variants: Sequence[InstructionVariant]) -> List[VariantOption]:
    """Rank variants for a manual choice.

    Args:
        variants: Applicable variants in declaration order

    Returns:
        Options in priority order; the first one is what automatic selection picks
    """
    options = []
    for index, variant in enumerate(sort_variants_by_priority(variants)):
        description = f"{_TIER_LABELS[variant.tier]}: {variant.normative.citation}"
        if variant.note:
            description = f"{description}. {variant.note}"
        options.append(VariantOption(
            variant_id=variant.id,
            rank=index + 1,
            score=variant_score(variant),
            tier=variant.tier,
            document_class=document_class_of(variant.normative),
            is_recommended=index == 0,
            description=description,
        ))
    return options


def validate_variant_choice(
    block: InstructionBlock,
    variant_id: str,
    project: GeologicalInput,
) -> VariantChoiceValidation:
    """Check a manually chosen variant against the project.

    An unknown or inapplicable variant is invalid. A valid choice that is
    outranked by another applicable variant carries a warning.
    """
    chosen = block.get_variant(variant_id)
    if chosen is None:
        return VariantChoiceValidation(
            valid=False,
            warnings=[f"Variant '{variant_id}' is not defined for block '{block.id}'"],
        )

    applicable = get_applicable_variants(block, project).variants
    if chosen not in applicable:
        return VariantChoiceValidation(
            valid=False,
            warnings=[f"Variant '{variant_id}' does not apply to this project"],
        )

    warnings: List[str] = []
    best = select_best_variant(applicable)
    if best is not None and best.variant.id != chosen.id:
        comparison = compare_variants(best.variant, chosen)
        if comparison.tier_difference:
            warnings.append(
                f"Variant '{best.variant.id}' of tier {best.tier.value} is available "
                f"under {best.variant.normative.citation}"
            )
        elif comparison.document_difference:
            warnings.append(
                f"Variant '{best.variant.id}' is based on a governing document "
                f"{best.variant.normative.document}"
            )
    warnings.extend(chosen.warnings)

    return VariantChoiceValidation(valid=True, warnings=warnings)
