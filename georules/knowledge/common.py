"""Helpers shared by the knowledge base sections."""
import math
from typing import Iterable, Optional, Union

from georules.models import (
    GeologicalInput,
    InstructionVariant,
    NormativeReference,
    RecommendedValue,
    SurveyModule,
    Tier,
    WorkCategory,
    WorkItem,
)

# Frequently cited documents
RULES_2020 = "Правила осуществления инженерно-геологических изысканий РК"
SP_RK_102 = "СП РК 1.02-102-2014"
SP_RK_104 = "СП РК 1.02-104-2014"
SP_RK_105 = "СП РК 1.02-105-2014"

PILE_FOUNDATIONS = ("свайный", "свайно-плитный")

# Base wells per hectare and minimum wells by geotechnical category
_WELLS_PER_HA = {"I": 3, "II": 5, "III": 8}
_MIN_WELLS = {"I": 3, "II": 5, "III": 6}
_CATEGORY_ORDER = {"I": 1, "II": 2, "III": 3}


def ref(document: str, section: str, tier: Tier = Tier.MANDATORY) -> NormativeReference:
    return NormativeReference(document=document, section=section, tier=tier)


def value(
    amount: Union[float, str, list],
    unit: Optional[str] = None,
    explanation: Optional[str] = None,
    **extra,
) -> RecommendedValue:
    return RecommendedValue(value=amount, unit=unit, explanation=explanation, **extra)


def numeric(variant: InstructionVariant, name: str, default: float) -> float:
    """Numeric recommended value of a variant, or ``default`` when absent."""
    recommended = variant.recommended_values.get(name)
    if recommended is None or not isinstance(recommended.value, (int, float)):
        return default
    return recommended.value


def work(
    work_id: str,
    name: str,
    quantity: float,
    unit: str,
    variant: InstructionVariant,
    category: WorkCategory = WorkCategory.MANDATORY,
    module: SurveyModule = SurveyModule.GEOLOGICAL,
    description: Optional[str] = None,
    tags: Iterable[str] = (),
    price_table_code: Optional[str] = None,
) -> WorkItem:
    """Build a work item citing the chosen variant."""
    return WorkItem(
        work_id=work_id,
        name=name,
        quantity=quantity,
        unit=unit,
        category=category,
        module=module,
        normative_base=variant.normative.citation,
        description=description,
        tags=tuple(tags),
        price_table_code=price_table_code,
    )


def contains_any(values: Iterable[str], *fragments: str) -> bool:
    """Case-insensitive check that any value contains any of the fragments."""
    return any(f in v.lower() for v in values for f in fragments)


def layers_count(project: GeologicalInput) -> int:
    """Number of lithologic layers, falling back to expected elements, at least one."""
    return project.lithologic_layers or project.expected_ige or 1


def aquifers(project: GeologicalInput) -> int:
    return project.aquifer_count or 1


def complexity_category(project: GeologicalInput) -> Optional[str]:
    """Complexity category of engineering-geological conditions.

    Uses the declared category, otherwise derives it from the number of layers,
    aquifers, hazards and specific soils. Geomorphology raises the result: the
    geomorphological category and mountainous terrain set a lower bound.
    Returns None when nothing is known.
    """
    if project.complexity_category:
        return project.complexity_category

    layers = project.lithologic_layers
    water = project.aquifer_count
    derived = None
    if layers is not None or water is not None or project.hazards or project.special_soils:
        if (layers or 0) > 4 or (water or 0) > 3 or len(project.hazards) > 1:
            derived = "III"
        elif (layers or 0) == 4 or (water or 0) >= 2 or project.hazards or project.special_soils:
            derived = "II"
        else:
            derived = "I"

    relief = project.geomorphological_category
    if relief not in _CATEGORY_ORDER:
        relief = None
    if project.terrain and contains_any((project.terrain,), "горн") and relief in (None, "I"):
        relief = "II"
    candidates = [c for c in (derived, relief) if c is not None]
    if not candidates:
        return None
    return max(candidates, key=_CATEGORY_ORDER.get)


def geotechnical_category(project: GeologicalInput) -> Optional[str]:
    """Geotechnical category of the object.

    Uses the declared category, otherwise derives it from the responsibility
    level and the complexity category.
    """
    if project.geotechnical_category:
        return project.geotechnical_category

    complexity = complexity_category(project)
    level = responsibility(project)
    if complexity is None or level is None:
        return None
    if complexity == "III" or (level == "I" and complexity == "II"):
        return "III"
    if complexity == "II" or level == "I":
        return "II"
    return "I"


def estimate_wells(project: GeologicalInput) -> int:
    """Exploration wells estimate by site area and geotechnical category."""
    if project.calculated_wells:
        return project.calculated_wells
    category = geotechnical_category(project) or "II"
    area = project.area_size or 1
    return max(math.ceil(area * _WELLS_PER_HA.get(category, 5)), _MIN_WELLS.get(category, 5))


def grid_wells(project: GeologicalInput, spacing: float, min_wells: float) -> int:
    """Wells needed to cover the site with a square grid of the given spacing."""
    side = math.sqrt((project.area_size or 1) * 10000)
    return int(max(min_wells, math.ceil((side / spacing) ** 2)))


_RESPONSIBILITY_LEVELS = {
    "повышенная": "I",
    "нормальная": "II",
    "пониженная": "III",
}


def responsibility(project: GeologicalInput) -> Optional[str]:
    """Responsibility level as a roman numeral."""
    level = project.responsibility_level
    return _RESPONSIBILITY_LEVELS.get(level, level)
