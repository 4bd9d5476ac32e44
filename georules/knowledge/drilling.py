"""Section 5: exploration drilling for areal objects."""
import math

from georules.knowledge.common import (
    PILE_FOUNDATIONS,
    RULES_2020,
    SP_RK_105,
    estimate_wells,
    geotechnical_category,
    grid_wells,
    numeric,
    ref,
    responsibility,
    value,
    work,
)
from georules.knowledge.categories import geotechnical_I, geotechnical_II
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_05 = "Раздел 5: Буровые работы"

GOST_12071 = "ГОСТ 12071-2014"

_NUMERALS = {"I": 1, "II": 2, "III": 3}


def _spacing_variant(variant_id, document, clause, spacing_min, spacing_max, min_wells):
    return InstructionVariant(
        id=variant_id,
        normative=ref(document, clause),
        recommendation=f"Расстояние между выработками {spacing_min}-{spacing_max} м, "
                       f"не менее {min_wells} выработок",
        recommended_values={
            "spacingMin": value(spacing_min, "м"),
            "spacingMax": value(spacing_max, "м"),
            "minWells": value(min_wells, "скв"),
        },
    )


def _grid_drilling(category: str, level: str):
    def generate(p, v):
        spacing = numeric(v, "spacingMax", 75)
        wells = grid_wells(p, spacing, numeric(v, "minWells", 3))
        return [
            work(
                f"drilling-grid-cat{_NUMERALS[category]}-resp{_NUMERALS[level]}",
                "Бурение скважин по сетке",
                wells,
                "скв",
                v,
                description=f"Бурение {wells} скважин с расстоянием {spacing:g} м",
                tags=("бурение", f"категория-{category}", f"ответственность-{level}"),
                price_table_code="1602-0201",
            ),
        ]
    return generate


def _spacing_block(number, category_block, category, level, variants) -> InstructionBlock:
    return InstructionBlock(
        id=f"block-05-{number:02d}-spacing-cat{_NUMERALS[category]}-resp{_NUMERALS[level]}",
        section=SECTION_05,
        title=f"Расстояние между выработками (геотехн. кат. {category}, ответственность {level})",
        description="Определение расстояния между буровыми выработками и их количества",
        priority=49 + number,
        tags=("площадной", "бурение", "расстояние", f"категория-{category}", f"ответственность-{level}"),
        dependencies=(category_block.id,),
        condition=lambda p: (
            p.object_type == "площадной"
            and geotechnical_category(p) == category
            and responsibility(p) == level
        ),
        variants=variants,
        generate_works=_grid_drilling(category, level),
    )


spacing_cat1_resp1 = _spacing_block(1, geotechnical_I, "I", "I", (
    _spacing_variant("variant-sp-rk-105", SP_RK_105, "Таблица 1", 50, 75, 3),
    _spacing_variant("variant-rules-2020", RULES_2020, "п. 15", 40, 75, 3),
))
spacing_cat1_resp2 = _spacing_block(2, geotechnical_I, "I", "II", (
    _spacing_variant("variant-sp-rk-105", SP_RK_105, "Таблица 1", 75, 100, 3),
))
spacing_cat1_resp3 = _spacing_block(3, geotechnical_I, "I", "III", (
    _spacing_variant("variant-sp-rk-105", SP_RK_105, "Таблица 1, п. 3", 100, 150, 2),
))
spacing_cat2_resp1 = _spacing_block(4, geotechnical_II, "II", "I", (
    _spacing_variant("variant-sp-rk-105", SP_RK_105, "Таблица 1, п. 4", 30, 50, 4),
    _spacing_variant("variant-rules-2020", RULES_2020, "п. 16", 25, 40, 4),
))
spacing_cat2_resp2 = _spacing_block(5, geotechnical_II, "II", "II", (
    _spacing_variant("variant-sp-rk-105", SP_RK_105, "Таблица 1, п. 5", 50, 75, 3),
))
spacing_cat2_resp3 = _spacing_block(6, geotechnical_II, "II", "III", (
    _spacing_variant("variant-sp-rk-105", SP_RK_105, "Таблица 1, п. 6", 75, 100, 2),
))


def _depth_block(block_id, priority, title, condition, clause, recommendation, formula, depth) -> InstructionBlock:
    return InstructionBlock(
        id=block_id,
        section=SECTION_05,
        title=title,
        description="Назначение глубины буровых выработок по типу фундамента",
        priority=priority,
        tags=("бурение", "глубина"),
        condition=condition,
        variants=(
            InstructionVariant(
                id="variant-sp-rk-105",
                normative=ref(SP_RK_105, clause),
                recommendation=recommendation,
            ),
        ),
        calculate_values=lambda p: {
            "wellDepth": value(round(depth(p), 1), "м", "Рекомендуемая глубина скважин", formula=formula),
        },
    )


depth_piles = _depth_block(
    "block-05-07-depth-piles", 56, "Глубина скважин для свайных фундаментов",
    lambda p: p.foundation_type in PILE_FOUNDATIONS,
    "п. 4.8",
    "Глубина скважин на 5 м ниже проектируемой глубины погружения свай",
    "H = L + 5 м",
    lambda p: (p.pile_length or 10) + 5,
)
depth_plate = _depth_block(
    "block-05-08-depth-plate", 57, "Глубина скважин для плитных фундаментов",
    lambda p: p.foundation_type in ("плитный", "свайно-плитный"),
    "п. 4.7",
    "Глубина скважин: 2B + 5 м, где B - ширина фундамента",
    "H = 2B + 5 м",
    lambda p: 2 * (p.foundation_width or 10) + 5,
)
depth_strip = _depth_block(
    "block-05-09-depth-strip", 58, "Глубина скважин для ленточных фундаментов",
    lambda p: p.foundation_type == "ленточный",
    "п. 4.7",
    "Глубина скважин: 3B + 5 м, где B - ширина фундамента",
    "H = 3B + 5 м",
    lambda p: 3 * (p.foundation_width or 2) + 5,
)
depth_columnar = _depth_block(
    "block-05-10-depth-columnar", 59, "Глубина скважин для столбчатых фундаментов",
    lambda p: p.foundation_type == "столбчатый",
    "п. 4.7",
    "Глубина скважин: на 3 м ниже подошвы фундамента",
    "H = d + 3 м",
    lambda p: (p.foundation_depth or 2) + 3,
)


well_diameter = InstructionBlock(
    id="block-05-11-well-diameter",
    section=SECTION_05,
    title="Диаметр буровых скважин",
    description="Диаметр скважин в зависимости от способа отбора образцов",
    priority=61,
    tags=("бурение", "диаметр"),
    condition=lambda p: geotechnical_category(p) is not None,
    variants=(
        InstructionVariant(
            id="variant-undisturbed",
            normative=ref(GOST_12071, "п. 5.3"),
            recommendation="Диаметр не менее 168 мм для отбора монолитов",
            condition=lambda p: geotechnical_category(p) in ("II", "III"),
            recommended_values={"diameter": value(168, "мм"), "samplingMethod": value("монолиты")},
        ),
        InstructionVariant(
            id="variant-disturbed",
            normative=ref(GOST_12071, "п. 5.2"),
            recommendation="Диаметр 127 мм для отбора проб нарушенного сложения",
            condition=lambda p: geotechnical_category(p) == "I",
            recommended_values={"diameter": value(127, "мм"), "samplingMethod": value("нарушенные пробы")},
        ),
    ),
)


special_soils_wells = InstructionBlock(
    id="block-05-13-special-soils-wells",
    section=SECTION_05,
    title="Дополнительные скважины для специфических грунтов",
    description="Увеличение объёма бурения при наличии специфических грунтов",
    priority=66,
    tags=("специфические-грунты", "дополнительные-скважины"),
    condition=lambda p: bool(p.special_soils),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-105",
            normative=ref(SP_RK_105, "п. 5.11"),
            recommendation="Увеличение количества скважин на 25-30% при специфических грунтах",
            recommended_values={"increase": value(0.3, explanation="Доля дополнительных скважин")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "additional-wells-special-soils",
            "Дополнительные скважины для изучения специфических грунтов",
            math.ceil((p.calculated_wells or 10) * numeric(v, "increase", 0.3)),
            "скв",
            v,
            tags=("специфические-грунты",),
            price_table_code="1602-0201",
        ),
    ],
)


hazards_wells = InstructionBlock(
    id="block-05-14-hazards-wells",
    section=SECTION_05,
    title="Дополнительные скважины для изучения опасных процессов",
    description="Бурение в зонах развития опасных геологических процессов",
    priority=67,
    tags=("опасные-процессы", "дополнительные-скважины"),
    condition=lambda p: bool(p.hazards),
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 28"),
            recommendation="Не менее 3 скважин на каждый выявленный опасный процесс",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "additional-wells-hazards",
            "Дополнительные скважины в зонах опасных процессов",
            3 * len(p.hazards),
            "скв",
            v,
            description=f"По 3 скважины на процесс: {', '.join(p.hazards)}",
            tags=("опасные-процессы",),
            price_table_code="1602-0201",
        ),
    ],
)


control_wells = InstructionBlock(
    id="block-05-15-control-wells",
    section=SECTION_05,
    title="Контрольные скважины",
    description="Контрольные выработки для проверки инженерно-геологического разреза",
    priority=68,
    tags=("бурение", "контроль"),
    condition=lambda p: (
        geotechnical_category(p) == "III"
        or (responsibility(p) == "I" and geotechnical_category(p) == "II")
    ),
    variants=(
        InstructionVariant(
            id="variant-reference-control",
            normative=ref(SP_RK_105, "п. 4.15", Tier.REFERENCE),
            recommendation="10% контрольных скважин от общего количества",
            promote_to_works=True,
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "control-wells",
            "Контрольные скважины",
            max(1, math.ceil(estimate_wells(p) * 0.1)),
            "скв",
            v,
            category=WorkCategory.OPTIONAL,
            tags=("контроль",),
        ),
    ],
)


BLOCKS = (
    spacing_cat1_resp1,
    spacing_cat1_resp2,
    spacing_cat1_resp3,
    spacing_cat2_resp1,
    spacing_cat2_resp2,
    spacing_cat2_resp3,
    depth_piles,
    depth_plate,
    depth_strip,
    depth_columnar,
    well_diameter,
    special_soils_wells,
    hazards_wells,
    control_wells,
)
