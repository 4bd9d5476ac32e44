"""Sections 1-2: general provisions and reconnaissance."""
import math

from georules.knowledge.common import RULES_2020, SP_RK_102, SP_RK_105, numeric, ref, value, work
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_01 = "Раздел 1: Общие положения"
SECTION_02 = "Раздел 2: Рекогносцировка"


normative_base = InstructionBlock(
    id="block-01-01-normative-base",
    section=SECTION_01,
    title="Нормативная база изысканий",
    description="Перечень нормативных документов, на основании которых выполняются изыскания",
    priority=1,
    tags=("общие", "нормативы"),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 1-5"),
            recommendation="Изыскания выполняются по Правилам осуществления ИГИ РК (2020), "
                           "СП РК 1.02-102-2014 и СП РК 1.02-105-2014",
            recommended_values={
                "documents": value([RULES_2020, SP_RK_102, SP_RK_105], explanation="Основные нормативы"),
            },
        ),
    ),
)


def _stage_values(p):
    coefficient = 0.7 if p.design_stage == "ТЭО" else 1.0
    return {
        "densityCoefficient": value(
            coefficient,
            explanation="Коэффициент густоты сети выработок для стадии проектирования",
            confidence=90,
        ),
    }


design_stage = InstructionBlock(
    id="block-01-02-design-stage",
    section=SECTION_01,
    title="Стадия проектирования",
    description="Состав и объём изысканий в зависимости от стадии проектирования",
    priority=2,
    tags=("общие", "стадия"),
    condition=lambda p: bool(p.design_stage),
    variants=(
        InstructionVariant(
            id="variant-feasibility",
            normative=ref(SP_RK_102, "п. 4.12"),
            recommendation="На стадии ТЭО допускается разреженная сеть выработок",
            condition=lambda p: p.design_stage == "ТЭО",
            recommended_values={"densityCoefficient": value(0.7)},
        ),
        InstructionVariant(
            id="variant-design",
            normative=ref(SP_RK_102, "п. 4.13"),
            recommendation="На стадиях Проект и РД сеть выработок принимается в полном объёме",
            condition=lambda p: p.design_stage != "ТЭО",
            recommended_values={"densityCoefficient": value(1.0)},
        ),
    ),
    calculate_values=_stage_values,
)


_RESPONSIBILITY_FACTORS = {
    "I": 1.2,
    "повышенная": 1.2,
    "II": 1.0,
    "нормальная": 1.0,
    "III": 0.85,
    "пониженная": 0.85,
}

responsibility_level = InstructionBlock(
    id="block-01-03-responsibility-level",
    section=SECTION_01,
    title="Уровень ответственности сооружения",
    description="Учёт уровня ответственности при назначении объёмов работ",
    priority=3,
    tags=("общие", "ответственность"),
    condition=lambda p: p.responsibility_level is not None,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 12"),
            recommendation="Объёмы работ корректируются по уровню ответственности сооружения",
        ),
    ),
    calculate_values=lambda p: {
        "volumeFactor": value(
            _RESPONSIBILITY_FACTORS.get(p.responsibility_level, 1.0),
            explanation=f"Уровень ответственности {p.responsibility_level}",
        ),
    },
)


reconnaissance = InstructionBlock(
    id="block-02-01-reconnaissance",
    section=SECTION_02,
    title="Рекогносцировочное обследование",
    description="Осмотр территории перед началом полевых работ",
    priority=5,
    tags=("рекогносцировка", "полевые"),
    condition=lambda p: not p.existing_data,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.2"),
            recommendation="Выполнить рекогносцировочное обследование территории изысканий",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "RECON-001",
            "Рекогносцировочное обследование территории",
            1,
            "объект",
            v,
            tags=("рекогносцировка",),
        ),
    ],
)


def _routes_length(p) -> float:
    length = 0.0
    if p.building_area:
        length = p.building_area / 1_000_000 * 20
    if p.linear_length:
        length = p.linear_length * 1.2
    return round(length, 1)


def _route_values(p):
    length = _routes_length(p)
    points = math.ceil(length * 4)
    return {
        "routesLength": value(length, "км", "Общая протяжённость маршрутов", confidence=85),
        "observationPoints": value(points, "точек", "4 точки наблюдений на 1 км"),
        "samplingPoints": value(math.ceil(points * 0.3), "точек", "Отбор проб в 30% точек"),
    }


route_observations = InstructionBlock(
    id="block-02-02-route-observations",
    section=SECTION_02,
    title="Маршрутные наблюдения",
    description="Маршрутные наблюдения для крупных площадных и протяжённых линейных объектов",
    priority=6,
    tags=("рекогносцировка", "маршруты"),
    dependencies=("block-02-01-reconnaissance",),
    condition=lambda p: (p.building_area or 0) > 50000 or (p.linear_length or 0) > 5,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.3", Tier.RECOMMENDED),
            recommendation="Маршрутные наблюдения с составлением инженерно-геологической карты",
            condition=lambda p: not p.existing_data,
            recommended_values={"pointsPerKm": value(4, "точек/км")},
        ),
    ),
    calculate_values=_route_values,
    generate_works=lambda p, v: [
        work(
            "ROUTE-001",
            "Маршрутные наблюдения с составлением инженерно-геологической карты",
            _routes_length(p),
            "км маршрутов",
            v,
            category=WorkCategory.RECOMMENDED,
            description=f"{numeric(v, 'pointsPerKm', 4):g} точки наблюдений на 1 км",
            tags=("рекогносцировка", "маршруты"),
        ),
    ],
)


BLOCKS = (
    normative_base,
    design_stage,
    responsibility_level,
    reconnaissance,
    route_observations,
)
