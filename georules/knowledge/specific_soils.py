"""Sections 12, 40 and 41: specific soils."""
from georules.knowledge.common import SP_RK_102, contains_any, ref, value, work
from georules.models import InstructionBlock, InstructionVariant

SECTION_12 = "Раздел 12: Специфические грунты"
SECTION_40 = "Раздел 40: Просадочные грунты"
SECTION_41 = "Раздел 41: Набухающие грунты"


saline_soils = InstructionBlock(
    id="block-12-03-saline-soils",
    section=SECTION_12,
    title="Засолённые грунты",
    description="Определение степени и характера засоления грунтов",
    priority=122,
    tags=("специфические-грунты", "засолённые"),
    condition=lambda p: contains_any(p.special_soils, "засолен"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 9.6"),
            recommendation="Определение содержания легко- и среднерастворимых солей по каждому слою",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "SPEC-SALINE-01",
            "Определение степени засолённости грунтов",
            (p.expected_ige or 2) * 6,
            "определение",
            v,
            tags=("засолённые",),
        ),
    ],
)


organic_soils = InstructionBlock(
    id="block-12-04-organic-soils",
    section=SECTION_12,
    title="Заторфованные и органо-минеральные грунты",
    description="Определение содержания органических веществ и степени разложения",
    priority=123,
    tags=("специфические-грунты", "органические"),
    condition=lambda p: contains_any(p.special_soils, "заторфован", "органо-минеральн", "торф"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 9.8"),
            recommendation="Определение относительного содержания органического вещества по каждому слою",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "SPEC-ORGANIC-01",
            "Определение содержания органических веществ",
            (p.expected_ige or 2) * 3,
            "определение",
            v,
            tags=("органические",),
        ),
    ],
)


def _is_subsiding(p) -> bool:
    return (
        contains_any(p.soil_types, "лессов", "просадоч")
        or contains_any(p.special_soils, "лессов", "просадоч")
    )


def _subsidence_values(p):
    return {
        "laboratoryTests": value((p.expected_ige or 2) * 6, "испытаний", "6 испытаний на слой просадочных грунтов"),
        "stampTests": value(2, "штампа", "Штамповые испытания с замачиванием"),
    }


subsidence = InstructionBlock(
    id="block-40-01-subsidence-identification",
    section=SECTION_40,
    title="Исследования просадочных грунтов",
    description="Определение относительной просадочности и начального просадочного давления",
    priority=26,
    tags=("специфические-грунты", "просадочные"),
    condition=_is_subsiding,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-5-01",
            normative=ref("СП РК 5.01-103-2013", "Просадочные грунты"),
            recommendation="Компрессионно-просадочные испытания и штамповые испытания с замачиванием",
        ),
    ),
    calculate_values=_subsidence_values,
    generate_works=lambda p, v: [
        work(
            "SPEC-SUBSID-01",
            "Компрессионно-просадочные испытания грунтов",
            (p.expected_ige or 2) * 6,
            "испытание",
            v,
            tags=("просадочные",),
            price_table_code="1602-0708",
        ),
        work(
            "SPEC-SUBSID-02",
            "Штамповые испытания просадочных грунтов с замачиванием",
            2,
            "испытание",
            v,
            tags=("просадочные", "штамп"),
            price_table_code="1602-0403",
        ),
    ],
)


def _is_swelling(p) -> bool:
    clayey = contains_any(p.soil_types, "глинист", "глина")
    return clayey and (
        contains_any(p.special_soils, "набухающ")
        or contains_any(p.soil_types, "набухающ")
    )


swelling = InstructionBlock(
    id="block-41-01-swelling-identification",
    section=SECTION_41,
    title="Исследования набухающих грунтов",
    description="Определение относительного набухания и давления набухания",
    priority=27,
    tags=("специфические-грунты", "набухающие"),
    condition=_is_swelling,
    variants=(
        InstructionVariant(
            id="variant-gost-12248",
            normative=ref("ГОСТ 12248-2010", "Набухание"),
            recommendation="6 испытаний на набухание по каждому слою и 3 определения давления набухания",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "SPEC-SWELL-01",
            "Определение относительного набухания грунтов",
            (p.expected_ige or 2) * 6,
            "испытание",
            v,
            tags=("набухающие",),
            price_table_code="1602-0709",
        ),
        work(
            "SPEC-SWELL-02",
            "Определение давления набухания",
            3,
            "определение",
            v,
            tags=("набухающие",),
            price_table_code="1602-0710",
        ),
    ],
)


BLOCKS = (
    subsidence,
    swelling,
    saline_soils,
    organic_soils,
)
