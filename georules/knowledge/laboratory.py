"""Section 9: laboratory testing of soils."""
import math

from georules.knowledge.common import SP_RK_102, SP_RK_104, geotechnical_category, layers_count, ref, value, work
from georules.models import InstructionBlock, InstructionVariant

SECTION_09 = "Раздел 9: Лабораторные исследования"

_SAMPLES_PER_LAYER = {"I": 6, "II": 10, "III": 15}


general_determinations = InstructionBlock(
    id="block-09-01-laboratory-general",
    section=SECTION_09,
    title="Общие требования к лабораторным исследованиям",
    description="Комплекс определений физических свойств грунтов по каждому слою",
    priority=90,
    tags=("лаборатория", "физические-свойства"),
    condition=lambda p: bool(p.lithologic_layers or p.expected_ige),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.1"),
            recommendation="Не менее 6 определений физических свойств для каждого слоя",
            recommended_values={"determinationsPerLayer": value(6, "определений")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-general-determinations",
            "Определение физических свойств грунтов",
            layers_count(p) * 6,
            "определение",
            v,
            tags=("лаборатория",),
            price_table_code="1602-0701",
        ),
    ],
)


def _samples_per_layer(p) -> int:
    samples = _SAMPLES_PER_LAYER.get(geotechnical_category(p), 6)
    if p.soil_heterogeneity == "высокая":
        samples = math.ceil(samples * 1.5)
    return samples


sample_quantity = InstructionBlock(
    id="block-09-02-laboratory-sample-quantity",
    section=SECTION_09,
    title="Количество образцов для лабораторных испытаний",
    description="Количество образцов на слой по геотехнической категории",
    priority=91,
    tags=("лаборатория", "образцы"),
    condition=lambda p: geotechnical_category(p) is not None,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.3"),
            recommendation="6, 10 или 15 образцов на слой для I, II и III категорий; "
                           "в 1,5 раза больше при высокой неоднородности",
        ),
    ),
    calculate_values=lambda p: {
        "samplesPerLayer": value(_samples_per_layer(p), "образцов", "Образцов на один слой"),
    },
    generate_works=lambda p, v: [
        work(
            "lab-samples-collection",
            "Отбор образцов грунта для лабораторных испытаний",
            layers_count(p) * _samples_per_layer(p),
            "образец",
            v,
            tags=("лаборатория", "образцы"),
        ),
    ],
)


compression_tests = InstructionBlock(
    id="block-09-07-compression-tests",
    section=SECTION_09,
    title="Компрессионные испытания",
    description="Определение деформационных характеристик грунтов",
    priority=96,
    tags=("лаборатория", "деформационные-свойства"),
    condition=lambda p: geotechnical_category(p) in ("II", "III"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.8"),
            recommendation="Компрессионные испытания по каждому слою, вдвое больше для III категории",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-compression-tests",
            "Компрессионные испытания грунтов",
            layers_count(p) * (2 if geotechnical_category(p) == "III" else 1),
            "испытание",
            v,
            tags=("лаборатория", "компрессия"),
            price_table_code="1602-0702",
        ),
    ],
)


shear_tests = InstructionBlock(
    id="block-09-08-shear-tests",
    section=SECTION_09,
    title="Испытания на срез",
    description="Определение прочностных характеристик грунтов",
    priority=97,
    tags=("лаборатория", "прочностные-свойства"),
    condition=lambda p: geotechnical_category(p) in ("II", "III"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.9"),
            recommendation="Испытания на срез: 2 серии на слой, 3 серии для III категории",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-shear-tests",
            "Испытания грунтов на срез",
            layers_count(p) * (3 if geotechnical_category(p) == "III" else 2),
            "испытание",
            v,
            tags=("лаборатория", "срез"),
            price_table_code="1602-0703",
        ),
    ],
)


dynamic_tests = InstructionBlock(
    id="block-09-11-dynamic-tests",
    section=SECTION_09,
    title="Динамические испытания грунтов",
    description="Лабораторные испытания грунтов на динамические нагрузки в сейсмических районах",
    priority=100,
    tags=("лаборатория", "сейсмика"),
    condition=lambda p: (p.seismicity or 0) >= 7,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-104",
            normative=ref(SP_RK_104, "п. 8.2"),
            recommendation="Динамические испытания по одному на каждый слой при сейсмичности 7 баллов и более",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-dynamic-tests",
            "Динамические испытания грунтов",
            layers_count(p),
            "испытание",
            v,
            tags=("лаборатория", "сейсмика"),
        ),
    ],
)


BLOCKS = (
    general_determinations,
    sample_quantity,
    compression_tests,
    shear_tests,
    dynamic_tests,
)
