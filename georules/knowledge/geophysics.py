"""Section 14: geophysical investigations."""
import math

from georules.knowledge.common import SP_RK_102, contains_any, estimate_wells, geotechnical_category, ref, value, work
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_14 = "Раздел 14: Геофизические исследования"

HYDRAULIC_SUBTYPE = "гидротехнический"

# Vertical electrical sounding points per km2 by geotechnical category
_VES_DENSITY = {"I": 10, "II": 20, "III": 30}


def _ves_points(p) -> int:
    density = _VES_DENSITY.get(geotechnical_category(p), 20)
    return max(5, math.ceil((p.area_size or 1) / 100 * density))


electrical_survey = InstructionBlock(
    id="block-14-01-electrical-survey",
    section=SECTION_14,
    title="Электроразведка",
    description="Вертикальное электрическое зондирование и электропрофилирование",
    priority=140,
    tags=("геофизика", "электроразведка"),
    condition=lambda p: contains_any(p.geophysics_methods, "вэз", "электр"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 6.12"),
            recommendation="ВЭЗ с плотностью 10-30 точек на км² в зависимости от категории сложности",
            recommended_values={"methods": value(["ВЭЗ", "электропрофилирование"], "методы")},
        ),
    ),
    calculate_values=lambda p: {
        "vesPoints": value(_ves_points(p), "точек", "Плотность точек ВЭЗ по категории"),
    },
    generate_works=lambda p, v: [
        work(
            "geophysics-ves",
            "Вертикальное электрическое зондирование",
            _ves_points(p),
            "точка",
            v,
            tags=("геофизика", "ВЭЗ"),
        ),
        work(
            "geophysics-profiling",
            "Электропрофилирование",
            1,
            "комплекс",
            v,
            category=WorkCategory.RECOMMENDED,
            tags=("геофизика",),
        ),
    ],
)


def _seismic_works(p, v):
    works = [
        work(
            "geophysics-seismic-refraction",
            "Сейсморазведка методом преломлённых волн",
            1,
            "комплекс",
            v,
            tags=("геофизика", "сейсморазведка"),
        ),
        work(
            "geophysics-seismic-logging",
            "Сейсмокаротаж скважин",
            min(3, estimate_wells(p)),
            "скв",
            v,
            tags=("геофизика", "каротаж"),
        ),
    ]
    if v.id == "variant-vsn-34":
        works.append(work(
            "geophysics-dam-seismic",
            "Сейсмические исследования по створу плотины",
            1,
            "створ",
            v,
            tags=("геофизика", "гидротехнические"),
        ))
    return works


seismic_survey = InstructionBlock(
    id="block-14-02-seismic-survey",
    section=SECTION_14,
    title="Сейсморазведка и сейсмокаротаж",
    description="Определение скоростей упругих волн для сейсмического микрорайонирования",
    priority=141,
    tags=("геофизика", "сейсморазведка"),
    condition=lambda p: contains_any(p.geophysics_methods, "сейсм", "каротаж"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 6.13"),
            recommendation="Сейсморазведка и сейсмокаротаж не менее 3 скважин",
            condition=lambda p: p.object_subtype != HYDRAULIC_SUBTYPE,
        ),
        InstructionVariant(
            id="variant-vsn-34",
            normative=ref("ВСН 34.2-88", "п. 3.5"),
            recommendation="Для гидротехнических сооружений дополнительно сейсмические исследования по створу",
            condition=lambda p: p.object_subtype == HYDRAULIC_SUBTYPE,
        ),
    ),
    generate_works=_seismic_works,
)


georadar_survey = InstructionBlock(
    id="block-14-03-georadar-survey",
    section=SECTION_14,
    title="Георадарное обследование",
    description="Георадиолокационное зондирование для выявления неоднородностей и коммуникаций",
    priority=142,
    tags=("геофизика", "георадар"),
    condition=lambda p: contains_any(p.geophysics_methods, "георадар", "gpr"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 6.14", Tier.RECOMMENDED),
            recommendation="Георадарное профилирование с глубинностью до 10 м",
            recommended_values={"depth": value(10, "м")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "geophysics-georadar",
            "Георадарное обследование",
            1,
            "комплекс",
            v,
            category=WorkCategory.RECOMMENDED,
            tags=("геофизика", "георадар"),
        ),
    ],
)


BLOCKS = (
    electrical_survey,
    seismic_survey,
    georadar_survey,
)
