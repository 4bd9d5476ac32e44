"""Sections 36-37: chemical composition of soils and groundwater."""
from georules.knowledge.common import aquifers, ref, value, work
from georules.models import InstructionBlock, InstructionVariant

SECTION_36 = "Раздел 36: Химический состав грунтов"
SECTION_37 = "Раздел 37: Химический анализ подземных вод"


def _water_extract_count(p) -> int:
    return (p.expected_ige or 3) * 2 + 2


water_extract = InstructionBlock(
    id="block-36-01-water-extract",
    section=SECTION_36,
    title="Химический анализ водной вытяжки из грунтов",
    description="Оценка агрессивности грунтов к бетону и арматуре",
    priority=20,
    tags=("лаборатория", "химия", "агрессивность"),
    condition=lambda p: p.foundation_type in ("свайный", "ленточный", "плитный") or bool(p.has_basement),
    variants=(
        InstructionVariant(
            id="variant-gost-25100",
            normative=ref("ГОСТ 25100-2020", "Химические исследования"),
            recommendation="Не менее двух анализов водной вытяжки на каждый инженерно-геологический "
                           "элемент и два контрольных",
        ),
    ),
    calculate_values=lambda p: {
        "analysesCount": value(
            _water_extract_count(p), "анализов", "2 анализа на ИГЭ + 2 контрольных", formula="n = 2 * ИГЭ + 2"
        ),
    },
    generate_works=lambda p, v: [
        work(
            "LAB-CHEM-01",
            "Химический анализ водной вытяжки из грунтов",
            _water_extract_count(p),
            "анализ",
            v,
            tags=("химия", "агрессивность"),
            price_table_code="1602-0705",
        ),
    ],
)


metal_corrosion = InstructionBlock(
    id="block-36-02-metal-corrosion",
    section=SECTION_36,
    title="Оценка коррозионной активности грунтов к металлам",
    description="Коррозионная агрессивность грунтов к стальным конструкциям и трубопроводам",
    priority=21,
    tags=("лаборатория", "химия", "коррозия"),
    condition=lambda p: (
        p.foundation_type == "свайный"
        or bool(p.has_underground_pipelines)
        or bool(p.has_metal_structures)
    ),
    variants=(
        InstructionVariant(
            id="variant-gost-9-602",
            normative=ref("ГОСТ 9.602-2016", "Коррозионная активность"),
            recommendation="Определение удельного электрического сопротивления и "
                           "коррозионной активности грунтов к стали",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "LAB-CHEM-02",
            "Оценка коррозионной активности грунтов к металлам",
            3,
            "анализ",
            v,
            tags=("химия", "коррозия"),
            price_table_code="1602-0706",
        ),
    ],
)


def _water_chemistry_works(p, v):
    works = [
        work(
            "LAB-WATER-01",
            "Химический анализ подземных вод (полный)",
            aquifers(p) * 2,
            "анализ",
            v,
            tags=("химия", "подземные-воды"),
            price_table_code="1602-0707",
        ),
    ]
    if p.groundwater_aggressiveness:
        # known aggressive water: grade it against concrete and reinforcement
        works.append(work(
            "LAB-WATER-02",
            "Оценка агрессивности подземных вод к бетону и арматуре",
            aquifers(p),
            "анализ",
            v,
            description="Агрессивность подземных вод установлена по архивным данным",
            tags=("химия", "агрессивность"),
        ))
    return works


water_chemistry = InstructionBlock(
    id="block-37-01-water-chemistry",
    section=SECTION_37,
    title="Химический анализ подземных вод",
    description="Полный химический анализ подземных вод для оценки агрессивности",
    priority=22,
    tags=("лаборатория", "химия", "подземные-воды"),
    condition=lambda p: bool(p.has_groundwater) or p.groundwater_depth is not None or bool(p.groundwater_aggressiveness),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-2-03",
            normative=ref("СП РК 2.03-01-2001", "Агрессивность подземных вод"),
            recommendation="Не менее двух проб из каждого водоносного горизонта",
        ),
    ),
    generate_works=_water_chemistry_works,
)


BLOCKS = (
    water_extract,
    metal_corrosion,
    water_chemistry,
)
