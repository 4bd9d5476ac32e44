"""Sections 31-33, 38 and 39: laboratory programmes by soil type."""
from georules.knowledge.common import contains_any, geotechnical_category, numeric, ref, value, work
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_31 = "Раздел 31: Лабораторные испытания глинистых грунтов"
SECTION_32 = "Раздел 32: Лабораторные испытания песчаных грунтов"
SECTION_33 = "Раздел 33: Крупнообломочные грунты"
SECTION_38 = "Раздел 38: Специальные параметры"
SECTION_39 = "Раздел 39: Микроструктура"

GOST_5180 = "ГОСТ 5180-2015"
GOST_12248 = "ГОСТ 12248-2010"
GOST_25100 = "ГОСТ 25100-2020"


def _clayey(p) -> bool:
    return contains_any(p.soil_types, "глин", "супес")


def _clay_or_loam(p) -> bool:
    # clay and loam only
    return contains_any(p.soil_types, "глин")


def _sandy(p) -> bool:
    return contains_any(p.soil_types, "песок", "песчан")


def _coarse(p) -> bool:
    return contains_any(p.soil_types, "крупнообломоч", "гравий", "галька", "щебен")


def _elements(p, default: int) -> int:
    return p.expected_ige or p.lithologic_layers or default


clayey_physical = InstructionBlock(
    id="block-31-01-clayey-physical",
    section=SECTION_31,
    title="Физические характеристики глинистых грунтов",
    description="Плотность, влажность, границы пластичности и консистенция",
    priority=15,
    tags=("лаборатория", "глинистые", "физические-свойства"),
    condition=_clayey,
    variants=(
        InstructionVariant(
            id="variant-gost-5180",
            normative=ref(GOST_5180, "Методы определения физических характеристик"),
            recommendation="Не менее 6 определений на каждый ИГЭ",
            recommended_values={"samplesPerElement": value(6, "определений")},
        ),
    ),
    calculate_values=lambda p: {
        "densityTests": value(_elements(p, 3) * 3, "определение", "Плотность"),
        "moistureTests": value(_elements(p, 3) * 6, "определение", "Влажность"),
        "atterbergTests": value(_elements(p, 3) * 6, "определение", "Границы пластичности"),
    },
    generate_works=lambda p, v: [
        work(
            "lab-clayey-physical",
            "Определение физических характеристик глинистых грунтов",
            _elements(p, 3) * numeric(v, "samplesPerElement", 6),
            "определение",
            v,
            tags=("лаборатория", "глинистые"),
            price_table_code="1602-0701",
        ),
    ],
)


clayey_compression = InstructionBlock(
    id="block-31-02-clayey-compression",
    section=SECTION_31,
    title="Компрессионные испытания глинистых грунтов",
    description="Модуль деформации и коэффициент сжимаемости",
    priority=16,
    tags=("лаборатория", "глинистые", "компрессия"),
    condition=lambda p: _clay_or_loam(p) and p.foundation_type in ("ленточный", "плитный", "столбчатый"),
    variants=(
        InstructionVariant(
            id="variant-gost-12248",
            normative=ref(GOST_12248, "Метод компрессионного сжатия"),
            recommendation="Не менее 3 образцов на каждый ИГЭ",
            recommended_values={"samplesPerElement": value(3, "образцов")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-clayey-compression",
            "Компрессионные испытания глинистых грунтов",
            _elements(p, 3) * numeric(v, "samplesPerElement", 3),
            "испытание",
            v,
            tags=("лаборатория", "компрессия"),
            price_table_code="1602-0702",
        ),
    ],
)


def _shear_samples(p) -> int:
    return 6 if (p.number_of_floors or 0) >= 10 else 4


clayey_shear = InstructionBlock(
    id="block-31-03-clayey-shear",
    section=SECTION_31,
    title="Испытания глинистых грунтов на срез",
    description="Угол внутреннего трения и удельное сцепление",
    priority=17,
    tags=("лаборатория", "глинистые", "срез"),
    condition=lambda p: _clay_or_loam(p) and (
        p.foundation_type in ("ленточный", "свайный") or (p.number_of_floors or 0) >= 5
    ),
    variants=(
        InstructionVariant(
            id="variant-gost-12248",
            normative=ref(GOST_12248, "Метод одноплоскостного среза"),
            recommendation="Не менее 4 образцов на ИГЭ, 6 образцов для зданий от 10 этажей",
        ),
    ),
    calculate_values=lambda p: {"samplesPerElement": value(_shear_samples(p), "образцов")},
    generate_works=lambda p, v: [
        work(
            "lab-clayey-shear",
            "Испытания глинистых грунтов на срез",
            _elements(p, 3) * _shear_samples(p),
            "испытание",
            v,
            tags=("лаборатория", "срез"),
            price_table_code="1602-0703",
        ),
    ],
)


sandy_physical = InstructionBlock(
    id="block-32-01-sandy-physical",
    section=SECTION_32,
    title="Физические характеристики песчаных грунтов",
    description="Плотность, влажность и гранулометрический состав",
    priority=18,
    tags=("лаборатория", "песчаные", "физические-свойства"),
    condition=_sandy,
    variants=(
        InstructionVariant(
            id="variant-gost-5180",
            normative=ref(GOST_5180, "Физические характеристики"),
            recommendation="Не менее 6 образцов на каждый ИГЭ",
            recommended_values={"samplesPerElement": value(6, "образцов")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-sandy-physical",
            "Определение физических характеристик песчаных грунтов",
            _elements(p, 2) * numeric(v, "samplesPerElement", 6),
            "определение",
            v,
            tags=("лаборатория", "песчаные"),
            price_table_code="1602-0701",
        ),
    ],
)


sandy_friction = InstructionBlock(
    id="block-32-02-sandy-friction",
    section=SECTION_32,
    title="Угол внутреннего трения песчаных грунтов",
    description="Испытания трёхосным сжатием",
    priority=19,
    tags=("лаборатория", "песчаные", "срез"),
    condition=_sandy,
    variants=(
        InstructionVariant(
            id="variant-gost-12248",
            normative=ref(GOST_12248, "Трёхосное сжатие"),
            recommendation="Не менее 4 испытаний на каждый ИГЭ",
            recommended_values={"testsPerElement": value(4, "испытаний")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-sandy-friction",
            "Определение угла внутреннего трения песчаных грунтов",
            _elements(p, 2) * numeric(v, "testsPerElement", 4),
            "испытание",
            v,
            tags=("лаборатория", "песчаные", "трение"),
            price_table_code="1602-0703",
        ),
    ],
)


# Determinations per element for coarse soils
_COARSE_PROGRAMME = (
    ("lab-coarse-grain-size", "Гранулометрический состав крупнообломочных грунтов", 2, "проба", "1602-0701"),
    ("lab-coarse-density", "Плотность крупнообломочных грунтов", 3, "определение", "1602-0702"),
    ("lab-coarse-moisture", "Влажность крупнообломочных грунтов", 5, "определение", "1602-0703"),
)


def _coarse_works(p, v):
    elements = _elements(p, 3)
    works = [
        work(work_id, name, elements * per_element, unit, v, tags=("лаборатория", "крупнообломочные"),
             price_table_code=code)
        for work_id, name, per_element, unit, code in _COARSE_PROGRAMME
    ]
    works.append(work(
        "lab-coarse-particle-strength",
        "Прочность частиц крупнообломочных грунтов",
        elements * 2,
        "проба",
        v,
        category=WorkCategory.RECOMMENDED,
        tags=("лаборатория", "прочность"),
        price_table_code="1602-0713",
    ))
    return works


coarse_soils = InstructionBlock(
    id="block-33-01-coarse-soils",
    section=SECTION_33,
    title="Лабораторные испытания крупнообломочных грунтов",
    description="Свойства гравийных, галечниковых и щебенистых грунтов",
    priority=48,
    tags=("лаборатория", "крупнообломочные"),
    condition=_coarse,
    variants=(
        InstructionVariant(
            id="variant-gost-25100",
            normative=ref(GOST_25100, "Крупнообломочные грунты"),
            recommendation="Не менее 3 проб массой около 100 кг на каждый ИГЭ",
            recommended_values={
                "sampleMass": value(100, "кг"),
                "samplesPerElement": value(3, "проб"),
            },
        ),
    ),
    generate_works=_coarse_works,
)


special_parameters = InstructionBlock(
    id="block-38-01-special",
    section=SECTION_38,
    title="Специальные физико-механические параметры",
    description="Модуль сдвига, коэффициент бокового давления, циклическая прочность",
    priority=51,
    tags=("лаборатория", "специальные"),
    condition=lambda p: geotechnical_category(p) == "III" or (p.number_of_floors or 0) >= 16,
    variants=(
        InstructionVariant(
            id="variant-gost-12248",
            normative=ref(GOST_12248, "Дополнительные испытания", Tier.RECOMMENDED),
            recommendation="Для особо ответственных объектов и сложных условий",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-special-parameters",
            "Определение специальных параметров грунтов",
            _elements(p, 3) * 2,
            "испытание",
            v,
            category=WorkCategory.OPTIONAL,
            tags=("лаборатория", "специальные"),
            price_table_code="1602-0721",
        ),
    ],
)


microstructure = InstructionBlock(
    id="block-39-01-microstructure",
    section=SECTION_39,
    title="Микроструктурные и минералогические исследования",
    description="Структура и минеральный состав грунтов",
    priority=52,
    tags=("лаборатория", "микроструктура"),
    condition=lambda p: geotechnical_category(p) == "III",
    variants=(
        InstructionVariant(
            id="variant-gost-25100",
            normative=ref(GOST_25100, "Микроструктурные исследования", Tier.RECOMMENDED),
            recommendation="Микроскопия, рентгеноструктурный и термический анализ для особо сложных грунтов",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "lab-microstructure",
            "Микроструктурные исследования грунтов",
            _elements(p, 3),
            "образец",
            v,
            category=WorkCategory.OPTIONAL,
            tags=("лаборатория", "микроструктура"),
            price_table_code="1602-0722",
        ),
    ],
)


BLOCKS = (
    clayey_physical,
    clayey_compression,
    clayey_shear,
    sandy_physical,
    sandy_friction,
    coarse_soils,
    special_parameters,
    microstructure,
)
