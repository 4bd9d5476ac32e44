"""Section 17: filtration tests (pumping and infiltration)."""
from georules.knowledge.common import SP_RK_102, aquifers, geotechnical_category, ref, value, work
from georules.models import InstructionBlock, InstructionVariant, WorkCategory

SECTION_17 = "Раздел 17: Опытно-фильтрационные работы"


def _needs_dewatering(p) -> bool:
    return bool(p.has_basement) or (p.underground_floors or 0) > 0 or p.foundation_type == "свайный"


def _pumping_tests(p) -> int:
    per_aquifer = 2 if geotechnical_category(p) == "III" or (p.building_area or 0) > 10000 else 1
    return aquifers(p) * per_aquifer


pumping_tests = InstructionBlock(
    id="block-17-01-pumping-tests",
    section=SECTION_17,
    title="Опытные откачки из скважин",
    description="Коэффициент фильтрации, водопритоки и радиус влияния",
    priority=23,
    tags=("гидрогеология", "откачки", "фильтрация"),
    condition=lambda p: p.has_groundwater is True and _needs_dewatering(p),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 8.4"),
            recommendation="Откачка продолжительностью не менее 72 часов с 3-4 наблюдательными скважинами, "
                           "по одной откачке на каждый водоносный горизонт",
            recommended_values={
                "duration": value(72, "ч"),
                "observationWells": value(3, "скв"),
            },
        ),
    ),
    calculate_values=lambda p: {
        "pumpingTests": value(_pumping_tests(p), "откачка", confidence=90),
        "observationPoints": value(_pumping_tests(p) * 3, "скв", confidence=85),
        "estimatedDuration": value(_pumping_tests(p) * 7, "сут", "Включая подготовку и восстановление уровня",
                                   confidence=80),
    },
    generate_works=lambda p, v: [
        work(
            "filtration-pumping-tests",
            "Опытные откачки из скважин",
            _pumping_tests(p),
            "откачка",
            v,
            description="Откачная и наблюдательные скважины, замеры уровней, камеральная обработка",
            tags=("гидрогеология", "откачки"),
            price_table_code="1602-0501",
        ),
    ],
)


def _infiltration_tests(p) -> int:
    return 3 if (p.building_area or 0) > 5000 else 2


infiltration_tests = InstructionBlock(
    id="block-17-02-infiltration",
    section=SECTION_17,
    title="Наливы воды в шурфы",
    description="Коэффициент фильтрации грунтов зоны аэрации",
    priority=24,
    tags=("гидрогеология", "фильтрация", "наливы"),
    condition=lambda p: p.has_groundwater is True and (p.groundwater_depth or 0) > 3,
    variants=(
        InstructionVariant(
            id="variant-gost-25584",
            normative=ref("ГОСТ 25584-2016", "Метод налива в шурф"),
            recommendation="2-3 налива в шурфы глубиной 1.5-3.0 м до стабилизации расхода",
            recommended_values={"duration": value(6, "ч", "Средняя продолжительность налива")},
            note="Метод применим для водопроницаемых грунтов с Kф > 0.1 м/сут",
        ),
    ),
    calculate_values=lambda p: {"infiltrationTests": value(_infiltration_tests(p), "налив", confidence=85)},
    generate_works=lambda p, v: [
        work(
            "filtration-infiltration-tests",
            "Наливы воды в шурфы",
            _infiltration_tests(p),
            "налив",
            v,
            category=WorkCategory.RECOMMENDED,
            tags=("гидрогеология", "фильтрация"),
            price_table_code="1602-0502",
        ),
    ],
)


borehole_tests = InstructionBlock(
    id="block-17-03-borehole-infiltration",
    section=SECTION_17,
    title="Наливы и откачки в одиночных скважинах",
    description="Экспресс-определение фильтрационных свойств",
    priority=25,
    tags=("гидрогеология", "фильтрация", "экспресс"),
    condition=lambda p: p.has_groundwater is True and geotechnical_category(p) != "III",
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 8.4"),
            recommendation="3-5 экспресс-определений на объект; результаты носят оценочный характер",
            recommended_values={"testsCount": value(3, "определение")},
            warnings=("Не заменяет опытные откачки на ответственных объектах",),
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "filtration-express-tests",
            "Экспресс-определение фильтрационных свойств в скважинах",
            p.calculated_wells or 3,
            "определение",
            v,
            category=WorkCategory.OPTIONAL,
            tags=("гидрогеология", "экспресс"),
            price_table_code="1602-0503",
        ),
    ],
)


BLOCKS = (
    pumping_tests,
    infiltration_tests,
    borehole_tests,
)
