"""Section 10: hydrogeological investigations."""
import math

from georules.knowledge.common import SP_RK_102, aquifers, geotechnical_category, numeric, ref, responsibility, value, work
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_10 = "Раздел 10: Гидрогеологические исследования"


def _groundwater_expected(p) -> bool:
    return bool(p.has_groundwater or p.groundwater_depth is not None or (p.underground_floors or 0) > 0)


def _hydro_wells(p) -> int:
    area_km2 = (p.area_size or 1) / 100
    wells = 3
    if area_km2 > 1:
        wells += math.ceil((area_km2 - 1) * 1.5)
    if geotechnical_category(p) == "III":
        wells = math.ceil(wells * 1.3)
    return wells


hydro_wells = InstructionBlock(
    id="block-10-01-hydro-wells",
    section=SECTION_10,
    title="Гидрогеологические скважины",
    description="Количество скважин для изучения подземных вод",
    priority=100,
    tags=("гидрогеология", "скважины"),
    condition=_groundwater_expected,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.12"),
            recommendation="Не менее 3 скважин на 1 км², 1-2 дополнительных на каждый следующий км²",
            recommended_values={"additionalPerKm2": value(1.5, "скважин/км²", min=1, max=2)},
            note="Количество может быть увеличено для сложных гидрогеологических условий",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "hydro-wells",
            "Гидрогеологические скважины",
            _hydro_wells(p),
            "скв",
            v,
            description=f"Площадь участка {(p.area_size or 1) / 100:.2f} км²",
            tags=("гидрогеология", "скважины"),
        ),
    ],
)


cluster_pumping = InstructionBlock(
    id="block-10-05-cluster-pumping",
    section=SECTION_10,
    title="Кустовые откачки",
    description="Определение гидрогеологических параметров кустовыми откачками",
    priority=102,
    tags=("гидрогеология", "откачки"),
    condition=lambda p: (
        _groundwater_expected(p)
        and geotechnical_category(p) == "III"
        and responsibility(p) == "I"
    ),
    variants=(
        InstructionVariant(
            id="variant-vsn-34",
            normative=ref("ВСН 34.2-88", "п. 4.11"),
            recommendation="Не менее одного куста с 4 наблюдательными скважинами",
            recommended_values={"observationWells": value(4, "скв")},
        ),
    ),
    generate_works=lambda p, v: [
        work("hydro-cluster-pumping", "Кустовая откачка", 1, "куст", v, tags=("откачки",)),
        work(
            "hydro-observation-wells",
            "Наблюдательные скважины",
            numeric(v, "observationWells", 4),
            "скв",
            v,
            tags=("откачки",),
        ),
    ],
)


pilot_pumping = InstructionBlock(
    id="block-10-04-pilot-pumping",
    section=SECTION_10,
    title="Опытные откачки",
    description="Одиночные опытные откачки с наблюдательными скважинами",
    priority=103,
    tags=("гидрогеология", "откачки"),
    conflicts=("block-10-05-cluster-pumping",),
    condition=lambda p: (
        _groundwater_expected(p)
        and (geotechnical_category(p) == "III" or responsibility(p) == "I")
    ),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.14"),
            recommendation="Не менее 2 опытных откачек, по 3 наблюдательные скважины",
            recommended_values={"observationWells": value(3, "скв")},
        ),
    ),
    generate_works=lambda p, v: [
        work("hydro-pilot-pumping", "Опытная откачка", 2, "откачка", v, tags=("откачки",)),
        work(
            "hydro-observation-wells",
            "Наблюдательные скважины",
            2 * numeric(v, "observationWells", 3),
            "скв",
            v,
            tags=("откачки",),
        ),
    ],
)


water_standard_analysis = InstructionBlock(
    id="block-10-06-water-analysis",
    section=SECTION_10,
    title="Стандартный анализ подземных вод",
    description="Отбор проб подземных вод для стандартного химического анализа",
    priority=105,
    tags=("гидрогеология", "анализ-воды"),
    condition=_groundwater_expected,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.16"),
            recommendation="Не менее 3 проб из каждого водоносного горизонта",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "water-standard-analysis",
            "Стандартный химический анализ подземных вод",
            3 * aquifers(p),
            "проба",
            v,
            tags=("анализ-воды",),
        ),
    ],
)


water_level_monitoring = InstructionBlock(
    id="block-10-09-water-level-monitoring",
    section=SECTION_10,
    title="Режимные наблюдения за уровнем подземных вод",
    description="Наблюдения за сезонными колебаниями уровня подземных вод",
    priority=108,
    tags=("гидрогеология", "мониторинг"),
    condition=lambda p: _groundwater_expected(p) and geotechnical_category(p) == "III",
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.18", Tier.RECOMMENDED),
            recommendation="Ежемесячные замеры уровня в течение года",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "hydro-monitoring-level",
            "Режимные наблюдения за уровнем подземных вод",
            12,
            "замер",
            v,
            category=WorkCategory.RECOMMENDED,
            tags=("мониторинг",),
        ),
    ],
)


BLOCKS = (
    hydro_wells,
    cluster_pumping,
    pilot_pumping,
    water_standard_analysis,
    water_level_monitoring,
)
