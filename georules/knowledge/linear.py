"""Section 6: linear objects and hydropower structures."""
import math

from georules.knowledge.common import SP_RK_102, complexity_category, contains_any, numeric, ref, value, work
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_06 = "Раздел 6: Линейные объекты"

ST_RK_1399 = "СТ РК 1399-2005"
VSN_34 = "ВСН 34.2-88"

ROAD_TYPES = ("автодорога", "дорога")
HYDROPOWER = "гидроэнергетический"

# Maximum spacing along the route by complexity category, m
_ROUTE_SPACING = {"I": 500, "II": 250, "III": 150}


def _is_linear(p, *kinds) -> bool:
    return p.object_type == "линейный" and p.linear_type in kinds


def _wells_along(p, spacing: float, default_length: float) -> int:
    """Wells along a route of ``linear_length`` km drilled every ``spacing`` m."""
    length = p.linear_length or default_length
    return math.ceil(length * 1000 / spacing)


def _road_spacing(p, v) -> float:
    if "spacingTEO" in v.recommended_values:
        stage_value = "spacingTEO" if p.design_stage == "ТЭО" else "spacingProject"
        return numeric(v, stage_value, 250)
    return numeric(v, "spacing", 250)


def _road_block(number: int, category: str, teo_spacing: int, project_spacing: int) -> InstructionBlock:
    spacing = _ROUTE_SPACING[category]

    def generate(p, v):
        step = _road_spacing(p, v)
        wells = _wells_along(p, step, 10)
        return [
            work(
                f"linear-roads-cat{number}-wells",
                f"Буровые скважины вдоль трассы автодороги (категория {category})",
                wells,
                "скв",
                v,
                description=f"{wells} скважин с шагом {step:g} м на {p.linear_length or 10:g} км трассы",
                tags=("линейные", "автодороги", f"категория-{category}"),
            ),
        ]

    return InstructionBlock(
        id=f"block-06-{number:02d}-roads-category-{category.lower()}",
        section=SECTION_06,
        title=f"Автомобильные дороги, категория сложности {category}",
        description="Расстояние между выработками вдоль трассы автодороги",
        priority=59 + number,
        tags=("линейные", "автодороги", f"категория-{category}"),
        condition=lambda p: _is_linear(p, *ROAD_TYPES) and complexity_category(p) == category,
        variants=(
            InstructionVariant(
                id="variant-sp-rk-102",
                normative=ref(SP_RK_102, "п. 7.5"),
                recommendation=f"Расстояние между выработками не более {spacing} м",
                recommended_values={"spacing": value(spacing, "м", max=spacing)},
            ),
            InstructionVariant(
                id="variant-st-rk-1399",
                normative=ref(ST_RK_1399, "Приложение Е"),
                recommendation=f"Расстояние между выработками {teo_spacing} м на стадии ТЭО, "
                               f"{project_spacing} м на стадии Проект",
                recommended_values={
                    "spacingTEO": value(teo_spacing, "м", "На стадии ТЭО"),
                    "spacingProject": value(project_spacing, "м", "На стадии Проект"),
                },
                note="Специализированный документ для автомобильных дорог",
            ),
        ),
        generate_works=generate,
    )


roads_cat1 = _road_block(1, "I", 1000, 500)
roads_cat2 = _road_block(2, "II", 500, 250)
roads_cat3 = _road_block(3, "III", 250, 100)


def _tunnel_works(p, v):
    if "spacingMain" not in v.recommended_values:
        return [
            work(
                "tunnel-mine-workings",
                "Обоснование шахт и штолен в программе изысканий",
                1,
                "программа",
                v,
                tags=("туннель",),
            ),
        ]
    spacing = numeric(v, "spacingMain", 500)
    wells = _wells_along(p, spacing, 5)
    return [
        work(
            "tunnel-main-wells",
            "Скважины по трассе туннеля",
            wells,
            "скв",
            v,
            description=f"{wells} скважин с шагом {spacing:g} м",
            tags=("туннель", "гидротехнический"),
        ),
        work(
            "tunnel-portal-wells",
            "Скважины на портальных участках",
            numeric(v, "portalWells", 10),
            "скв",
            v,
            description="Детальная разведка порталов с шагом 20-50 м",
            tags=("туннель", "портал"),
        ),
    ]


tunnels = InstructionBlock(
    id="block-06-04-tunnels-investigation",
    section=SECTION_06,
    title="Изыскания для туннелей",
    description="Объёмы работ в зависимости от назначения туннеля",
    priority=63,
    tags=("линейные", "туннели", "подземные"),
    condition=lambda p: _is_linear(p, "туннель"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 5.8"),
            recommendation="Шахты и штольни при обосновании в программе изысканий для особо ответственных объектов",
        ),
        InstructionVariant(
            id="variant-st-rk-1399",
            normative=ref(ST_RK_1399, "Приложение Е"),
            recommendation="Для автодорожных туннелей требования к автодорогам с увеличенной детальностью",
            note="Если туннель является частью автомобильной дороги",
        ),
        InstructionVariant(
            id="variant-vsn-34",
            normative=ref(VSN_34, "п. 4.10", Tier.REFERENCE),
            recommendation="Выработки по трассе через 200-1000 м, на порталах через 20-50 м, "
                           "глубина на 10-15 м ниже отметки заложения",
            recommended_values={
                "spacingMain": value(500, "м", "По основной трассе", min=200, max=1000),
                "portalWells": value(10, "скв", "По 5 на каждый портал"),
                "depthBelow": value(12, "м", "Ниже отметки заложения", min=10, max=15),
            },
            note="Для туннелей гидроэнергетических объектов",
            promote_to_works=True,
        ),
    ),
    generate_works=_tunnel_works,
)


def _dam_height(p) -> float:
    return p.building_height or 50


def _dam_block(block_id, priority, stage, clause, axis_spacing, depth_factor, recommendation) -> InstructionBlock:
    def generate(p, v):
        spacing = numeric(v, "spacingAxis", axis_spacing)
        wells = _wells_along(p, spacing, 0.5)
        depth = math.ceil(_dam_height(p) * numeric(v, "depthCoefficient", depth_factor))
        return [
            work(
                f"dam-{'teo' if stage == 'ТЭО' else 'project'}-axis-wells",
                f"Скважины по оси плотины ({stage})",
                wells,
                "скв",
                v,
                category=WorkCategory.RECOMMENDED,
                description=f"{wells} скважин с шагом {spacing:g} м, глубиной {depth} м",
                tags=("плотина", stage),
            ),
        ]

    return InstructionBlock(
        id=block_id,
        section=SECTION_06,
        title=f"Плотины, стадия {stage}",
        description="Выработки по оси плотины и глубина разведки от высоты плотины",
        priority=priority,
        tags=("гидроэнергетика", "плотины", stage),
        condition=lambda p: p.object_type == HYDROPOWER and p.design_stage == stage,
        variants=(
            InstructionVariant(
                id="variant-vsn-34",
                normative=ref(VSN_34, clause, Tier.REFERENCE),
                recommendation=recommendation,
                recommended_values={
                    "spacingAxis": value(axis_spacing, "м", "По оси плотины"),
                    "depthCoefficient": value(depth_factor, "H", "Коэффициент к высоте плотины"),
                },
                promote_to_works=True,
            ),
        ),
        calculate_values=lambda p: {
            "damDrillingDepth": value(
                math.ceil(_dam_height(p) * depth_factor),
                "м",
                f"Высота плотины {_dam_height(p):g} м",
                formula=f"{depth_factor:g} × H",
            ),
        },
        generate_works=generate,
    )


dam_teo = _dam_block(
    "block-06-05-dam-teo-stage", 64, "ТЭО", "п. 3.16", 37, 1.5,
    "По оси плотины выработки через 25-50 м, по примыканиям через 50-100 м, глубина 1.5H ниже подошвы",
)
dam_project = _dam_block(
    "block-06-06-dam-project-stage", 65, "Проект", "п. 4.5", 20, 2,
    "По оси плотины выработки через 15-25 м, поперечники через 50-100 м, глубина 2H ниже подошвы",
)


powerhouse = InstructionBlock(
    id="block-06-07-powerhouse-halls",
    section=SECTION_06,
    title="ГЭС и машинные залы",
    description="Выработки под гидроагрегатами",
    priority=66,
    tags=("гидроэнергетика", "ГЭС"),
    condition=lambda p: p.object_type == HYDROPOWER and p.linear_type in ("ГЭС", "машинный зал"),
    variants=(
        InstructionVariant(
            id="variant-vsn-34",
            normative=ref(VSN_34, "п. 3.17", Tier.REFERENCE),
            recommendation="Выработки под каждым агрегатом на 15-20 м ниже подошвы фундамента",
            recommended_values={
                "units": value(4, "агрегат", "Типовое количество агрегатов"),
                "depthBelow": value(17, "м", "Ниже подошвы", min=15, max=20),
            },
            promote_to_works=True,
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "powerhouse-wells",
            "Скважины под гидроагрегаты ГЭС",
            numeric(v, "units", 4),
            "скв",
            v,
            category=WorkCategory.RECOMMENDED,
            description="По одной скважине под каждым агрегатом",
            tags=("ГЭС", "агрегаты"),
        ),
    ],
)


def _pipeline_spacing(p) -> int:
    return _ROUTE_SPACING.get(complexity_category(p), _ROUTE_SPACING["II"])


pipelines = InstructionBlock(
    id="block-06-08-pipelines-general",
    section=SECTION_06,
    title="Трубопроводы",
    description="Расстояние между выработками вдоль трассы трубопровода",
    priority=67,
    tags=("линейные", "трубопроводы"),
    condition=lambda p: _is_linear(p, "трубопровод"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.5"),
            recommendation="Не более 500, 250 и 150 м для категорий сложности I, II и III",
            recommended_values={
                f"spacingCat{number}": value(spacing, "м")
                for number, spacing in enumerate(_ROUTE_SPACING.values(), start=1)
            },
        ),
    ),
    calculate_values=lambda p: {"routeSpacing": value(_pipeline_spacing(p), "м")},
    generate_works=lambda p, v: [
        work(
            "pipeline-wells",
            "Скважины вдоль трассы трубопровода",
            _wells_along(p, _pipeline_spacing(p), 10),
            "скв",
            v,
            tags=("трубопровод",),
        ),
    ],
)


canals = InstructionBlock(
    id="block-06-09-canals-waterways",
    section=SECTION_06,
    title="Каналы и водоводы",
    description="Открытые водопроводящие сооружения",
    priority=68,
    tags=("линейные", "каналы", "гидротехника"),
    condition=lambda p: _is_linear(p, "канал", "водовод"),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.5"),
            recommendation="Требования к линейным объектам с учётом фильтрационных свойств грунтов",
            recommended_values={"spacing": value(250, "м")},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "canal-wells",
            "Скважины вдоль трассы канала",
            _wells_along(p, numeric(v, "spacing", 250), 10),
            "скв",
            v,
            tags=("канал", "гидротехника"),
        ),
    ],
)


def _crossings(p) -> int:
    return sum(1 for h in p.hazards if contains_any((h,), "река", "овраг", "переход"))


crossings = InstructionBlock(
    id="block-06-10-obstacle-crossings",
    section=SECTION_06,
    title="Переходы через препятствия",
    description="Дополнительные выработки на переходах через реки, овраги и дороги",
    priority=69,
    tags=("линейные", "переходы"),
    condition=lambda p: p.object_type == "линейный" and _crossings(p) > 0,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 7.6"),
            recommendation="Не менее 3 выработок на каждый переход, поперечники через основное русло",
            recommended_values={"wellsPerCrossing": value(3, "скв", min=3)},
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "crossing-wells",
            "Дополнительные скважины на переходах через препятствия",
            _crossings(p) * numeric(v, "wellsPerCrossing", 3),
            "скв",
            v,
            description=f"Переходов: {_crossings(p)}",
            tags=("переходы", "мосты"),
        ),
    ],
)


BLOCKS = (
    roads_cat1,
    roads_cat2,
    roads_cat3,
    tunnels,
    dam_teo,
    dam_project,
    powerhouse,
    pipelines,
    canals,
    crossings,
)
