"""Section 15: surveys during construction, reconstruction and operation."""
from georules.knowledge.common import RULES_2020, SP_RK_102, geotechnical_category, ref, responsibility, value, work
from georules.knowledge.linear import HYDROPOWER, ST_RK_1399, VSN_34
from georules.models import InstructionBlock, InstructionVariant, Tier, WorkCategory

SECTION_15 = "Раздел 15: Строительство и эксплуатация"

CONSTRUCTION = "строительство"
RECONSTRUCTION = "реконструкция"
OPERATION = "эксплуатация"


construction_control = InstructionBlock(
    id="block-15-01-construction-control",
    section=SECTION_15,
    title="Геотехнический контроль при строительстве",
    description="Контроль соответствия фактических инженерно-геологических условий проектным",
    priority=150,
    tags=("строительство", "контроль", "авторский-надзор"),
    condition=lambda p: p.construction_phase == CONSTRUCTION or geotechnical_category(p) == "III",
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 8.5"),
            recommendation="Геологическая документация выемок, геотехнический контроль земляных работ "
                           "и авторский надзор изыскательской организации",
            recommended_values={"documentationFrequency": value("постоянно", "режим")},
            warnings=("Обязательно для III геотехнической категории",),
        ),
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 25"),
            recommendation="Участие изыскателей в приёмке котлованов и проверка соответствия грунтов прогнозу",
            note="Дополняет требования СП РК",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "construction-documentation",
            "Геологическая документация котлованов и выемок",
            1,
            "период строительства",
            v,
            tags=("строительство", "документация"),
        ),
        work(
            "construction-control",
            "Геотехнический контроль земляных работ",
            1,
            "период строительства",
            v,
            tags=("строительство", "контроль"),
        ),
        work(
            "construction-supervision",
            "Авторский надзор изыскательской организации",
            1,
            "период строительства",
            v,
            tags=("строительство", "авторский-надзор"),
        ),
    ],
)


excavation_documentation = InstructionBlock(
    id="block-15-02-excavation-documentation",
    section=SECTION_15,
    title="Документация строительных выемок",
    description="Изучение вскрытых котлованов и траншей",
    priority=151,
    tags=("строительство", "документация", "котлованы"),
    dependencies=("block-15-01-construction-control",),
    condition=lambda p: p.construction_phase == CONSTRUCTION and p.excavation_documentation is True,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 27"),
            recommendation="Документировать напластование, состав грунтов, высачивания подземных вод "
                           "и состояние грунтов во вскрытых выемках",
            recommended_values={
                "documentation": value(["напластование", "состав", "воды", "состояние"], "аспекты"),
            },
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "excavation-field-documentation",
            "Полевая документация котлованов и траншей",
            1,
            "объект",
            v,
            tags=("документация", "котлованы"),
        ),
        work(
            "excavation-sampling",
            "Отбор дополнительных образцов из выемок",
            5,
            "образец",
            v,
            category=WorkCategory.RECOMMENDED,
            description="При выявлении новых разностей грунтов",
            tags=("отбор", "образцы"),
        ),
        work(
            "excavation-photo",
            "Фотофиксация строительных выемок",
            1,
            "комплекс",
            v,
            category=WorkCategory.RECOMMENDED,
            tags=("фото", "документация"),
        ),
    ],
)


reconstruction = InstructionBlock(
    id="block-15-03-reconstruction-surveys",
    section=SECTION_15,
    title="Изыскания для реконструкции",
    description="Обоснование увеличенных нагрузок на основания при реконструкции",
    priority=152,
    tags=("реконструкция", "эксплуатация"),
    condition=lambda p: p.construction_phase == RECONSTRUCTION or p.load_increase is True,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 28"),
            recommendation="Обосновать увеличенные нагрузки, новые конструктивные решения "
                           "и усиление существующих фундаментов",
            recommended_values={"investigations": value(["нагрузки", "осадки", "усиление"], "аспекты")},
        ),
        InstructionVariant(
            id="variant-st-rk-1399",
            normative=ref(ST_RK_1399, "Раздел 6", Tier.REFERENCE),
            recommendation="Учесть влияние реконструкции на соседние здания",
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "reconstruction-foundation-inspection",
            "Обследование состояния существующих фундаментов",
            1,
            "объект",
            v,
            tags=("реконструкция", "фундаменты"),
        ),
        work(
            "reconstruction-load-calculations",
            "Расчёты дополнительных осадок от новых нагрузок",
            1,
            "расчёт",
            v,
            tags=("реконструкция", "расчёт"),
        ),
        work(
            "reconstruction-reinforcement",
            "Обоснование усиления фундаментов",
            1,
            "проект",
            v,
            tags=("реконструкция", "усиление"),
        ),
    ],
)


emergency = InstructionBlock(
    id="block-15-04-emergency-surveys",
    section=SECTION_15,
    title="Аварийные изыскания",
    description="Изыскания при деформациях и аварийном состоянии сооружений",
    priority=153,
    tags=("авария", "деформации", "эксплуатация"),
    condition=lambda p: p.emergency_situation is True or p.structural_deformations is True,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "п. 28"),
            recommendation="Выявить причины деформаций, обосновать укрепление оснований, "
                           "усиление фундаментов и инженерную защиту",
            recommended_values={"urgency": value("срочно", "режим")},
            warnings=("Работы выполняются в аварийном режиме",),
        ),
    ),
    generate_works=lambda p, v: [
        work(
            "emergency-inspection",
            "Срочное инженерно-геологическое обследование",
            1,
            "объект",
            v,
            tags=("авария", "обследование"),
        ),
        work(
            "emergency-measures",
            "Разработка мероприятий инженерной защиты",
            1,
            "проект",
            v,
            tags=("авария", "мероприятия"),
        ),
        work(
            "emergency-monitoring",
            "Оперативный мониторинг развития деформаций",
            1,
            "комплекс",
            v,
            tags=("авария", "мониторинг"),
        ),
    ],
)


def _monitoring_works(p, v):
    works = [
        work(
            "monitoring-deformations",
            "Мониторинг деформаций оснований и фундаментов",
            12,
            "мес",
            v,
            tags=("мониторинг", "деформации"),
        ),
        work(
            "monitoring-groundwater-level",
            "Режимные наблюдения за уровнем подземных вод",
            12,
            "мес",
            v,
            tags=("мониторинг", "УГВ"),
        ),
    ]
    if p.hazards:
        works.append(work(
            "monitoring-hazards",
            "Мониторинг развития опасных геологических процессов",
            12,
            "мес",
            v,
            description=", ".join(p.hazards),
            tags=("мониторинг", "опасные-процессы"),
        ))
    if p.object_type == HYDROPOWER:
        works.append(work(
            "monitoring-dam",
            "Мониторинг плотины и водохранилища",
            12,
            "мес",
            v,
            category=WorkCategory.RECOMMENDED,
            description="Деформации, фильтрация, пьезометрия",
            tags=("мониторинг", "плотина"),
        ))
    return works


operation_monitoring = InstructionBlock(
    id="block-15-05-operation-monitoring",
    section=SECTION_15,
    title="Мониторинг при эксплуатации",
    description="Режимные наблюдения за основаниями и сооружениями",
    priority=154,
    tags=("мониторинг", "эксплуатация"),
    condition=lambda p: p.construction_phase == OPERATION and (
        responsibility(p) == "I" or geotechnical_category(p) == "III" or bool(p.hazards)
    ),
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "п. 8.6"),
            recommendation="Наблюдения за деформациями оснований, уровнем подземных вод "
                           "и развитием опасных процессов не реже раза в месяц",
            recommended_values={"frequency": value("ежемесячно", "режим")},
        ),
        InstructionVariant(
            id="variant-vsn-34",
            normative=ref(VSN_34, "п. 10.2", Tier.REFERENCE),
            recommendation="Мониторинг деформаций плотины, фильтрации и пьезометрические наблюдения",
            condition=lambda p: p.object_type == HYDROPOWER,
            promote_to_works=True,
        ),
    ),
    generate_works=_monitoring_works,
)


BLOCKS = (
    construction_control,
    excavation_documentation,
    reconstruction,
    emergency,
    operation_monitoring,
)
