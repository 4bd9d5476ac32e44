"""Sections 47-52: office processing, reporting, quality control, archiving, safety and environment."""
from georules.knowledge.common import RULES_2020, SP_RK_102, ref, value
from georules.models import InstructionBlock, InstructionVariant

data_processing = InstructionBlock(
    id="block-47-01-processing",
    section="Раздел 47: Камеральная обработка",
    title="Обработка материалов изысканий",
    description="Систематизация и статистическая обработка полевых и лабораторных данных",
    priority=90,
    tags=("камеральные", "обработка"),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "Камеральная обработка"),
            recommendation="Выделение ИГЭ и статистическая обработка характеристик грунтов",
            note="Входит в стоимость изысканий",
        ),
    ),
)


report_preparation = InstructionBlock(
    id="block-48-01-report",
    section="Раздел 48: Составление отчёта",
    title="Составление технического отчёта по результатам ИГИ",
    description="Состав и содержание технического отчёта",
    priority=200,
    tags=("камеральные", "отчёт"),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-sp-rk-102",
            normative=ref(SP_RK_102, "Раздел 8"),
            recommendation="Отчёт содержит текстовую часть, графические и табличные приложения",
            recommended_values={
                "parts": value(["текстовая часть", "графические приложения", "табличные приложения"]),
            },
        ),
    ),
)


labour_safety = InstructionBlock(
    id="block-51-01-safety",
    section="Раздел 51: Охрана труда",
    title="Охрана труда при выполнении инженерно-геологических изысканий",
    description="Требования безопасности при полевых работах",
    priority=201,
    tags=("охрана-труда",),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-snip-12-03",
            normative=ref("СНиП 12-03-2001", "Безопасность труда в строительстве"),
            recommendation="Инструктаж персонала, ограждение выработок, контроль подземных коммуникаций",
            warnings=("Перед бурением согласовать расположение подземных коммуникаций",),
        ),
    ),
)


quality_control = InstructionBlock(
    id="block-49-01-qc",
    section="Раздел 49: Контроль качества",
    title="Контроль качества инженерно-геологических изысканий",
    description="Проверка полноты и качества выполненных работ",
    priority=92,
    tags=("контроль", "качество"),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "Контроль качества"),
            recommendation="Внутренний контроль полевых, лабораторных и камеральных работ",
        ),
    ),
)


archiving = InstructionBlock(
    id="block-50-01-archive",
    section="Раздел 50: Архивирование",
    title="Передача материалов в архив и фонды",
    description="Архивное хранение материалов изысканий",
    priority=93,
    tags=("архив", "хранение"),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-rules-2020",
            normative=ref(RULES_2020, "Архивирование"),
            recommendation="Передача отчёта и первичных материалов в фонды",
            recommended_values={"storagePeriod": value(75, "лет")},
        ),
    ),
)


environmental_protection = InstructionBlock(
    id="block-52-01-environmental",
    section="Раздел 52: Охрана окружающей среды",
    title="Природоохранные мероприятия при изысканиях",
    description="Минимизация воздействия полевых работ на окружающую среду",
    priority=95,
    tags=("экология", "охрана-природы"),
    condition=lambda p: True,
    variants=(
        InstructionVariant(
            id="variant-eco-code",
            normative=ref("Экологический кодекс РК", "Охрана окружающей среды"),
            recommendation="Рекультивация площадок, тампонаж скважин, вывоз отходов бурения",
        ),
    ),
)


BLOCKS = (
    data_processing,
    report_preparation,
    quality_control,
    archiving,
    labour_safety,
    environmental_protection,
)
