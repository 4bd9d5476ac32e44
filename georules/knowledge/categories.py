"""Section 3: complexity and geotechnical categories."""
from georules.knowledge.common import SP_RK_102, SP_RK_105, complexity_category, geotechnical_category, ref, value
from georules.models import InstructionBlock, InstructionVariant

SECTION_03 = "Раздел 3: Определение категорий"

_COMPLEXITY_NOTES = {
    "I": "один геоморфологический элемент, не более трёх слоёв, выдержанное залегание",
    "II": "несколько геоморфологических элементов, до четырёх слоёв, ограниченное развитие "
          "опасных процессов или специфических грунтов",
    "III": "более четырёх слоёв, несколько водоносных горизонтов, широкое развитие "
           "опасных процессов",
}


def _complexity_block(number: int, category: str) -> InstructionBlock:
    return InstructionBlock(
        id=f"block-03-0{number}-complexity-category-{category}",
        section=SECTION_03,
        title=f"Категория сложности инженерно-геологических условий {category}",
        description="Определение категории сложности по СП РК 1.02-105-2014, Приложение А",
        priority=10,
        tags=("категории", "сложность", f"категория-{category}"),
        condition=lambda p: complexity_category(p) == category,
        variants=(
            InstructionVariant(
                id="variant-sp-rk-105",
                normative=ref(SP_RK_105, "Приложение А, Таблица А.1"),
                recommendation=f"Присвоить {category} категорию сложности: {_COMPLEXITY_NOTES[category]}",
            ),
        ),
        calculate_values=lambda p: {
            "complexityCategory": value(category, "категория", "Категория сложности условий", confidence=90),
        },
    )


def _geotechnical_block(number: int, category: str, complexity_block: InstructionBlock) -> InstructionBlock:
    return InstructionBlock(
        id=f"block-03-0{number}-geotechnical-category-{category}",
        section=SECTION_03,
        title=f"Геотехническая категория {category}",
        description="Геотехническая категория по уровню ответственности и сложности условий",
        priority=20,
        tags=("категории", "геотехническая", f"категория-{category}"),
        dependencies=(complexity_block.id,),
        condition=lambda p: geotechnical_category(p) == category,
        variants=(
            InstructionVariant(
                id="variant-sp-rk-102",
                normative=ref(SP_RK_102, "п. 3.8"),
                recommendation=f"Присвоить {category} геотехническую категорию объекта строительства",
            ),
        ),
        calculate_values=lambda p: {
            "geotechnicalCategory": value(category, "категория", "Геотехническая категория", confidence=90),
        },
    )


complexity_I = _complexity_block(1, "I")
complexity_II = _complexity_block(2, "II")
complexity_III = _complexity_block(3, "III")

geotechnical_I = _geotechnical_block(4, "I", complexity_I)
geotechnical_II = _geotechnical_block(5, "II", complexity_II)
geotechnical_III = _geotechnical_block(6, "III", complexity_III)


BLOCKS = (
    complexity_I,
    complexity_II,
    complexity_III,
    geotechnical_I,
    geotechnical_II,
    geotechnical_III,
)
