from typing import Callable, Optional

import pytest


@pytest.fixture
def make_variant() -> Callable:
    """Factory for instruction variants."""
    from georules.models import InstructionVariant, NormativeReference, Tier

    def factory(
        variant_id: str = "variant-a",
        tier: Tier = Tier.MANDATORY,
        document: str = "СП РК 1.02-102-2014",
        section: str = "п. 1",
        **kwargs,
    ) -> InstructionVariant:
        return InstructionVariant(
            id=variant_id,
            normative=NormativeReference(document=document, section=section, tier=tier),
            recommendation=f"Recommendation of {variant_id}",
            **kwargs,
        )

    return factory


@pytest.fixture
def make_block(make_variant: Callable) -> Callable:
    """Factory for instruction blocks; always applicable with one variant by default."""
    from georules.models import InstructionBlock

    def factory(
        block_id: str,
        priority: int = 10,
        variants: Optional[tuple] = None,
        condition: Optional[Callable] = None,
        **kwargs,
    ) -> InstructionBlock:
        return InstructionBlock(
            id=block_id,
            section="Раздел 0: Тестовый",
            title=f"Block {block_id}",
            description="Test block",
            priority=priority,
            condition=condition or (lambda p: True),
            variants=variants if variants is not None else (make_variant(),),
            **kwargs,
        )

    return factory


@pytest.fixture
def make_work() -> Callable:
    """Factory for work items."""
    from georules.models import SurveyModule, WorkCategory, WorkItem

    def factory(
        work_id: str = "work-a",
        quantity: float = 1,
        category: WorkCategory = WorkCategory.MANDATORY,
        module: SurveyModule = SurveyModule.GEOLOGICAL,
        normative_base: str = "СП РК 1.02-102-2014, п. 1",
        **kwargs,
    ) -> WorkItem:
        return WorkItem(
            work_id=work_id,
            name=f"Work {work_id}",
            unit="шт",
            quantity=quantity,
            category=category,
            module=module,
            normative_base=normative_base,
            **kwargs,
        )

    return factory


@pytest.fixture
def project():
    """Empty project input: every field absent."""
    from georules.models import GeologicalInput

    return GeologicalInput()
