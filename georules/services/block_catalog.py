"""Block catalog - read-only queries over the instruction block registry."""
from collections import Counter
from typing import List, Optional, Sequence, Tuple

from georules.knowledge import ALL_INSTRUCTION_BLOCKS
from georules.models import (
    BlockSummary,
    CatalogStatistics,
    GeologicalInput,
    InstructionBlock,
    Tier,
    VariantOptionsResponse,
    VariantSummary,
)
from georules.services.condition_evaluator import evaluate_block_condition, get_applicable_variants
from georules.services.priority_resolver import prepare_variant_options, validate_variant_choice
from georules.utils.logging import get_logger

logger = get_logger(__name__)


class BlockCatalog:
    """Lookup and summary helpers for a block registry."""

    def __init__(self, blocks: Sequence[InstructionBlock]):
        self.blocks: Tuple[InstructionBlock, ...] = tuple(blocks)
        self._by_id = {block.id: block for block in self.blocks}
        logger.info("Block catalog initialized", block_count=len(self.blocks))

    def get_block_by_id(self, block_id: str) -> Optional[InstructionBlock]:
        """Get a specific block by ID."""
        return self._by_id.get(block_id)

    def get_blocks_by_tag(self, tag: str) -> List[InstructionBlock]:
        """Get all blocks carrying a tag."""
        return [block for block in self.blocks if tag in block.tags]

    def get_blocks_by_section(self, section: str) -> List[InstructionBlock]:
        """Get all blocks of a section."""
        return [block for block in self.blocks if block.section == section]

    def get_mandatory_blocks(self) -> List[InstructionBlock]:
        """Get blocks having at least one MANDATORY variant."""
        return [
            block for block in self.blocks
            if any(v.tier == Tier.MANDATORY for v in block.variants)
        ]

    def get_blocks_by_priority(self, min_priority: int) -> List[InstructionBlock]:
        """Get blocks whose priority number is at least ``min_priority``."""
        return [block for block in self.blocks if block.priority >= min_priority]

    def summarize(self, block: InstructionBlock) -> BlockSummary:
        """Public description of a block."""
        return BlockSummary(
            id=block.id,
            section=block.section,
            title=block.title,
            description=block.description,
            priority=block.priority,
            tags=list(block.tags),
            dependencies=list(block.dependencies),
            conflicts=list(block.conflicts),
            generates_works=block.generate_works is not None,
            variants=[
                VariantSummary(
                    id=v.id,
                    tier=v.tier,
                    normative=v.normative.citation,
                    recommendation=v.recommendation,
                    conditional=v.condition is not None,
                    promote_to_works=v.promote_to_works,
                )
                for v in block.variants
            ],
        )

    def variant_options(
        self,
        block: InstructionBlock,
        project: GeologicalInput,
        chosen_variant_id: Optional[str] = None,
    ) -> VariantOptionsResponse:
        """Rank the applicable variants of a block for a manual choice.

        Args:
            block: Block to inspect
            project: Project input
            chosen_variant_id: Optional manual choice to validate

        Returns:
            VariantOptionsResponse with ranked options
        """
        applicable = evaluate_block_condition(block, project)
        variants = get_applicable_variants(block, project).variants if applicable else ()
        choice = None
        if chosen_variant_id is not None:
            choice = validate_variant_choice(block, chosen_variant_id, project)
        return VariantOptionsResponse(
            block_id=block.id,
            applicable=applicable,
            options=prepare_variant_options(variants),
            choice=choice,
        )

    def get_statistics(self) -> CatalogStatistics:
        """Knowledge base statistics."""
        sections = Counter(block.section for block in self.blocks)
        tiers = Counter(v.tier.value for block in self.blocks for v in block.variants)
        tags = sorted({tag for block in self.blocks for tag in block.tags})
        return CatalogStatistics(
            total_blocks=len(self.blocks),
            total_variants=sum(len(block.variants) for block in self.blocks),
            blocks_by_section=dict(sections),
            variants_by_tier=dict(tiers),
            mandatory_blocks=len(self.get_mandatory_blocks()),
            work_generating_blocks=sum(1 for block in self.blocks if block.generate_works is not None),
            tags=tags,
        )


# Global catalog instance over the built-in knowledge base
_catalog: Optional[BlockCatalog] = None


def get_block_catalog() -> BlockCatalog:
    """Get the global block catalog instance.

    Returns:
        BlockCatalog singleton
    """
    global _catalog
    if _catalog is None:
        _catalog = BlockCatalog(ALL_INSTRUCTION_BLOCKS)
    return _catalog
