"""Condition evaluator - decides which blocks and variants apply to a project.

Also responsible for the structural checks of the block registry and for the
dependency-aware ordering of applicable blocks.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from georules.models import (
    DiagnosticStage,
    GeologicalInput,
    InstructionBlock,
    InstructionVariant,
    RuleDiagnostic,
    SkippedBlock,
    SkipReason,
    Tier,
)
from georules.services.errors import ConfigurationError
from georules.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BlockFilterResult:
    """Blocks split by their applicability to a project."""
    applicable: Tuple[InstructionBlock, ...]
    skipped: Tuple[SkippedBlock, ...]
    diagnostics: Tuple[RuleDiagnostic, ...]


@dataclass(frozen=True)
class VariantFilterResult:
    """Variants of a block that apply to a project."""
    variants: Tuple[InstructionVariant, ...]
    diagnostics: Tuple[RuleDiagnostic, ...]


def _diagnostic(
    block: InstructionBlock,
    stage: DiagnosticStage,
    error: Exception,
    variant: Optional[InstructionVariant] = None,
) -> RuleDiagnostic:
    return RuleDiagnostic(
        block_id=block.id,
        variant_id=variant.id if variant else None,
        stage=stage,
        error_type=type(error).__name__,
        message=str(error),
    )


def _guarded(
    condition: Callable[[GeologicalInput], object],
    project: GeologicalInput,
) -> Tuple[bool, Optional[Exception]]:
    """Run a rule predicate, returning the exception instead of raising it."""
    try:
        return bool(condition(project)), None
    except Exception as e:
        return False, e


def evaluate_block_condition(block: InstructionBlock, project: GeologicalInput) -> bool:
    """Check whether a block applies to the project.

    A condition that raises is logged and treated as not applicable.
    """
    matched, error = _guarded(block.condition, project)
    if error is not None:
        logger.warning("Block condition failed", block_id=block.id, error=str(error))
    return matched


def filter_applicable_blocks(
    blocks: Iterable[InstructionBlock],
    project: GeologicalInput,
) -> BlockFilterResult:
    """Keep the blocks whose condition holds for the project.

    Args:
        blocks: Candidate blocks in registry order
        project: Project input

    Returns:
        BlockFilterResult with applicable blocks (registry order preserved),
        skipped blocks and diagnostics for conditions that raised
    """
    applicable: List[InstructionBlock] = []
    skipped: List[SkippedBlock] = []
    diagnostics: List[RuleDiagnostic] = []

    for block in blocks:
        matched, error = _guarded(block.condition, project)
        if error is not None:
            logger.warning("Block condition failed", block_id=block.id, error=str(error))
            diagnostics.append(_diagnostic(block, DiagnosticStage.CONDITION, error))
            skipped.append(SkippedBlock(block_id=block.id, reason=SkipReason.RULE_ERROR, details=str(error)))
        elif matched:
            applicable.append(block)
        else:
            skipped.append(SkippedBlock(block_id=block.id, reason=SkipReason.CONDITION))

    return BlockFilterResult(tuple(applicable), tuple(skipped), tuple(diagnostics))


def get_applicable_variants(block: InstructionBlock, project: GeologicalInput) -> VariantFilterResult:
    """Get the variants of a block whose own condition holds, in declaration order.

    Variants without a condition always apply.
    """
    variants: List[InstructionVariant] = []
    diagnostics: List[RuleDiagnostic] = []

    for variant in block.variants:
        if variant.condition is None:
            variants.append(variant)
            continue
        matched, error = _guarded(variant.condition, project)
        if error is not None:
            logger.warning("Variant condition failed", block_id=block.id, variant_id=variant.id, error=str(error))
            diagnostics.append(_diagnostic(block, DiagnosticStage.VARIANT_CONDITION, error, variant))
        elif matched:
            variants.append(variant)

    return VariantFilterResult(tuple(variants), tuple(diagnostics))


def has_mandatory_variants(block: InstructionBlock, project: GeologicalInput) -> bool:
    """Check whether any MANDATORY variant of the block applies."""
    return any(v.tier == Tier.MANDATORY for v in get_applicable_variants(block, project).variants)


def check_conflicts(block: InstructionBlock, applied: Sequence[InstructionBlock]) -> List[str]:
    """Find already applied blocks that conflict with ``block``.

    A conflict declared on either side counts.

    Returns:
        IDs of the conflicting applied blocks, in application order
    """
    return [
        other.id
        for other in applied
        if other.id in block.conflicts or block.id in other.conflicts
    ]


def sort_blocks_by_priority(blocks: Iterable[InstructionBlock]) -> Tuple[InstructionBlock, ...]:
    """Order blocks by ascending priority number; ties keep their input order."""
    return tuple(sorted(blocks, key=lambda b: b.priority))


def sort_blocks_with_dependencies(
    blocks: Iterable[InstructionBlock],
    max_depth: int = 10,
) -> Tuple[InstructionBlock, ...]:
    """Order blocks by priority with every block placed after its dependencies.

    Dependencies that are not among ``blocks`` do not affect the order.

    Args:
        blocks: Blocks to order
        max_depth: Longest allowed dependency chain, in edges

    Returns:
        Ordered tuple of blocks

    Raises:
        ConfigurationError: On a dependency cycle or an over-deep chain
    """
    candidates = sort_blocks_by_priority(blocks)
    by_id = {b.id: b for b in candidates}
    position = {b.id: i for i, b in enumerate(candidates)}

    ordered: List[InstructionBlock] = []
    # Longest dependency chain below each placed block, in edges
    depth: Dict[str, int] = {}
    path: List[str] = []

    def visit(block: InstructionBlock) -> int:
        if block.id in depth:
            return depth[block.id]
        if block.id in path:
            cycle = path[path.index(block.id):] + [block.id]
            raise ConfigurationError(block.id, f"dependency cycle {' -> '.join(cycle)}")

        path.append(block.id)
        dependencies = sorted(
            (by_id[d] for d in block.dependencies if d in by_id),
            key=lambda b: position[b.id],
        )
        chain = 0
        for dependency in dependencies:
            chain = max(chain, visit(dependency) + 1)
        path.pop()

        if chain > max_depth:
            raise ConfigurationError(block.id, f"dependency chain deeper than {max_depth}")
        depth[block.id] = chain
        ordered.append(block)
        return chain

    for block in candidates:
        visit(block)

    return tuple(ordered)


def validate_registry(blocks: Sequence[InstructionBlock], max_depth: Optional[int] = None) -> None:
    """Check the structural integrity of a block registry.

    Args:
        blocks: Registry in declaration order
        max_depth: Longest allowed dependency chain; unbounded when omitted

    Raises:
        ConfigurationError: For the first structural fault found
    """
    seen = set()
    for block in blocks:
        if block.id in seen:
            raise ConfigurationError(block.id, "duplicate block id")
        seen.add(block.id)

        if not block.variants:
            raise ConfigurationError(block.id, "block has no variants")

        variant_ids = [v.id for v in block.variants]
        if len(set(variant_ids)) != len(variant_ids):
            raise ConfigurationError(block.id, "duplicate variant id")

    for block in blocks:
        for ref in block.dependencies:
            if ref not in seen:
                raise ConfigurationError(block.id, f"depends on unknown block '{ref}'")
        for ref in block.conflicts:
            if ref not in seen:
                raise ConfigurationError(block.id, f"conflicts with unknown block '{ref}'")

    sort_blocks_with_dependencies(blocks, max_depth if max_depth is not None else len(blocks))
