"""Work generator - turns applied blocks into a merged, ordered list of survey works."""
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from georules.models import (
    GeologicalInput,
    InstructionBlock,
    InstructionVariant,
    Statistics,
    WorkCategory,
    WorkItem,
)
from georules.utils.logging import get_logger

logger = get_logger(__name__)


def _is_emittable(item: object) -> bool:
    """A work item is emitted only with an id, a name and a positive finite quantity."""
    if not isinstance(item, WorkItem):
        return False
    if not item.work_id or not item.name:
        return False
    return math.isfinite(item.quantity) and item.quantity > 0


def generate_works_from_block(
    block: InstructionBlock,
    variant: InstructionVariant,
    project: GeologicalInput,
    category_cap: Optional[WorkCategory] = None,
) -> Tuple[WorkItem, ...]:
    """Run the work rule of a block for its chosen variant.

    Items without an id or name, or with a non-positive or non-finite quantity,
    are dropped. Errors raised by the rule itself propagate to the caller.

    Args:
        block: Applied block
        variant: Variant chosen for the block
        project: Project input
        category_cap: Strictest category the block may emit; stricter items are lowered to it

    Returns:
        Work items stamped with the block id
    """
    if block.generate_works is None:
        return ()

    works: List[WorkItem] = []
    for item in block.generate_works(project, variant) or ():
        if not _is_emittable(item):
            logger.debug(
                "Work item dropped",
                block_id=block.id,
                work_id=getattr(item, "work_id", None),
                quantity=getattr(item, "quantity", None),
            )
            continue

        update: Dict[str, object] = {"source_blocks": (block.id,)}
        if category_cap is not None and item.category.rank < category_cap.rank:
            update["category"] = category_cap
        works.append(item.model_copy(update=update))

    return tuple(works)


def _union(*groups: Iterable[str]) -> Tuple[str, ...]:
    merged: List[str] = []
    for group in groups:
        for value in group:
            if value not in merged:
                merged.append(value)
    return tuple(merged)


def _merge(existing: WorkItem, duplicate: WorkItem) -> WorkItem:
    category = min(existing.category, duplicate.category, key=lambda c: c.rank)
    citations = _union(existing.normative_base.split("; "), duplicate.normative_base.split("; "))
    return existing.model_copy(update={
        "quantity": existing.quantity + duplicate.quantity,
        "category": category,
        "normative_base": "; ".join(citations),
        "tags": _union(existing.tags, duplicate.tags),
        "source_blocks": _union(existing.source_blocks, duplicate.source_blocks),
        "price_table_code": existing.price_table_code or duplicate.price_table_code,
    })


def deduplicate_works(works: Iterable[WorkItem]) -> List[WorkItem]:
    """Merge work items sharing a work id.

    Quantities are summed, the strictest category is kept and citations, tags
    and source blocks are united. First-seen order is preserved and the input
    items are never modified. A merged item whose summed quantity overflows is
    dropped.
    """
    merged: Dict[str, WorkItem] = {}
    for work in works:
        existing = merged.get(work.work_id)
        merged[work.work_id] = work if existing is None else _merge(existing, work)

    kept: List[WorkItem] = []
    for work in merged.values():
        if not math.isfinite(work.quantity):
            logger.warning(
                "Merged work quantity overflowed",
                work_id=work.work_id,
                source_blocks=list(work.source_blocks),
            )
            continue
        kept.append(work)
    return kept


def sort_works(works: Iterable[WorkItem]) -> List[WorkItem]:
    """Order works by category, then survey module, then work id."""
    return sorted(works, key=lambda w: (w.category.rank, w.module.rank, w.work_id))


def calculate_works_statistics(
    works: Iterable[WorkItem],
    blocks_evaluated: int = 0,
    blocks_applied: int = 0,
    blocks_skipped: int = 0,
) -> Statistics:
    """Summarize work items by category and by survey module.

    Args:
        works: Final work items
        blocks_evaluated: Number of blocks in the registry
        blocks_applied: Number of applied blocks
        blocks_skipped: Number of skipped blocks

    Returns:
        Statistics with counts per category and quantity totals per module and unit
    """
    by_category: Dict[WorkCategory, int] = defaultdict(int)
    by_module: Dict[str, int] = defaultdict(int)
    quantities: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(float))
    total = 0

    for work in works:
        total += 1
        by_category[work.category] += 1
        by_module[work.module.value] += 1
        quantities[work.module.value][work.unit] += work.quantity

    return Statistics(
        total_blocks_evaluated=blocks_evaluated,
        blocks_applied=blocks_applied,
        blocks_skipped=blocks_skipped,
        total_works=total,
        mandatory_works=by_category[WorkCategory.MANDATORY],
        recommended_works=by_category[WorkCategory.RECOMMENDED],
        optional_works=by_category[WorkCategory.OPTIONAL],
        works_by_module=dict(by_module),
        quantities_by_module={module: dict(units) for module, units in quantities.items()},
    )
