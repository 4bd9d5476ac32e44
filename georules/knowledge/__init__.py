"""Instruction block knowledge base.

The registry is the concatenation of the section modules in declaration
order. It is immutable; tests and callers may assemble their own registries.
"""
from typing import Dict, Tuple

from georules.knowledge import (
    categories,
    chemistry,
    construction,
    drilling,
    field_tests,
    filtration,
    general,
    geophysics,
    hydrogeology,
    laboratory,
    linear,
    office,
    soil_laboratory,
    specific_soils,
)
from georules.models import InstructionBlock

_SECTION_MODULES = (
    general,
    categories,
    drilling,
    linear,
    laboratory,
    hydrogeology,
    field_tests,
    specific_soils,
    geophysics,
    construction,
    filtration,
    soil_laboratory,
    chemistry,
    office,
)

ALL_INSTRUCTION_BLOCKS: Tuple[InstructionBlock, ...] = tuple(
    block for module in _SECTION_MODULES for block in module.BLOCKS
)


def _group_by_section(blocks) -> Dict[str, Tuple[InstructionBlock, ...]]:
    grouped: Dict[str, list] = {}
    for block in blocks:
        grouped.setdefault(block.section, []).append(block)
    return {section: tuple(items) for section, items in grouped.items()}


BLOCKS_BY_SECTION = _group_by_section(ALL_INSTRUCTION_BLOCKS)

__all__ = [
    "ALL_INSTRUCTION_BLOCKS",
    "BLOCKS_BY_SECTION",
]
