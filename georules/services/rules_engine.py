"""Rules engine - evaluates the instruction block registry against a project.

A run moves through FILTERING, ORDERING, RESOLVING, GENERATING and AGGREGATING.
Every step takes the output of the previous one and returns a new value; the
engine keeps no per-run state, so one instance can serve concurrent callers.
"""
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from georules.models import (
    AppliedBlock,
    DiagnosticStage,
    EngineState,
    GeologicalInput,
    InstructionBlock,
    RecommendedValue,
    RuleDiagnostic,
    RulesEngineConfig,
    RulesEngineResult,
    SkippedBlock,
    SkipReason,
    Tier,
    WorkCategory,
    WorkItem,
)
from georules.services.condition_evaluator import (
    check_conflicts,
    filter_applicable_blocks,
    get_applicable_variants,
    sort_blocks_with_dependencies,
    validate_registry,
)
from georules.services.errors import ConfigurationError
from georules.services.priority_resolver import (
    VariantSelection,
    document_class_of,
    select_best_variant,
    validate_variant_choice,
)
from georules.services.work_generator import (
    calculate_works_statistics,
    deduplicate_works,
    generate_works_from_block,
    sort_works,
)
from georules.knowledge import ALL_INSTRUCTION_BLOCKS
from georules.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedBlock:
    """An applicable block with its winning variant."""
    block: InstructionBlock
    selection: VariantSelection


@dataclass(frozen=True)
class EngineRun:
    """Intermediate value passed from one engine step to the next."""
    project: GeologicalInput
    evaluated: int
    blocks: Tuple[InstructionBlock, ...] = ()
    resolved: Tuple[ResolvedBlock, ...] = ()
    applied: Tuple[AppliedBlock, ...] = ()
    works: Tuple[WorkItem, ...] = ()
    skipped: Tuple[SkippedBlock, ...] = ()
    diagnostics: Tuple[RuleDiagnostic, ...] = ()
    warnings: Tuple[str, ...] = ()
    conflicts: Tuple[str, ...] = ()


class RulesEngine:
    """Applies an instruction block registry to project inputs."""

    def __init__(
        self,
        registry: Sequence[InstructionBlock],
        config: Optional[RulesEngineConfig] = None,
    ):
        """Initialize the engine and validate the registry.

        Args:
            registry: Instruction blocks in declaration order
            config: Run options; defaults come from settings

        Raises:
            ConfigurationError: If the registry is structurally invalid
        """
        self.registry: Tuple[InstructionBlock, ...] = tuple(registry)
        self.config = config or RulesEngineConfig()
        try:
            validate_registry(self.registry, self.config.max_dependency_depth)
        except ConfigurationError as e:
            logger.error("Invalid instruction registry", block_id=e.block_id, error=e.message)
            raise
        self._trace: Callable[..., Any] = logger.info if self.config.verbose_logging else logger.debug
        logger.info("Rules engine initialized", block_count=len(self.registry))

    def run(self, project: Union[GeologicalInput, Mapping[str, Any]]) -> RulesEngineResult:
        """Evaluate all blocks against a project.

        Args:
            project: Project input, or a mapping validated into one

        Returns:
            RulesEngineResult with applied blocks, merged works and statistics

        Raises:
            ConfigurationError: On a structural fault found during the run
        """
        if not isinstance(project, GeologicalInput):
            project = GeologicalInput.model_validate(project)

        started = time.perf_counter()
        state = EngineState.IDLE
        logger.info("Starting rules engine run", project_name=project.project_name, block_count=len(self.registry))

        steps = (
            (EngineState.FILTERING, self.filter),
            (EngineState.ORDERING, self.order),
            (EngineState.RESOLVING, self.resolve),
            (EngineState.GENERATING, self.generate),
        )
        current = EngineRun(project=project, evaluated=len(self.registry), blocks=self.registry)
        try:
            for state, step in steps:
                self._trace("Engine state", state=state.value)
                current = step(current)
            state = EngineState.AGGREGATING
            result = self.aggregate(current)
        except ConfigurationError as e:
            logger.error(
                "Rules engine run failed",
                state=EngineState.ERROR.value,
                failed_state=state.value,
                block_id=e.block_id,
                error=e.message,
            )
            raise e.at_state(state) from e

        logger.info(
            "Rules engine run completed",
            state=EngineState.DONE.value,
            blocks_applied=result.statistics.blocks_applied,
            blocks_skipped=result.statistics.blocks_skipped,
            total_works=result.statistics.total_works,
            diagnostics=len(result.diagnostics),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

    def filter(self, run: EngineRun) -> EngineRun:
        """Keep the blocks whose condition holds."""
        filtered = filter_applicable_blocks(run.blocks, run.project)
        self._trace("Blocks filtered", applicable=len(filtered.applicable), skipped=len(filtered.skipped))
        return replace(
            run,
            blocks=filtered.applicable,
            skipped=run.skipped + filtered.skipped,
            diagnostics=run.diagnostics + filtered.diagnostics,
        )

    def order(self, run: EngineRun) -> EngineRun:
        """Order applicable blocks by priority and dependencies."""
        ordered = sort_blocks_with_dependencies(run.blocks, self.config.max_dependency_depth)
        return replace(run, blocks=ordered)

    def resolve(self, run: EngineRun) -> EngineRun:
        """Pick the winning variant of every ordered block."""
        resolved: List[ResolvedBlock] = []
        skipped: List[SkippedBlock] = []
        diagnostics: List[RuleDiagnostic] = []
        warnings: List[str] = []

        for block in run.blocks:
            variants = get_applicable_variants(block, run.project)
            diagnostics.extend(variants.diagnostics)

            if not variants.variants:
                self._trace("Block has no applicable variants", block_id=block.id)
                skipped.append(SkippedBlock(
                    block_id=block.id,
                    reason=SkipReason.NO_VARIANTS,
                    details="no applicable variants",
                ))
                continue

            selection = self._select(block, variants.variants, run.project, warnings)

            if selection.tier == Tier.REFERENCE and not self.config.include_reference_blocks:
                skipped.append(SkippedBlock(
                    block_id=block.id,
                    reason=SkipReason.REFERENCE_EXCLUDED,
                    details=f"variant {selection.variant.id} is of reference tier",
                ))
                continue

            if selection.alternatives:
                warnings.append(f"{block.id}: {len(selection.alternatives)} alternative variant(s) available")
            warnings.extend(f"{block.id}: {w}" for w in selection.variant.warnings)

            self._trace(
                "Variant selected",
                block_id=block.id,
                variant_id=selection.variant.id,
                tier=selection.tier.value,
                reason=selection.reason,
            )
            resolved.append(ResolvedBlock(block=block, selection=selection))

        return replace(
            run,
            resolved=tuple(resolved),
            skipped=run.skipped + tuple(skipped),
            diagnostics=run.diagnostics + tuple(diagnostics),
            warnings=run.warnings + tuple(warnings),
        )

    def _select(
        self,
        block: InstructionBlock,
        variants: Tuple,
        project: GeologicalInput,
        warnings: List[str],
    ) -> VariantSelection:
        override = self.config.variant_overrides.get(block.id)
        if override is not None:
            choice = validate_variant_choice(block, override, project)
            warnings.extend(f"{block.id}: {w}" for w in choice.warnings)
            if choice.valid:
                chosen = block.get_variant(override)
                return VariantSelection(
                    variant=chosen,
                    tier=chosen.tier,
                    document_class=document_class_of(chosen.normative),
                    reason="manual choice",
                    alternatives=tuple(v for v in variants if v.id != chosen.id),
                )
            warnings.append(f"{block.id}: manual choice '{override}' ignored")

        if not self.config.auto_select_variant:
            first = variants[0]
            return VariantSelection(
                variant=first,
                tier=first.tier,
                document_class=document_class_of(first.normative),
                reason="first applicable variant",
                alternatives=variants[1:],
            )

        return select_best_variant(variants)

    def generate(self, run: EngineRun) -> EngineRun:
        """Compute values and emit works for every resolved block."""
        applied_blocks: List[InstructionBlock] = []
        applied: List[AppliedBlock] = []
        works: List[WorkItem] = []
        skipped: List[SkippedBlock] = []
        diagnostics: List[RuleDiagnostic] = []
        conflicts: List[str] = []

        for item in run.resolved:
            block, selection = item.block, item.selection
            variant = selection.variant

            conflicting = check_conflicts(block, applied_blocks)
            if conflicting:
                message = f"{block.id} conflicts with {', '.join(conflicting)}"
                conflicts.append(message)
                skipped.append(SkippedBlock(block_id=block.id, reason=SkipReason.CONFLICT, details=message))
                continue

            stage = DiagnosticStage.CALCULATE_VALUES
            try:
                calculated: Dict[str, RecommendedValue] = {}
                if block.calculate_values is not None:
                    calculated = {
                        name: RecommendedValue.model_validate(value)
                        for name, value in (block.calculate_values(run.project) or {}).items()
                    }

                stage = DiagnosticStage.GENERATE_WORKS
                block_works: Tuple[WorkItem, ...] = ()
                if selection.tier != Tier.REFERENCE:
                    block_works = generate_works_from_block(block, variant, run.project)
                elif variant.promote_to_works:
                    block_works = generate_works_from_block(
                        block, variant, run.project, category_cap=WorkCategory.OPTIONAL
                    )
            except Exception as e:
                logger.warning("Block rule failed", block_id=block.id, stage=stage.value, error=str(e))
                diagnostics.append(RuleDiagnostic(
                    block_id=block.id,
                    variant_id=variant.id,
                    stage=stage,
                    error_type=type(e).__name__,
                    message=str(e),
                ))
                skipped.append(SkippedBlock(block_id=block.id, reason=SkipReason.RULE_ERROR, details=str(e)))
                continue

            applied_blocks.append(block)
            applied.append(AppliedBlock(
                block_id=block.id,
                section=block.section,
                title=block.title,
                variant_id=variant.id,
                tier=selection.tier,
                normative=variant.normative.citation,
                recommendation=variant.recommendation,
                alternatives=len(selection.alternatives),
                calculated_values=calculated,
                work_ids=[w.work_id for w in block_works],
            ))
            works.extend(block_works)
            self._trace("Block applied", block_id=block.id, works=len(block_works))

        return replace(
            run,
            applied=tuple(applied),
            works=tuple(works),
            skipped=run.skipped + tuple(skipped),
            diagnostics=run.diagnostics + tuple(diagnostics),
            conflicts=run.conflicts + tuple(conflicts),
        )

    def aggregate(self, run: EngineRun) -> RulesEngineResult:
        """Merge duplicate works, order them and compute statistics."""
        works = sort_works(deduplicate_works(run.works))
        statistics = calculate_works_statistics(
            works,
            blocks_evaluated=run.evaluated,
            blocks_applied=len(run.applied),
            blocks_skipped=len(run.skipped),
        )
        return RulesEngineResult(
            input=run.project,
            applied_blocks=list(run.applied),
            works=works,
            statistics=statistics,
            skipped_blocks=list(run.skipped),
            diagnostics=list(run.diagnostics),
            warnings=list(run.warnings),
            conflicts=list(run.conflicts),
        )


def run(
    project: Union[GeologicalInput, Mapping[str, Any]],
    registry: Optional[Sequence[InstructionBlock]] = None,
    config: Optional[RulesEngineConfig] = None,
) -> RulesEngineResult:
    """Run the rules engine once.

    Args:
        project: Project input
        registry: Instruction blocks; the built-in knowledge base when omitted
        config: Run options

    Returns:
        RulesEngineResult
    """
    if registry is None:
        registry = ALL_INSTRUCTION_BLOCKS
    return RulesEngine(registry, config).run(project)


# Global engine instance over the built-in knowledge base
_engine: Optional[RulesEngine] = None


def get_rules_engine() -> RulesEngine:
    """Get the global rules engine instance.

    Returns:
        RulesEngine singleton
    """
    global _engine
    if _engine is None:
        _engine = RulesEngine(ALL_INSTRUCTION_BLOCKS)
    return _engine
