import pytest


def test_filter_keeps_registry_order_and_records_skips(make_block, project) -> None:
    from georules.models import SkipReason
    from georules.services.condition_evaluator import filter_applicable_blocks

    blocks = [
        make_block("block-b", priority=5),
        make_block("block-a", priority=1, condition=lambda p: p.has_groundwater is True),
        make_block("block-c", priority=3),
    ]

    result = filter_applicable_blocks(blocks, project)

    assert [b.id for b in result.applicable] == ["block-b", "block-c"]
    assert len(result.skipped) == 1
    assert result.skipped[0].block_id == "block-a"
    assert result.skipped[0].reason == SkipReason.CONDITION
    assert result.diagnostics == ()


def test_raising_condition_becomes_diagnostic(make_block, project) -> None:
    from georules.models import DiagnosticStage, SkipReason
    from georules.services.condition_evaluator import filter_applicable_blocks

    def broken(p):
        return p.area_size > 10  # None > 10 raises TypeError

    result = filter_applicable_blocks([make_block("block-broken", condition=broken)], project)

    assert result.applicable == ()
    assert result.skipped[0].reason == SkipReason.RULE_ERROR
    assert result.diagnostics[0].block_id == "block-broken"
    assert result.diagnostics[0].stage == DiagnosticStage.CONDITION
    assert result.diagnostics[0].error_type == "TypeError"


def test_evaluate_block_condition_treats_errors_as_false(make_block, project) -> None:
    from georules.services.condition_evaluator import evaluate_block_condition

    block = make_block("block-x", condition=lambda p: p.area_size > 1)
    assert evaluate_block_condition(block, project) is False


def test_applicable_variants_respect_own_conditions(make_block, make_variant) -> None:
    from georules.models import DiagnosticStage, GeologicalInput
    from georules.services.condition_evaluator import get_applicable_variants

    block = make_block("block-v", variants=(
        make_variant("variant-always"),
        make_variant("variant-teo", condition=lambda p: p.design_stage == "ТЭО"),
        make_variant("variant-broken", condition=lambda p: p.area_size > 0),
    ))

    result = get_applicable_variants(block, GeologicalInput(design_stage="ТЭО"))

    assert [v.id for v in result.variants] == ["variant-always", "variant-teo"]
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].variant_id == "variant-broken"
    assert result.diagnostics[0].stage == DiagnosticStage.VARIANT_CONDITION


def test_has_mandatory_variants(make_block, make_variant, project) -> None:
    from georules.models import Tier
    from georules.services.condition_evaluator import has_mandatory_variants

    reference_only = make_block("block-ref", variants=(make_variant(tier=Tier.REFERENCE),))
    mixed = make_block("block-mixed", variants=(
        make_variant("variant-ref", tier=Tier.REFERENCE),
        make_variant("variant-mand", tier=Tier.MANDATORY),
    ))

    assert has_mandatory_variants(reference_only, project) is False
    assert has_mandatory_variants(mixed, project) is True


def test_check_conflicts_is_symmetric(make_block) -> None:
    from georules.services.condition_evaluator import check_conflicts

    first = make_block("block-first", conflicts=("block-second",))
    second = make_block("block-second")
    unrelated = make_block("block-other")

    assert check_conflicts(second, [first, unrelated]) == ["block-first"]
    assert check_conflicts(first, [second]) == ["block-second"]
    assert check_conflicts(unrelated, [first, second]) == []


def test_sort_by_priority_is_stable(make_block) -> None:
    from georules.services.condition_evaluator import sort_blocks_by_priority

    blocks = [
        make_block("block-late", priority=20),
        make_block("block-tie-1", priority=10),
        make_block("block-tie-2", priority=10),
        make_block("block-early", priority=1),
    ]

    ordered = sort_blocks_by_priority(blocks)

    assert [b.id for b in ordered] == ["block-early", "block-tie-1", "block-tie-2", "block-late"]


@pytest.mark.parametrize("dependent_first", [True, False])
@pytest.mark.parametrize("dependent_priority,base_priority", [(1, 50), (50, 1), (10, 10)])
def test_dependencies_are_placed_first(
    make_block,
    dependent_first: bool,
    dependent_priority: int,
    base_priority: int,
) -> None:
    from georules.services.condition_evaluator import sort_blocks_with_dependencies

    dependent = make_block("block-dependent", priority=dependent_priority, dependencies=("block-base",))
    base = make_block("block-base", priority=base_priority)
    middle = make_block("block-middle", priority=20)
    blocks = [dependent, middle, base] if dependent_first else [base, middle, dependent]

    ordered = [b.id for b in sort_blocks_with_dependencies(blocks)]

    assert ordered.index("block-base") < ordered.index("block-dependent")
    assert sorted(ordered) == ["block-base", "block-dependent", "block-middle"]


def test_dependency_pulls_base_ahead_of_priority(make_block) -> None:
    from georules.services.condition_evaluator import sort_blocks_with_dependencies

    blocks = [
        make_block("block-dependent", priority=1, dependencies=("block-base",)),
        make_block("block-base", priority=50),
        make_block("block-middle", priority=20),
    ]

    ordered = [b.id for b in sort_blocks_with_dependencies(blocks)]

    assert ordered == ["block-base", "block-dependent", "block-middle"]


def test_missing_dependency_does_not_affect_order(make_block) -> None:
    from georules.services.condition_evaluator import sort_blocks_with_dependencies

    blocks = [
        make_block("block-b", priority=2, dependencies=("block-filtered-out",)),
        make_block("block-a", priority=1),
    ]

    assert [b.id for b in sort_blocks_with_dependencies(blocks)] == ["block-a", "block-b"]


def test_dependency_cycle_raises(make_block) -> None:
    from georules.services.condition_evaluator import sort_blocks_with_dependencies
    from georules.services.errors import ConfigurationError

    blocks = [
        make_block("block-a", dependencies=("block-b",)),
        make_block("block-b", dependencies=("block-a",)),
    ]

    with pytest.raises(ConfigurationError) as exc_info:
        sort_blocks_with_dependencies(blocks)

    assert "dependency cycle" in exc_info.value.message
    assert exc_info.value.block_id == "block-a"


@pytest.mark.parametrize("deepest_first", [True, False])
def test_dependency_chain_depth_is_bounded_for_any_order(make_block, deepest_first: bool) -> None:
    from georules.services.condition_evaluator import sort_blocks_with_dependencies, validate_registry
    from georules.services.errors import ConfigurationError

    # block-3 -> block-2 -> block-1 -> block-0
    blocks = [make_block("block-0")] + [
        make_block(f"block-{i}", dependencies=(f"block-{i - 1}",)) for i in range(1, 4)
    ]
    if deepest_first:
        blocks.reverse()

    ordered = sort_blocks_with_dependencies(blocks, max_depth=3)
    assert [b.id for b in ordered] == ["block-0", "block-1", "block-2", "block-3"]

    with pytest.raises(ConfigurationError, match="deeper than 2") as exc_info:
        sort_blocks_with_dependencies(blocks, max_depth=2)
    assert exc_info.value.block_id == "block-3"

    with pytest.raises(ConfigurationError, match="deeper than 2"):
        validate_registry(blocks, max_depth=2)


def test_shared_dependency_depth_counts_longest_chain(make_block) -> None:
    from georules.services.condition_evaluator import sort_blocks_with_dependencies
    from georules.services.errors import ConfigurationError

    # block-top depends on a short and on a long chain ending in block-base
    blocks = [
        make_block("block-base"),
        make_block("block-short", dependencies=("block-base",)),
        make_block("block-mid", dependencies=("block-base",)),
        make_block("block-long", dependencies=("block-mid",)),
        make_block("block-top", dependencies=("block-short", "block-long")),
    ]

    assert len(sort_blocks_with_dependencies(blocks, max_depth=3)) == 5
    with pytest.raises(ConfigurationError) as exc_info:
        sort_blocks_with_dependencies(blocks, max_depth=2)
    assert exc_info.value.block_id == "block-top"


@pytest.mark.parametrize(
    "blocks_spec,expected_block,expected_message",
    [
        ([("block-a", {}), ("block-a", {})], "block-a", "duplicate block id"),
        ([("block-a", {"variants": ()})], "block-a", "no variants"),
        ([("block-a", {"dependencies": ("block-unknown",)})], "block-a", "unknown block"),
        ([("block-a", {"conflicts": ("block-unknown",)})], "block-a", "unknown block"),
    ],
)
def test_validate_registry_rejects_structural_faults(
    make_block,
    blocks_spec: list,
    expected_block: str,
    expected_message: str,
) -> None:
    from georules.services.condition_evaluator import validate_registry
    from georules.services.errors import ConfigurationError

    blocks = [make_block(block_id, **kwargs) for block_id, kwargs in blocks_spec]

    with pytest.raises(ConfigurationError) as exc_info:
        validate_registry(blocks)

    assert exc_info.value.block_id == expected_block
    assert expected_message in exc_info.value.message


def test_validate_registry_rejects_duplicate_variant_ids(make_block, make_variant) -> None:
    from georules.services.condition_evaluator import validate_registry
    from georules.services.errors import ConfigurationError

    block = make_block("block-a", variants=(make_variant("variant-x"), make_variant("variant-x")))

    with pytest.raises(ConfigurationError, match="duplicate variant id"):
        validate_registry([block])
