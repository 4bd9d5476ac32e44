import math

import pytest


@pytest.mark.parametrize("quantity", [0, -2, math.nan, math.inf])
def test_non_positive_or_non_finite_quantities_are_dropped(make_block, make_variant, project, quantity: float) -> None:
    from georules.knowledge.common import work
    from georules.services.work_generator import generate_works_from_block

    variant = make_variant()
    block = make_block(
        "block-works",
        variants=(variant,),
        generate_works=lambda p, v: [
            work("work-kept", "Kept", 2, "скв", v),
            work("work-dropped", "Dropped", quantity, "скв", v),
        ],
    )

    works = generate_works_from_block(block, variant, project)

    assert [w.work_id for w in works] == ["work-kept"]


def test_generated_works_are_stamped_with_block(make_block, make_variant, project) -> None:
    from georules.knowledge.common import work
    from georules.services.work_generator import generate_works_from_block

    variant = make_variant(document="ГОСТ 25100-2020", section="п. 4")
    block = make_block(
        "block-chem",
        variants=(variant,),
        generate_works=lambda p, v: [work("LAB-X", "Анализ", 3, "анализ", v)],
    )

    (item,) = generate_works_from_block(block, variant, project)

    assert item.source_blocks == ("block-chem",)
    assert item.normative_base == "ГОСТ 25100-2020, п. 4"


def test_block_without_work_rule_emits_nothing(make_block, make_variant, project) -> None:
    from georules.services.work_generator import generate_works_from_block

    variant = make_variant()
    assert generate_works_from_block(make_block("block-none", variants=(variant,)), variant, project) == ()


def test_category_cap_lowers_stricter_items(make_block, make_variant, project) -> None:
    from georules.knowledge.common import work
    from georules.models import WorkCategory
    from georules.services.work_generator import generate_works_from_block

    variant = make_variant()
    block = make_block(
        "block-capped",
        variants=(variant,),
        generate_works=lambda p, v: [
            work("work-mandatory", "M", 1, "шт", v, category=WorkCategory.MANDATORY),
            work("work-optional", "O", 1, "шт", v, category=WorkCategory.OPTIONAL),
        ],
    )

    works = generate_works_from_block(block, variant, project, category_cap=WorkCategory.OPTIONAL)

    assert {w.category for w in works} == {WorkCategory.OPTIONAL}


def test_work_rule_errors_propagate(make_block, make_variant, project) -> None:
    from georules.services.work_generator import generate_works_from_block

    def broken(p, v):
        raise ValueError("no area")

    variant = make_variant()
    block = make_block("block-broken", variants=(variant,), generate_works=broken)

    with pytest.raises(ValueError):
        generate_works_from_block(block, variant, project)


def test_deduplicate_merges_quantities_and_keeps_strictest_category(make_work) -> None:
    from georules.models import WorkCategory
    from georules.services.work_generator import deduplicate_works

    first = make_work(
        "hydro-observation-wells",
        quantity=4,
        category=WorkCategory.RECOMMENDED,
        normative_base="ВСН 34.2-88, п. 4.11",
        tags=("откачки",),
        source_blocks=("block-a",),
    )
    other = make_work("work-other", quantity=1)
    second = make_work(
        "hydro-observation-wells",
        quantity=6,
        category=WorkCategory.MANDATORY,
        normative_base="СП РК 1.02-102-2014, п. 5.14",
        tags=("откачки", "скважины"),
        source_blocks=("block-b",),
        price_table_code="1602-0301",
    )

    merged = deduplicate_works([first, other, second])

    assert [w.work_id for w in merged] == ["hydro-observation-wells", "work-other"]
    wells = merged[0]
    assert wells.quantity == 10
    assert wells.category == WorkCategory.MANDATORY
    assert wells.normative_base == "ВСН 34.2-88, п. 4.11; СП РК 1.02-102-2014, п. 5.14"
    assert wells.tags == ("откачки", "скважины")
    assert wells.source_blocks == ("block-a", "block-b")
    assert wells.price_table_code == "1602-0301"
    # inputs untouched
    assert first.quantity == 4
    assert first.category == WorkCategory.RECOMMENDED


def test_deduplicate_is_idempotent(make_work) -> None:
    from georules.services.work_generator import deduplicate_works

    works = [make_work("work-a", quantity=2), make_work("work-b"), make_work("work-a", quantity=3)]

    once = deduplicate_works(works)
    twice = deduplicate_works(once)

    assert twice == once
    assert len({w.work_id for w in once}) == len(once)


def test_deduplicate_drops_merged_quantity_overflow(make_work) -> None:
    from georules.services.work_generator import deduplicate_works

    works = [make_work("work-big", quantity=1e308), make_work("work-small"), make_work("work-big", quantity=1e308)]

    merged = deduplicate_works(works)

    assert [w.work_id for w in merged] == ["work-small"]
    assert all(math.isfinite(w.quantity) for w in merged)


def test_sort_works_by_category_module_and_id(make_work) -> None:
    from georules.models import SurveyModule, WorkCategory
    from georules.services.work_generator import sort_works

    works = [
        make_work("z-optional", category=WorkCategory.OPTIONAL),
        make_work("b-inspection", module=SurveyModule.INSPECTION),
        make_work("c-geological"),
        make_work("a-recommended", category=WorkCategory.RECOMMENDED),
        make_work("a-geodetic", module=SurveyModule.GEODETIC),
        make_work("a-geological"),
    ]

    ordered = [w.work_id for w in sort_works(works)]

    assert ordered == [
        "a-geological",
        "c-geological",
        "a-geodetic",
        "b-inspection",
        "a-recommended",
        "z-optional",
    ]


def test_works_statistics(make_work) -> None:
    from georules.models import SurveyModule, WorkCategory
    from georules.services.work_generator import calculate_works_statistics

    works = [
        make_work("work-a", quantity=3),
        make_work("work-b", quantity=2, category=WorkCategory.RECOMMENDED),
        make_work("work-c", quantity=1.5, category=WorkCategory.OPTIONAL, module=SurveyModule.GEODETIC),
    ]

    stats = calculate_works_statistics(works, blocks_evaluated=10, blocks_applied=4, blocks_skipped=6)

    assert stats.total_works == 3
    assert stats.mandatory_works == 1
    assert stats.recommended_works == 1
    assert stats.optional_works == 1
    assert stats.works_by_module == {"geological": 2, "geodetic": 1}
    assert stats.quantities_by_module == {"geological": {"шт": 5.0}, "geodetic": {"шт": 1.5}}
    assert stats.total_blocks_evaluated == 10
    assert stats.blocks_applied == 4
    assert stats.blocks_skipped == 6


def test_statistics_of_no_works() -> None:
    from georules.services.work_generator import calculate_works_statistics

    stats = calculate_works_statistics([])

    assert stats.total_works == 0
    assert stats.mandatory_works == 0
    assert stats.works_by_module == {}
