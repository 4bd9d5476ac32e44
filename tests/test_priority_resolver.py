import pytest


def test_classify_document_by_marker() -> None:
    from georules.models import DocumentClass
    from georules.services.priority_resolver import classify_document

    assert classify_document("Правила осуществления инженерно-геологических изысканий РК") == DocumentClass.RULES
    assert classify_document("СН РК 1.02-03-2011") == DocumentClass.STATE_NORMS
    assert classify_document("СП РК 1.02-105-2014") == DocumentClass.BUILDING_CODE
    assert classify_document("СТ РК 1284-2004") == DocumentClass.STATE_STANDARD
    assert classify_document("ГОСТ 25100-2020") == DocumentClass.GOST
    assert classify_document("ВСН 34.2-88") == DocumentClass.INDUSTRY_NORMS
    assert classify_document("Методическое пособие") == DocumentClass.UNCLASSIFIED


def test_explicit_document_class_wins_over_title() -> None:
    from georules.models import DocumentClass, NormativeReference, Tier
    from georules.services.priority_resolver import document_class_of

    normative = NormativeReference(
        document="ГОСТ 25100-2020",
        section="п. 1",
        tier=Tier.MANDATORY,
        document_class=DocumentClass.RULES,
    )

    assert document_class_of(normative) == DocumentClass.RULES


def test_select_best_variant_returns_none_without_variants() -> None:
    from georules.services.priority_resolver import select_best_variant

    assert select_best_variant([]) is None


def test_single_variant_is_selected_without_alternatives(make_variant) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import select_best_variant

    only = make_variant("variant-only", tier=Tier.REFERENCE)
    selection = select_best_variant([only])

    assert selection.variant is only
    assert selection.tier == Tier.REFERENCE
    assert selection.alternatives == ()
    assert selection.reason == "only applicable variant"


def test_tier_outranks_document(make_variant) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import select_best_variant

    rules_reference = make_variant(
        "variant-rules", tier=Tier.REFERENCE, document="Правила осуществления изысканий"
    )
    gost_mandatory = make_variant("variant-gost", tier=Tier.MANDATORY, document="ГОСТ 19912-2012")
    recommended = make_variant("variant-rec", tier=Tier.RECOMMENDED, document="СП РК 1.02-102-2014")

    selection = select_best_variant([rules_reference, recommended, gost_mandatory])

    assert selection.variant.id == "variant-gost"
    assert selection.reason.startswith("highest tier")
    assert [v.id for v in selection.alternatives] == ["variant-rec", "variant-rules"]


@pytest.mark.parametrize("reverse", [False, True])
def test_document_precedence_breaks_ties_regardless_of_declaration_order(make_variant, reverse: bool) -> None:
    from georules.models import DocumentClass
    from georules.services.priority_resolver import select_best_variant

    variants = [
        make_variant("variant-sp-rk-105", document="СП РК 1.02-105-2014"),
        make_variant("variant-rules-2020", document="Правила осуществления инженерно-геологических изысканий РК"),
    ]
    if reverse:
        variants.reverse()

    selection = select_best_variant(variants)

    assert selection.variant.id == "variant-rules-2020"
    assert selection.document_class == DocumentClass.RULES
    assert "governing document" in selection.reason


def test_equal_variants_keep_declaration_order(make_variant) -> None:
    from georules.services.priority_resolver import compare_variants, select_best_variant

    first = make_variant("variant-first")
    second = make_variant("variant-second")

    assert select_best_variant([first, second]).variant is first
    comparison = compare_variants(first, second)
    assert comparison.winner is first
    assert comparison.tier_difference == 0
    assert comparison.document_difference == 0


def test_compare_variants_reports_differences(make_variant) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import compare_variants

    gost = make_variant("variant-gost", document="ГОСТ 12071-2014")
    vsn = make_variant("variant-vsn", document="ВСН 34.2-88")
    reference = make_variant("variant-ref", tier=Tier.REFERENCE)

    by_document = compare_variants(vsn, gost)
    assert by_document.winner is gost
    assert by_document.document_difference == 1

    by_tier = compare_variants(reference, vsn)
    assert by_tier.winner is vsn
    assert by_tier.tier_difference == 2


def test_get_variants_by_tier(make_variant) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import get_variants_by_tier

    variants = [
        make_variant("variant-a", tier=Tier.RECOMMENDED),
        make_variant("variant-b", tier=Tier.MANDATORY),
        make_variant("variant-c", tier=Tier.RECOMMENDED),
    ]

    assert [v.id for v in get_variants_by_tier(variants, Tier.RECOMMENDED)] == ["variant-a", "variant-c"]


def test_variant_options_are_ranked_like_selection(make_variant) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import prepare_variant_options, select_best_variant

    variants = [
        make_variant("variant-ref", tier=Tier.REFERENCE, note="Справочно"),
        make_variant("variant-gost", document="ГОСТ 19912-2012"),
        make_variant("variant-sp", document="СП РК 1.02-102-2014"),
    ]

    options = prepare_variant_options(variants)

    assert [o.variant_id for o in options] == ["variant-sp", "variant-gost", "variant-ref"]
    assert [o.rank for o in options] == [1, 2, 3]
    assert options[0].is_recommended is True
    assert not any(o.is_recommended for o in options[1:])
    assert options[0].variant_id == select_best_variant(variants).variant.id
    scores = [o.score for o in options]
    assert scores == sorted(scores, reverse=True)
    assert options[2].description.endswith("Справочно")


def test_variant_score_values(make_variant) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import variant_score

    assert variant_score(make_variant(document="Правила осуществления изысканий")) == 1099
    assert variant_score(make_variant(tier=Tier.REFERENCE, document="Пособие")) == 101


def test_validate_variant_choice(make_block, make_variant, project) -> None:
    from georules.models import Tier
    from georules.services.priority_resolver import validate_variant_choice

    block = make_block("block-choice", variants=(
        make_variant("variant-mand"),
        make_variant("variant-ref", tier=Tier.REFERENCE, warnings=("Проверить вручную",)),
        make_variant("variant-never", condition=lambda p: False),
    ))

    best = validate_variant_choice(block, "variant-mand", project)
    assert best.valid is True
    assert best.warnings == []

    outranked = validate_variant_choice(block, "variant-ref", project)
    assert outranked.valid is True
    assert "variant-mand" in outranked.warnings[0]
    assert outranked.warnings[-1] == "Проверить вручную"

    inapplicable = validate_variant_choice(block, "variant-never", project)
    assert inapplicable.valid is False

    unknown = validate_variant_choice(block, "variant-missing", project)
    assert unknown.valid is False
    assert "not defined" in unknown.warnings[0]
