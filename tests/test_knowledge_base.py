import pytest


def test_registry_is_structurally_valid() -> None:
    from georules.knowledge import ALL_INSTRUCTION_BLOCKS
    from georules.services.condition_evaluator import validate_registry

    validate_registry(ALL_INSTRUCTION_BLOCKS, max_depth=10)


def test_block_ids_are_unique_and_grouped_by_section() -> None:
    from georules.knowledge import ALL_INSTRUCTION_BLOCKS, BLOCKS_BY_SECTION

    ids = [b.id for b in ALL_INSTRUCTION_BLOCKS]
    assert len(ids) == len(set(ids))
    assert sum(len(blocks) for blocks in BLOCKS_BY_SECTION.values()) == len(ALL_INSTRUCTION_BLOCKS)
    for section, blocks in BLOCKS_BY_SECTION.items():
        assert all(b.section == section for b in blocks)


def test_every_variant_cites_a_classified_document() -> None:
    from georules.knowledge import ALL_INSTRUCTION_BLOCKS
    from georules.services.priority_resolver import classify_document

    unclassified = [
        (b.id, v.id)
        for b in ALL_INSTRUCTION_BLOCKS
        for v in b.variants
        if classify_document(v.normative.document).rank == 99
    ]

    # СНиП and the environmental code sit outside the national norms hierarchy
    assert {block_id for block_id, _ in unclassified} <= {"block-51-01-safety", "block-52-01-environmental"}


@pytest.mark.parametrize(
    "project,expected_depth",
    [
        ({"foundationType": "свайный", "pileLength": 12}, 17),
        ({"foundationType": "свайный", "pileDepth": 20}, 25),
        ({"foundationType": "плитный", "foundationWidth": 15}, 35),
        ({"foundationType": "ленточный", "foundationWidth": 2}, 11),
        ({"foundationType": "столбчатый", "foundationDepth": 2.5}, 5.5),
    ],
)
def test_well_depth_by_foundation_type(project: dict, expected_depth: float) -> None:
    from georules.services import run

    result = run(project)

    depths = [
        b.calculated_values["wellDepth"].value
        for b in result.applied_blocks
        if "wellDepth" in b.calculated_values
    ]
    assert depths == [expected_depth]


def test_complexity_category_is_derived_from_conditions() -> None:
    from georules.knowledge.common import complexity_category, geotechnical_category
    from georules.models import GeologicalInput

    assert complexity_category(GeologicalInput()) is None
    assert complexity_category(GeologicalInput(lithologic_layers=2, aquifer_count=1)) == "I"
    assert complexity_category(GeologicalInput(lithologic_layers=4)) == "II"
    assert complexity_category(GeologicalInput(hazards=("карст", "оползни"))) == "III"
    assert complexity_category(GeologicalInput(complexity_category="II", lithologic_layers=9)) == "II"

    assert geotechnical_category(GeologicalInput(lithologic_layers=2, responsibility_level="пониженная")) == "I"
    assert geotechnical_category(GeologicalInput(lithologic_layers=4, responsibility_level="повышенная")) == "III"


def test_seismic_survey_variant_follows_object_subtype() -> None:
    from georules.services import run

    dam = run({"geophysicsMethods": ["сейсморазведка"], "objectSubtype": "гидротехнический"})
    plant = run({"geophysicsMethods": ["сейсморазведка"], "objectSubtype": "промышленное"})

    assert dam.get_applied_block("block-14-02-seismic-survey").variant_id == "variant-vsn-34"
    assert dam.get_work("geophysics-dam-seismic") is not None
    assert plant.get_applied_block("block-14-02-seismic-survey").variant_id == "variant-sp-rk-102"
    assert plant.get_work("geophysics-dam-seismic") is None


def test_pumping_blocks_conflict() -> None:
    from georules.models import SkipReason
    from georules.services import run

    result = run({
        "hasGroundwater": True,
        "geotechnicalCategory": "III",
        "responsibilityLevel": "I",
    })

    assert result.get_applied_block("block-10-05-cluster-pumping") is not None
    skipped = {s.block_id: s.reason for s in result.skipped_blocks}
    assert skipped["block-10-04-pilot-pumping"] == SkipReason.CONFLICT
    assert result.get_work("hydro-pilot-pumping") is None
    assert result.get_work("hydro-observation-wells").quantity == 4


def test_catalog_queries() -> None:
    from georules.models import Tier
    from georules.services import get_block_catalog

    catalog = get_block_catalog()

    assert catalog.get_block_by_id("block-36-01-water-extract").priority == 20
    assert catalog.get_block_by_id("block-unknown") is None
    assert all("химия" in b.tags for b in catalog.get_blocks_by_tag("химия"))
    assert all(b.priority >= 100 for b in catalog.get_blocks_by_priority(100))
    assert all(
        any(v.tier == Tier.MANDATORY for v in b.variants) for b in catalog.get_mandatory_blocks()
    )

    stats = catalog.get_statistics()
    assert stats.total_blocks == len(catalog.blocks)
    assert stats.mandatory_blocks < stats.total_blocks
    assert stats.variants_by_tier["reference"] >= 3


@pytest.mark.parametrize(
    "category,length,block_id,work_id",
    [
        ("I", 10, "block-06-01-roads-category-i", "linear-roads-cat1-wells"),
        ("II", 5, "block-06-02-roads-category-ii", "linear-roads-cat2-wells"),
        ("III", 3, "block-06-03-roads-category-iii", "linear-roads-cat3-wells"),
    ],
)
def test_road_wells_follow_complexity_category(category: str, length: float, block_id: str, work_id: str) -> None:
    from georules.services import run

    result = run({
        "objectType": "линейный",
        "linearType": "автодорога",
        "complexityCategory": category,
        "linearLength": length,
    })

    road_blocks = [b.block_id for b in result.applied_blocks if b.block_id.startswith("block-06-0")]
    assert road_blocks == [block_id]
    assert result.get_applied_block(block_id).variant_id == "variant-sp-rk-102"
    assert result.get_work(work_id).quantity == 20


def test_road_standard_variant_uses_stage_spacing() -> None:
    from georules.knowledge import ALL_INSTRUCTION_BLOCKS
    from georules.models import RulesEngineConfig
    from georules.services import RulesEngine

    engine = RulesEngine(
        ALL_INSTRUCTION_BLOCKS,
        RulesEngineConfig(variant_overrides={"block-06-02-roads-category-ii": "variant-st-rk-1399"}),
    )
    project = {"objectType": "линейный", "linearType": "автодорога", "complexityCategory": "II", "linearLength": 5}

    teo = engine.run({**project, "designStage": "ТЭО"})
    detailed = engine.run({**project, "designStage": "Проект"})

    assert teo.get_applied_block("block-06-02-roads-category-ii").variant_id == "variant-st-rk-1399"
    assert teo.get_work("linear-roads-cat2-wells").quantity == 10
    assert detailed.get_work("linear-roads-cat2-wells").quantity == 20


def test_tunnel_reference_variant_emits_capped_works() -> None:
    from georules.knowledge import ALL_INSTRUCTION_BLOCKS
    from georules.models import RulesEngineConfig, WorkCategory
    from georules.services import RulesEngine, run

    project = {"objectType": "линейный", "linearType": "туннель"}

    default = run(project)
    assert default.get_applied_block("block-06-04-tunnels-investigation").variant_id == "variant-sp-rk-102"
    assert default.get_work("tunnel-mine-workings") is not None

    engine = RulesEngine(
        ALL_INSTRUCTION_BLOCKS,
        RulesEngineConfig(variant_overrides={"block-06-04-tunnels-investigation": "variant-vsn-34"}),
    )
    hydro = engine.run(project)

    assert hydro.get_work("tunnel-main-wells").quantity == 10
    assert hydro.get_work("tunnel-portal-wells").quantity == 10
    assert hydro.get_work("tunnel-main-wells").category == WorkCategory.OPTIONAL


@pytest.mark.parametrize(
    "stage,block_id,work_id,expected_depth,expected_wells",
    [
        ("ТЭО", "block-06-05-dam-teo-stage", "dam-teo-axis-wells", 60, 14),
        ("Проект", "block-06-06-dam-project-stage", "dam-project-axis-wells", 80, 25),
    ],
)
def test_dam_depth_follows_dam_height(
    stage: str,
    block_id: str,
    work_id: str,
    expected_depth: int,
    expected_wells: int,
) -> None:
    from georules.models import Tier, WorkCategory
    from georules.services import run

    result = run({"objectType": "гидроэнергетический", "designStage": stage, "buildingHeight": 40})

    dam = result.get_applied_block(block_id)
    assert dam.tier == Tier.REFERENCE
    assert dam.calculated_values["damDrillingDepth"].value == expected_depth
    assert result.get_work(work_id).quantity == expected_wells
    assert result.get_work(work_id).category == WorkCategory.OPTIONAL


def test_pipeline_and_crossing_wells() -> None:
    from georules.services import run

    plain = run({"objectType": "линейный", "linearType": "трубопровод", "linearLength": 2})
    hard = run({"objectType": "линейный", "linearType": "трубопровод", "linearLength": 2, "complexityCategory": "III"})
    crossing = run({
        "objectType": "линейный",
        "linearType": "трубопровод",
        "hazards": ["переход через реку", "овраг", "карст"],
    })

    assert plain.get_work("pipeline-wells").quantity == 8
    assert hard.get_work("pipeline-wells").quantity == 14
    assert plain.get_applied_block("block-06-10-obstacle-crossings") is None
    assert crossing.get_work("crossing-wells").quantity == 6


def test_construction_phase_drives_supervision_blocks() -> None:
    from georules.services import run

    result = run({"constructionPhase": "строительство", "excavationDocumentation": True})

    applied = [b.block_id for b in result.applied_blocks]
    assert applied.index("block-15-01-construction-control") < applied.index("block-15-02-excavation-documentation")
    assert result.get_applied_block("block-15-01-construction-control").variant_id == "variant-rules-2020"
    assert "п. 25" in result.get_work("construction-control").normative_base
    assert result.get_work("excavation-field-documentation") is not None

    without_documentation = run({"constructionPhase": "строительство"})
    assert without_documentation.get_applied_block("block-15-02-excavation-documentation") is None


@pytest.mark.parametrize(
    "project,block_id,work_id",
    [
        ({"constructionPhase": "реконструкция"}, "block-15-03-reconstruction-surveys", "reconstruction-load-calculations"),
        ({"loadIncrease": True}, "block-15-03-reconstruction-surveys", "reconstruction-foundation-inspection"),
        ({"emergencySituation": True}, "block-15-04-emergency-surveys", "emergency-inspection"),
        ({"structuralDeformations": True}, "block-15-04-emergency-surveys", "emergency-monitoring"),
    ],
)
def test_existing_structure_flags_trigger_surveys(project: dict, block_id: str, work_id: str) -> None:
    from georules.services import run

    result = run(project)

    assert result.get_applied_block(block_id) is not None
    assert result.get_work(work_id).source_blocks == (block_id,)
    assert run({}).get_applied_block(block_id) is None


def test_operation_monitoring_of_hydropower_object() -> None:
    from georules.services import run

    result = run({"constructionPhase": "эксплуатация", "objectType": "гидроэнергетический", "hazards": ["оползни"]})

    assert result.get_applied_block("block-15-05-operation-monitoring").variant_id == "variant-sp-rk-102"
    assert result.get_work("monitoring-hazards").quantity == 12
    assert result.get_work("monitoring-dam") is not None
    assert run({"constructionPhase": "эксплуатация"}).get_applied_block("block-15-05-operation-monitoring") is None


def test_filtration_tests_scale_with_site() -> None:
    from georules.models import WorkCategory
    from georules.services import run

    result = run({
        "hasGroundwater": True,
        "hasBasement": True,
        "aquiferCount": 2,
        "buildingArea": 12000,
        "groundwaterDepth": 5,
    })

    pumping = result.get_applied_block("block-17-01-pumping-tests")
    assert pumping.calculated_values["estimatedDuration"].value == 28
    assert result.get_work("filtration-pumping-tests").quantity == 4
    assert result.get_work("filtration-infiltration-tests").quantity == 3
    assert result.get_work("filtration-express-tests").category == WorkCategory.OPTIONAL


@pytest.mark.parametrize(
    "project,expected",
    [
        ({"foundationDepth": 4, "geotechnicalCategory": "II"}, 2),
        ({"foundationDepth": 4, "geotechnicalCategory": "I"}, None),
        ({"foundationDepth": 2, "geotechnicalCategory": "III"}, None),
    ],
)
def test_screw_plate_tests_for_deep_foundations(project: dict, expected) -> None:
    from georules.services import run

    work = run(project).get_work("screw-plate-tests")

    assert (work.quantity if work else None) == expected


def test_soil_programmes_follow_soil_types() -> None:
    from georules.models import WorkCategory
    from georules.services import run

    mixed = run({"soilTypes": ["суглинок", "песок"], "foundationType": "ленточный", "expectedIGE": 2})
    assert mixed.get_work("lab-clayey-physical").quantity == 12
    assert mixed.get_work("lab-clayey-compression").quantity == 6
    assert mixed.get_work("lab-clayey-shear").quantity == 8
    assert mixed.get_work("lab-sandy-physical").quantity == 12
    assert mixed.get_work("lab-sandy-friction").quantity == 8
    assert mixed.get_work("lab-coarse-density") is None

    sandy_loam = run({"soilTypes": ["супесь"], "foundationType": "ленточный"})
    assert sandy_loam.get_work("lab-clayey-physical").quantity == 18
    assert sandy_loam.get_work("lab-clayey-compression") is None

    gravel = run({"soilTypes": ["гравий"], "expectedIGE": 2})
    assert gravel.get_work("lab-coarse-moisture").quantity == 10
    assert gravel.get_work("lab-coarse-particle-strength").category == WorkCategory.RECOMMENDED


def test_geomorphology_raises_complexity_category() -> None:
    from georules.knowledge.common import complexity_category
    from georules.models import GeologicalInput

    assert complexity_category(GeologicalInput(geomorphological_category="III", lithologic_layers=2)) == "III"
    assert complexity_category(GeologicalInput(geomorphological_category="I", lithologic_layers=4)) == "II"
    assert complexity_category(GeologicalInput(terrain="Горный")) == "II"
    assert complexity_category(GeologicalInput(terrain="равнинный")) is None


def test_aggressive_groundwater_adds_grading() -> None:
    from georules.services import run

    plain = run({"hasGroundwater": True, "aquiferCount": 2})
    aggressive = run({"groundwaterAggressiveness": True, "aquiferCount": 2})

    assert plain.get_work("LAB-WATER-02") is None
    assert aggressive.get_work("LAB-WATER-01").quantity == 4
    assert aggressive.get_work("LAB-WATER-02").quantity == 2


def test_office_blocks_always_apply_without_works() -> None:
    from georules.services import run

    result = run({})

    for block_id in ("block-47-01-processing", "block-49-01-qc", "block-50-01-archive", "block-52-01-environmental"):
        assert result.get_applied_block(block_id).work_ids == []
