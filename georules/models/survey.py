"""Project input model filled in by the survey wizard."""
from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class GeologicalInput(BaseModel):
    """Immutable description of a planned engineering survey project.

    Every field is optional. Rule conditions read an absent field as ``None``
    (or an empty tuple for collections), never as an error.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    # Project
    project_name: Optional[str] = Field(None, description="Project name")
    project_location: Optional[str] = Field(None, description="Project address or location")
    design_stage: Optional[str] = Field(None, description="Design stage: 'ТЭО', 'Проект', 'Рабочая документация'")
    region: Optional[str] = Field(None, description="Administrative region")
    construction_phase: Optional[str] = Field(None, description="'новое', 'строительство', 'реконструкция', 'эксплуатация'")

    # Object
    object_type: Optional[str] = Field(None, description="'площадной', 'линейный' or 'гидроэнергетический'")
    object_subtype: Optional[str] = Field(None, description="Object subtype, e.g. 'жилое', 'промышленное'")
    linear_type: Optional[str] = Field(None, description="Linear object kind: 'автодорога', 'туннель', 'трубопровод', 'канал', 'ГЭС'")
    responsibility_level: Optional[str] = Field(None, description="'I', 'II', 'III' or 'повышенная', 'нормальная', 'пониженная'")
    building_area: Optional[float] = Field(None, description="Building footprint area, m2")
    building_height: Optional[float] = Field(None, description="Building height, m")
    number_of_floors: Optional[int] = Field(None, description="Number of above-ground floors")
    underground_floors: Optional[int] = Field(None, description="Number of underground floors")
    has_basement: Optional[bool] = Field(None, description="Whether the building has a basement")
    area_size: Optional[float] = Field(None, description="Site area, ha")
    linear_length: Optional[float] = Field(None, description="Length of a linear object, km")

    # Foundations
    foundation_type: Optional[str] = Field(
        None, description="'ленточный', 'плитный', 'свайный', 'свайно-плитный', 'столбчатый'"
    )
    foundation_depth: Optional[float] = Field(None, description="Foundation depth, m")
    foundation_width: Optional[float] = Field(None, description="Foundation width, m")
    pile_length: Optional[float] = Field(
        None,
        description="Pile length, m",
        validation_alias=AliasChoices("pileLength", "pileDepth", "pile_length"),
    )
    piles_count: Optional[int] = Field(None, description="Number of piles")

    # Categories
    geotechnical_category: Optional[str] = Field(None, description="Geotechnical category 'I', 'II', 'III'")
    complexity_category: Optional[str] = Field(None, description="Engineering-geological complexity 'I', 'II', 'III'")
    geomorphological_category: Optional[str] = Field(None, description="Geomorphological complexity 'I', 'II', 'III'")

    # Site conditions
    terrain: Optional[str] = Field(None, description="Terrain type")
    seismicity: Optional[float] = Field(None, description="Site seismicity, points")
    special_soils: Tuple[str, ...] = Field(default=(), description="Specific soils present on the site")
    soil_types: Tuple[str, ...] = Field(default=(), description="Soil types present on the site")
    hazards: Tuple[str, ...] = Field(default=(), description="Hazardous geological processes")
    soil_heterogeneity: Optional[str] = Field(None, description="Soil heterogeneity estimate")

    # Groundwater
    has_groundwater: Optional[bool] = Field(None, description="Whether groundwater is expected")
    groundwater_depth: Optional[float] = Field(None, description="Groundwater depth, m")
    groundwater_aggressiveness: Optional[bool] = Field(None, description="Whether groundwater is aggressive to concrete")
    aquifer_count: Optional[int] = Field(
        None,
        description="Number of aquifers",
        validation_alias=AliasChoices("aquiferCount", "numberOfAquifers", "aquifer_count"),
    )

    # Geology
    expected_ige: Optional[int] = Field(
        None,
        description="Expected number of engineering-geological elements (stratigraphic units)",
        validation_alias=AliasChoices("expectedIGE", "expectedIge", "expected_ige"),
    )
    lithologic_layers: Optional[int] = Field(None, description="Number of lithologic layers")
    geophysics_methods: Tuple[str, ...] = Field(default=(), description="Requested geophysical methods")
    calculated_wells: Optional[int] = Field(None, description="Pre-computed number of exploration wells")

    # Existing structures and data
    existing_data: Optional[bool] = Field(None, description="Whether archive survey data is available")
    excavation_documentation: Optional[bool] = Field(None, description="Whether excavation documentation is required")
    emergency_situation: Optional[bool] = Field(None, description="Emergency condition of existing structures")
    structural_deformations: Optional[bool] = Field(None, description="Observed deformations of existing structures")
    load_increase: Optional[bool] = Field(None, description="Whether reconstruction increases foundation loads")
    has_underground_pipelines: Optional[bool] = Field(None, description="Underground pipelines on the site")
    has_metal_structures: Optional[bool] = Field(None, description="Underground metal structures on the site")

    @field_validator("special_soils", "soil_types", "hazards", "geophysics_methods", mode="before")
    @classmethod
    def missing_list_is_empty(cls, value):
        # Wizard payloads send null for untouched multi-selects
        return () if value is None else value
