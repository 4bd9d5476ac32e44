"""Survey work item models."""
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class WorkCategory(str, Enum):
    """Obligation category of a work item, strictest first."""
    MANDATORY = "mandatory"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"

    @property
    def rank(self) -> int:
        return _CATEGORY_ORDER.index(self)


_CATEGORY_ORDER = (WorkCategory.MANDATORY, WorkCategory.RECOMMENDED, WorkCategory.OPTIONAL)


class SurveyModule(str, Enum):
    """Survey discipline a work item belongs to."""
    GEOLOGICAL = "geological"
    GEODETIC = "geodetic"
    HYDROGRAPHIC = "hydrographic"
    INSPECTION = "inspection"

    @property
    def rank(self) -> int:
        return _MODULE_ORDER.index(self)


_MODULE_ORDER = (
    SurveyModule.GEOLOGICAL,
    SurveyModule.GEODETIC,
    SurveyModule.HYDROGRAPHIC,
    SurveyModule.INSPECTION,
)


class WorkItem(BaseModel):
    """A concrete survey task with a quantity and its normative basis."""
    model_config = ConfigDict(frozen=True)

    work_id: str = Field(..., description="Work identifier, unique within a result")
    name: str = Field(..., description="Work name")
    description: Optional[str] = Field(None, description="Work description")
    unit: str = Field(..., description="Unit of measurement")
    quantity: float = Field(..., description="Quantity in units")
    category: WorkCategory = Field(..., description="Obligation category")
    module: SurveyModule = Field(..., description="Survey discipline")
    normative_base: str = Field(..., description="Normative citation backing the work")
    tags: Tuple[str, ...] = Field(default=(), description="Free-form tags")
    price_table_code: Optional[str] = Field(None, description="Reference into the external price table")
    source_blocks: Tuple[str, ...] = Field(default=(), description="IDs of the blocks that produced this work")
