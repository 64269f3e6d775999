from pydantic import BaseModel, Field

from quarterplan.core.config import settings
from quarterplan.schemas.quarter import PlanQuarterOut


class AutoFillRequest(BaseModel):
    # None -> fill from the general-education pool
    major_id: str | None = None
    start_year: int = Field(..., ge=1900, le=2200)
    max_units: int | None = Field(None, ge=1, le=40)
    detect_cycles: bool = False


class PlacementOut(BaseModel):
    course_id: str
    status: str
    quarter_id: str | None = None
    reason: str | None = None


class AutoFillResponse(BaseModel):
    major_id: str | None
    start_year: int
    used_fallback: bool
    quarters: list[PlanQuarterOut]
    placements: list[PlacementOut] = []
    dropped: list[str] = []
    total_units: int = 0
    cycle: list[str] | None = None


class PlanSummaryRequest(BaseModel):
    major_id: str
    completed_course_ids: list[str] = []
    units_per_quarter: int = Field(
        default_factory=lambda: settings.units_per_quarter_estimate, gt=0, le=30
    )


class PlanSummaryResponse(BaseModel):
    major_id: str
    major_name: str
    has_course_list: bool
    courses_left: int | None = None
    units_left: int | None = None
    quarters_remaining: int | None = None
    estimated_graduation: str | None = None


class NewPlanRequest(BaseModel):
    start_quarter: str | None = None
    count: int = Field(8, ge=1, le=40)
    current_major_id: str | None = None
    target_major_id: str | None = None
    completed_course_ids: list[str] = []


class PlanOut(BaseModel):
    start_quarter: str
    current_major_id: str | None = None
    target_major_id: str | None = None
    completed_course_ids: list[str] = []
    quarters: list[PlanQuarterOut] = []


class ExtendPlanRequest(BaseModel):
    quarters: list[PlanQuarterOut]


class PlanUnitsRequest(BaseModel):
    quarters: list[PlanQuarterOut]
    completed_course_ids: list[str] = []


class PlanUnitsResponse(BaseModel):
    planned_units: int
    completed_planned_units: int
