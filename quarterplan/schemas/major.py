from typing import Literal

from pydantic import BaseModel, Field

from quarterplan.core.config import settings


class RequirementGroupCreate(BaseModel):
    id: str
    name: str
    description: str | None = None
    # Empty list = requirement checked off by hand (e.g. "five upper division electives")
    course_ids: list[str] = []
    min_units: int | None = Field(None, ge=0)
    choose: int | None = Field(None, ge=1)


class MajorCreate(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    degree: Literal["BA", "BS"] = "BS"
    college: str | None = None
    requirements: list[RequirementGroupCreate] = []


class MajorResponse(MajorCreate):
    pass


class MajorListItem(BaseModel):
    id: str
    name: str
    degree: str
    college: str | None = None
    has_course_list: bool


class MajorRequirementsResponse(BaseModel):
    major_id: str
    required_course_ids: list[str]
    manual_requirements: list[RequirementGroupCreate] = []


class RemainingRequest(BaseModel):
    completed_course_ids: list[str] = []
    units_per_quarter: int = Field(
        default_factory=lambda: settings.units_per_quarter_estimate, gt=0, le=30
    )
    # Unknown course ids are an error instead of counting zero units
    strict: bool = False


class ProgressOut(BaseModel):
    completed: int
    total: int
    percent: int


class RemainingResponse(BaseModel):
    major_id: str
    has_course_list: bool
    remaining_course_ids: list[str] = []
    remaining_units: int | None = None
    quarters_remaining: int | None = None
    progress: ProgressOut
