from pydantic import BaseModel

from quarterplan.schemas.course import SeasonName


class QuarterOut(BaseModel):
    season: SeasonName
    year: int
    label: str
    short_label: str


class PlanQuarterOut(BaseModel):
    id: str
    season: SeasonName
    year: int
    label: str
    course_ids: list[str] = []
    units: int = 0

    model_config = {"from_attributes": True}
