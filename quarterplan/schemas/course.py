from typing import Literal

from pydantic import BaseModel, Field

SeasonName = Literal["fall", "winter", "spring", "summer"]


class CourseCreate(BaseModel):
    id: str = Field(..., min_length=1)
    code: str
    name: str | None = None
    units: int = Field(..., gt=0)
    description: str | None = None
    prerequisites: list[str] = []
    typically_offered: list[SeasonName] = []  # empty = offered every quarter


class CourseCreateRequest(BaseModel):
    courses: list[CourseCreate]


class CourseResponse(CourseCreate):
    pass


class RelatedCoursesResponse(BaseModel):
    course_id: str
    prerequisites: list[str]
    successors: list[str]
