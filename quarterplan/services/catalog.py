"""Read-only course and major catalog.

The planning services never touch global tables: every operation takes a
``Catalog`` and only ever reads from it. ``InMemoryCatalog`` is the
snapshot used at runtime; it can be built from the bundled JSON seed file
or from the SQLAlchemy tables populated by the ingest endpoints.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sqlalchemy.orm import Session, selectinload

from quarterplan.models.course import Course
from quarterplan.models.major import Major, RequirementGroup as RequirementGroupRow

logger = logging.getLogger(__name__)


class CatalogLookupError(KeyError):
    """Raised in strict mode when a referenced course id is not in the catalog."""


@dataclass(frozen=True)
class CourseRecord:
    id: str
    code: str
    name: str
    units: int
    description: str | None = None
    prerequisites: tuple[str, ...] = ()
    typically_offered: tuple[str, ...] = ()  # empty means every season


@dataclass(frozen=True)
class RequirementGroup:
    id: str
    name: str
    course_ids: tuple[str, ...] = ()
    description: str | None = None
    min_units: int | None = None
    choose: int | None = None


@dataclass(frozen=True)
class MajorRecord:
    id: str
    name: str
    degree: str
    college: str
    requirements: tuple[RequirementGroup, ...] = ()


class Catalog(Protocol):
    def find_course_by_id(self, course_id: str) -> CourseRecord | None: ...

    def iter_courses(self) -> Iterator[CourseRecord]: ...

    def find_major_by_id(self, major_id: str) -> MajorRecord | None: ...

    def iter_majors(self) -> Iterator[MajorRecord]: ...


class InMemoryCatalog:
    def __init__(
        self,
        courses: Iterable[CourseRecord] = (),
        majors: Iterable[MajorRecord] = (),
    ) -> None:
        self._courses = {course.id: course for course in courses}
        self._majors = {major.id: major for major in majors}

    def find_course_by_id(self, course_id: str) -> CourseRecord | None:
        return self._courses.get(course_id)

    def iter_courses(self) -> Iterator[CourseRecord]:
        return iter(self._courses.values())

    def find_major_by_id(self, major_id: str) -> MajorRecord | None:
        return self._majors.get(major_id)

    def iter_majors(self) -> Iterator[MajorRecord]:
        return iter(self._majors.values())

    def __len__(self) -> int:
        return len(self._courses)


def require_course(catalog: Catalog, course_id: str) -> CourseRecord:
    course = catalog.find_course_by_id(course_id)
    if course is None:
        raise CatalogLookupError(course_id)
    return course


# ── Loaders ───────────────────────────────────────────────────────────────────

def course_from_dict(raw: dict) -> CourseRecord:
    return CourseRecord(
        id=raw["id"],
        code=raw.get("code") or raw["id"],
        name=raw.get("name") or "",
        units=int(raw.get("units") or 0),
        description=raw.get("description"),
        prerequisites=tuple(raw.get("prerequisites") or ()),
        typically_offered=tuple(s.lower() for s in raw.get("typically_offered") or ()),
    )


def major_from_dict(raw: dict) -> MajorRecord:
    return MajorRecord(
        id=raw["id"],
        name=raw["name"],
        degree=raw.get("degree", "BS"),
        college=raw.get("college", ""),
        requirements=tuple(
            RequirementGroup(
                id=req["id"],
                name=req["name"],
                course_ids=tuple(req.get("course_ids") or ()),
                description=req.get("description"),
                min_units=req.get("min_units"),
                choose=req.get("choose"),
            )
            for req in raw.get("requirements") or ()
        ),
    )


def load_catalog_json(path: str | Path) -> InMemoryCatalog:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    catalog = InMemoryCatalog(
        courses=[course_from_dict(row) for row in data.get("courses", [])],
        majors=[major_from_dict(row) for row in data.get("majors", [])],
    )
    logger.info("Loaded %d courses from %s", len(catalog), path)
    return catalog


def split_seasons(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(s.strip().lower() for s in value.split(",") if s.strip())


def load_catalog_from_db(db: Session) -> InMemoryCatalog:
    courses = []
    for row in db.query(Course).options(selectinload(Course.prerequisites)).all():
        prereqs = sorted(row.prerequisites, key=lambda p: p.position)
        courses.append(
            CourseRecord(
                id=row.id,
                code=row.code,
                name=row.name or "",
                units=row.units or 0,
                description=row.description,
                prerequisites=tuple(p.prereq_id for p in prereqs),
                typically_offered=split_seasons(row.typically_offered),
            )
        )

    majors = []
    for row in db.query(Major).options(
        selectinload(Major.requirements).selectinload(RequirementGroupRow.courses)
    ).all():
        groups = []
        for req in sorted(row.requirements, key=lambda r: r.position):
            groups.append(
                RequirementGroup(
                    id=req.group_id,
                    name=req.name,
                    description=req.description,
                    course_ids=tuple(
                        c.course_id for c in sorted(req.courses, key=lambda c: c.position)
                    ),
                    min_units=req.min_units,
                    choose=req.choose,
                )
            )
        majors.append(
            MajorRecord(
                id=row.id,
                name=row.name,
                degree=row.degree,
                college=row.college or "",
                requirements=tuple(groups),
            )
        )
    return InMemoryCatalog(courses=courses, majors=majors)
