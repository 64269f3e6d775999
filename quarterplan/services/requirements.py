import math
from collections.abc import Iterable
from dataclasses import dataclass

from quarterplan.services.catalog import (
    Catalog,
    MajorRecord,
    RequirementGroup,
    require_course,
)

DEFAULT_UNITS_PER_QUARTER = 14


@dataclass
class Progress:
    completed: int
    total: int
    percent: int


def required_course_ids(major: MajorRecord) -> list[str]:
    """All course ids required by a major, deduplicated in first-seen order."""
    seen: dict[str, None] = {}
    for group in major.requirements:
        for course_id in group.course_ids:
            seen.setdefault(course_id, None)
    return list(seen)


def remaining_course_ids(major: MajorRecord, completed: Iterable[str]) -> list[str]:
    done = set(completed)
    return [course_id for course_id in required_course_ids(major) if course_id not in done]


def remaining_units(
    major: MajorRecord,
    completed: Iterable[str],
    catalog: Catalog,
    strict: bool = False,
) -> int:
    total = 0
    for course_id in remaining_course_ids(major, completed):
        if strict:
            total += require_course(catalog, course_id).units
            continue
        course = catalog.find_course_by_id(course_id)
        total += course.units if course else 0
    return total


def estimate_quarters_remaining(
    major: MajorRecord,
    completed: Iterable[str],
    catalog: Catalog,
    units_per_quarter: int = DEFAULT_UNITS_PER_QUARTER,
) -> int:
    # Never below 1, even with nothing left.
    if units_per_quarter <= 0:
        raise ValueError("units_per_quarter must be positive")
    units = remaining_units(major, completed, catalog)
    return max(1, math.ceil(units / units_per_quarter))


def manual_requirements(major: MajorRecord) -> list[RequirementGroup]:
    """Groups with no enumerable courses; satisfied by attestation, not by courses."""
    return [group for group in major.requirements if not group.course_ids]


def progress(major: MajorRecord, completed: Iterable[str]) -> Progress:
    required = required_course_ids(major)
    done = set(completed)
    count = sum(1 for course_id in required if course_id in done)
    total = len(required)
    # Half rounds up (12.5 -> 13), unlike round().
    percent = math.floor(count * 100 / total + 0.5) if total else 0
    return Progress(completed=count, total=total, percent=percent)
