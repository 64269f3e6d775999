from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from quarterplan.services.calendar import (
    PlanQuarter,
    advance,
    create_empty_quarters,
    current_quarter,
    label,
    quarter_after,
)
from quarterplan.services.catalog import Catalog, MajorRecord
from quarterplan.services.requirements import (
    DEFAULT_UNITS_PER_QUARTER,
    estimate_quarters_remaining,
    remaining_course_ids,
    remaining_units,
    required_course_ids,
)
from quarterplan.services.scheduler import quarter_units


@dataclass
class Plan:
    start_quarter: str
    quarters: list[PlanQuarter]
    current_major_id: str | None = None
    target_major_id: str | None = None
    completed_course_ids: frozenset[str] = field(default_factory=frozenset)


@dataclass
class PlanSummary:
    major_id: str
    major_name: str
    has_course_list: bool
    courses_left: int | None = None
    units_left: int | None = None
    quarters_remaining: int | None = None
    estimated_graduation: str | None = None


def new_plan(
    start_quarter: str,
    count: int = 8,
    current_major_id: str | None = None,
    target_major_id: str | None = None,
    completed: Iterable[str] = (),
) -> Plan:
    return Plan(
        start_quarter=start_quarter,
        quarters=create_empty_quarters(start_quarter, count),
        current_major_id=current_major_id,
        target_major_id=target_major_id,
        completed_course_ids=frozenset(completed),
    )


def plan_summary(
    major: MajorRecord,
    completed: Iterable[str],
    catalog: Catalog,
    units_per_quarter: int = DEFAULT_UNITS_PER_QUARTER,
    today: date | None = None,
) -> PlanSummary:
    completed = frozenset(completed)
    summary = PlanSummary(
        major_id=major.id,
        major_name=major.name,
        has_course_list=bool(required_course_ids(major)),
    )
    # Without a course list the numbers below mean nothing.
    if not summary.has_course_list:
        return summary

    estimate = estimate_quarters_remaining(major, completed, catalog, units_per_quarter)
    finish = advance(current_quarter(today), estimate)
    summary.courses_left = len(remaining_course_ids(major, completed))
    summary.units_left = remaining_units(major, completed, catalog)
    summary.quarters_remaining = estimate
    summary.estimated_graduation = label(finish.season, finish.year)
    return summary


def planned_units(quarters: Iterable[PlanQuarter], catalog: Catalog) -> int:
    return sum(quarter_units(q, catalog) for q in quarters)


def completed_planned_units(
    quarters: Iterable[PlanQuarter],
    completed: Iterable[str],
    catalog: Catalog,
) -> int:
    """Units of completed courses that also appear somewhere in the plan."""
    scheduled = {course_id for q in quarters for course_id in q.course_ids}
    total = 0
    for course_id in set(completed) & scheduled:
        course = catalog.find_course_by_id(course_id)
        total += course.units if course else 0
    return total


def extend_plan(quarters: list[PlanQuarter]) -> list[PlanQuarter]:
    if not quarters:
        return list(quarters)
    return [*quarters, quarter_after(quarters[-1], position=len(quarters))]
