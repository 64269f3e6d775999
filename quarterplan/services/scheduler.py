import logging
from dataclasses import dataclass, field
from enum import Enum

from quarterplan.services.calendar import PlanQuarter, four_year_quarters
from quarterplan.services.catalog import Catalog, CourseRecord, MajorRecord
from quarterplan.services.graph import find_cycle, order
from quarterplan.services.requirements import required_course_ids

logger = logging.getLogger(__name__)

MAX_UNITS_PER_QUARTER = 18

# General-education pool used when no major (or no major course data) is available.
FALLBACK_POOL: tuple[str, ...] = (
    "mat21a", "mat21b", "ecn1a", "ecn1b", "uwp001", "bis2a", "bis2b", "bis2c",
    "sta013", "psy001", "che2a", "che2b", "che2c", "ecs36a", "ecs36b", "mat22a",
    "uwp101",
)


class PlacementStatus(str, Enum):
    PLACED = "placed"
    DROPPED = "dropped"


class DropReason(str, Enum):
    NOT_IN_CATALOG = "not_in_catalog"
    NO_ELIGIBLE_QUARTER = "no_eligible_quarter"


@dataclass
class Placement:
    course_id: str
    status: PlacementStatus
    quarter_id: str | None = None
    reason: DropReason | None = None


@dataclass
class AutoFillResult:
    quarters: list[PlanQuarter]
    pool: list[str]
    placements: list[Placement] = field(default_factory=list)
    used_fallback: bool = False
    cycle: list[str] | None = None

    @property
    def dropped(self) -> list[Placement]:
        return [p for p in self.placements if p.status is PlacementStatus.DROPPED]


def is_offered_in(course: CourseRecord, season: str) -> bool:
    return not course.typically_offered or season in course.typically_offered


def quarter_units(quarter: PlanQuarter, catalog: Catalog) -> int:
    total = 0
    for course_id in quarter.course_ids:
        course = catalog.find_course_by_id(course_id)
        total += course.units if course else 0
    return total


def candidate_pool(
    major: MajorRecord | None,
    fallback_pool: tuple[str, ...] = FALLBACK_POOL,
) -> tuple[list[str], bool]:
    if major is not None:
        required = required_course_ids(major)
        if required:
            return required, False
    return list(fallback_pool), True


def auto_fill(
    major: MajorRecord | None,
    start_year: int,
    catalog: Catalog,
    max_units: int = MAX_UNITS_PER_QUARTER,
    fallback_pool: tuple[str, ...] = FALLBACK_POOL,
    detect_cycles: bool = False,
) -> AutoFillResult:
    """Build a four-year plan by first-fit placement in prerequisite order.

    Each course goes into the earliest quarter that has room under
    ``max_units``, is in a season the course is offered, and comes strictly
    after every in-pool prerequisite. Courses with no such quarter (or not in
    the catalog) are left out and reported as dropped; the sixteen-quarter
    horizon is never extended.
    """
    pool, used_fallback = candidate_pool(major, fallback_pool)
    if used_fallback:
        logger.info("No major course data, filling from the general-education pool")

    cycle = find_cycle(pool, catalog) if detect_cycles else None
    if cycle:
        logger.warning("Prerequisite cycle in pool: %s", " -> ".join(cycle))

    ordered = order(pool, catalog)
    pool_set = set(pool)
    quarters = four_year_quarters(start_year)
    units = [0] * len(quarters)
    placed_at: dict[str, int] = {}
    placements: list[Placement] = []

    for course_id in ordered:
        course = catalog.find_course_by_id(course_id)
        if course is None:
            placements.append(
                Placement(course_id, PlacementStatus.DROPPED, reason=DropReason.NOT_IN_CATALOG)
            )
            continue
        prereqs = [p for p in course.prerequisites if p in pool_set]
        for idx, quarter in enumerate(quarters):
            if units[idx] + course.units > max_units:
                continue
            if not is_offered_in(course, quarter.season):
                continue
            if not all(p in placed_at and placed_at[p] < idx for p in prereqs):
                continue
            quarter.course_ids.append(course_id)
            units[idx] += course.units
            placed_at[course_id] = idx
            placements.append(Placement(course_id, PlacementStatus.PLACED, quarter_id=quarter.id))
            break
        else:
            placements.append(
                Placement(course_id, PlacementStatus.DROPPED, reason=DropReason.NO_ELIGIBLE_QUARTER)
            )

    dropped = [p.course_id for p in placements if p.status is PlacementStatus.DROPPED]
    if dropped:
        logger.info("Auto-fill left %d course(s) unplaced: %s", len(dropped), ", ".join(dropped))

    return AutoFillResult(
        quarters=quarters,
        pool=ordered,
        placements=placements,
        used_fallback=used_fallback,
        cycle=cycle,
    )
