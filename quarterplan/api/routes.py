from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from quarterplan.core.config import settings
from quarterplan.core.database import get_db
from quarterplan.schemas.course import CourseCreateRequest, CourseResponse, RelatedCoursesResponse
from quarterplan.schemas.major import (
    MajorCreate,
    MajorListItem,
    MajorRequirementsResponse,
    MajorResponse,
    ProgressOut,
    RemainingRequest,
    RemainingResponse,
    RequirementGroupCreate,
)
from quarterplan.schemas.plan import (
    AutoFillRequest,
    AutoFillResponse,
    ExtendPlanRequest,
    NewPlanRequest,
    PlacementOut,
    PlanOut,
    PlanSummaryRequest,
    PlanSummaryResponse,
    PlanUnitsRequest,
    PlanUnitsResponse,
)
from quarterplan.schemas.quarter import PlanQuarterOut, QuarterOut
from quarterplan.services import calendar
from quarterplan.services.catalog import (
    Catalog,
    CatalogLookupError,
    MajorRecord,
    load_catalog_from_db,
)
from quarterplan.services.courses import bulk_create_courses, course_to_schema
from quarterplan.services.graph import CyclicPrerequisiteError, related_course_ids
from quarterplan.services.majors import create_major
from quarterplan.services.planner import (
    completed_planned_units,
    extend_plan,
    new_plan,
    plan_summary,
    planned_units,
)
from quarterplan.services.requirements import (
    estimate_quarters_remaining,
    manual_requirements,
    progress,
    remaining_course_ids,
    remaining_units,
    required_course_ids,
)
from quarterplan.services.scheduler import auto_fill, quarter_units

router = APIRouter(prefix="/api")


def get_catalog(db: Session = Depends(get_db)) -> Catalog:
    return load_catalog_from_db(db)


def _get_major(catalog: Catalog, major_id: str) -> MajorRecord:
    major = catalog.find_major_by_id(major_id)
    if major is None:
        raise HTTPException(status_code=404, detail="Major not found.")
    return major


def _quarter_out(quarter: calendar.QuarterRef) -> QuarterOut:
    return QuarterOut(
        season=quarter.season,
        year=quarter.year,
        label=calendar.label(quarter.season, quarter.year),
        short_label=calendar.short_label(quarter.season, quarter.year),
    )


def _plan_quarters_out(quarters, catalog: Catalog) -> list[PlanQuarterOut]:
    return [
        PlanQuarterOut(
            id=q.id,
            season=q.season,
            year=q.year,
            label=q.label,
            course_ids=list(q.course_ids),
            units=quarter_units(q, catalog),
        )
        for q in quarters
    ]


def _plan_quarters_in(quarters: list[PlanQuarterOut]) -> list[calendar.PlanQuarter]:
    return [
        calendar.PlanQuarter(
            id=q.id,
            season=q.season,
            year=q.year,
            label=q.label,
            course_ids=list(q.course_ids),
        )
        for q in quarters
    ]


# ── Quarters ──────────────────────────────────────────────────────────────────

@router.get("/quarters/current", response_model=QuarterOut)
def current_quarter_endpoint():
    return _quarter_out(calendar.current_quarter())


@router.get("/quarters/sequence", response_model=list[QuarterOut])
def quarter_sequence_endpoint(
    start: str = Query(settings.default_start_quarter, description='e.g. "Fall 2025"'),
    count: int = Query(8, ge=0, le=40),
):
    return [_quarter_out(q) for q in calendar.sequence(start, count)]


@router.get("/quarters/four-year", response_model=list[PlanQuarterOut])
def four_year_endpoint(start_year: int = Query(..., ge=1900, le=2200)):
    return [PlanQuarterOut.model_validate(q) for q in calendar.four_year_quarters(start_year)]


@router.get("/quarters/options", response_model=list[str])
def quarter_options_endpoint():
    return calendar.quarter_options()


# ── Catalog ───────────────────────────────────────────────────────────────────

@router.post("/courses", response_model=list[CourseResponse])
def bulk_create_courses_endpoint(
    payload: CourseCreateRequest,
    db: Session = Depends(get_db),
):
    return [course_to_schema(c) for c in bulk_create_courses(db, payload.courses)]


@router.get("/courses/{course_id}/related", response_model=RelatedCoursesResponse)
def related_courses_endpoint(course_id: str, catalog: Catalog = Depends(get_catalog)):
    if catalog.find_course_by_id(course_id) is None:
        raise HTTPException(status_code=404, detail="Course not found.")
    prereqs, successors = related_course_ids(course_id, catalog)
    return RelatedCoursesResponse(
        course_id=course_id,
        prerequisites=prereqs,
        successors=successors,
    )


@router.post("/majors", response_model=MajorResponse)
def create_major_endpoint(payload: MajorCreate, db: Session = Depends(get_db)):
    create_major(db, payload)
    return payload


@router.get("/majors", response_model=list[MajorListItem])
def list_majors_endpoint(catalog: Catalog = Depends(get_catalog)):
    return [
        MajorListItem(
            id=major.id,
            name=major.name,
            degree=major.degree,
            college=major.college,
            has_course_list=bool(required_course_ids(major)),
        )
        for major in sorted(catalog.iter_majors(), key=lambda m: m.name)
    ]


@router.get("/majors/{major_id}/requirements", response_model=MajorRequirementsResponse)
def major_requirements_endpoint(major_id: str, catalog: Catalog = Depends(get_catalog)):
    major = _get_major(catalog, major_id)
    return MajorRequirementsResponse(
        major_id=major.id,
        required_course_ids=required_course_ids(major),
        manual_requirements=[
            RequirementGroupCreate(
                id=group.id,
                name=group.name,
                description=group.description,
                min_units=group.min_units,
                choose=group.choose,
            )
            for group in manual_requirements(major)
        ],
    )


@router.post("/majors/{major_id}/remaining", response_model=RemainingResponse)
def remaining_endpoint(
    major_id: str,
    payload: RemainingRequest,
    catalog: Catalog = Depends(get_catalog),
):
    major = _get_major(catalog, major_id)
    done = set(payload.completed_course_ids)
    prog = progress(major, done)
    if not required_course_ids(major):
        return RemainingResponse(
            major_id=major.id,
            has_course_list=False,
            progress=ProgressOut(**vars(prog)),
        )
    try:
        units = remaining_units(major, done, catalog, strict=payload.strict)
    except CatalogLookupError as exc:
        raise HTTPException(
            status_code=422,
            detail=f"Course {exc.args[0]!r} is not in the catalog.",
        )
    return RemainingResponse(
        major_id=major.id,
        has_course_list=True,
        remaining_course_ids=remaining_course_ids(major, done),
        remaining_units=units,
        quarters_remaining=estimate_quarters_remaining(
            major, done, catalog, payload.units_per_quarter
        ),
        progress=ProgressOut(**vars(prog)),
    )


# ── Plans ─────────────────────────────────────────────────────────────────────

@router.post("/plans/new", response_model=PlanOut)
def new_plan_endpoint(payload: NewPlanRequest, catalog: Catalog = Depends(get_catalog)):
    plan = new_plan(
        payload.start_quarter or settings.default_start_quarter,
        count=payload.count,
        current_major_id=payload.current_major_id,
        target_major_id=payload.target_major_id,
        completed=payload.completed_course_ids,
    )
    return PlanOut(
        start_quarter=plan.start_quarter,
        current_major_id=plan.current_major_id,
        target_major_id=plan.target_major_id,
        completed_course_ids=sorted(plan.completed_course_ids),
        quarters=_plan_quarters_out(plan.quarters, catalog),
    )


@router.post("/plans/extend", response_model=list[PlanQuarterOut])
def extend_plan_endpoint(payload: ExtendPlanRequest, catalog: Catalog = Depends(get_catalog)):
    return _plan_quarters_out(extend_plan(_plan_quarters_in(payload.quarters)), catalog)


@router.post("/plans/summary", response_model=PlanSummaryResponse)
def plan_summary_endpoint(payload: PlanSummaryRequest, catalog: Catalog = Depends(get_catalog)):
    major = _get_major(catalog, payload.major_id)
    summary = plan_summary(
        major,
        payload.completed_course_ids,
        catalog,
        units_per_quarter=payload.units_per_quarter,
    )
    return PlanSummaryResponse(**vars(summary))


@router.post("/plans/auto-fill", response_model=AutoFillResponse)
def auto_fill_endpoint(payload: AutoFillRequest, catalog: Catalog = Depends(get_catalog)):
    major = _get_major(catalog, payload.major_id) if payload.major_id else None
    result = auto_fill(
        major,
        payload.start_year,
        catalog,
        max_units=payload.max_units or settings.max_units_per_quarter,
        detect_cycles=payload.detect_cycles,
    )
    if result.cycle:
        raise HTTPException(status_code=422, detail=str(CyclicPrerequisiteError(result.cycle)))
    return AutoFillResponse(
        major_id=payload.major_id,
        start_year=payload.start_year,
        used_fallback=result.used_fallback,
        quarters=_plan_quarters_out(result.quarters, catalog),
        placements=[
            PlacementOut(
                course_id=p.course_id,
                status=p.status.value,
                quarter_id=p.quarter_id,
                reason=p.reason.value if p.reason else None,
            )
            for p in result.placements
        ],
        dropped=[p.course_id for p in result.dropped],
        total_units=planned_units(result.quarters, catalog),
        cycle=result.cycle,
    )


@router.post("/plans/units", response_model=PlanUnitsResponse)
def plan_units_endpoint(payload: PlanUnitsRequest, catalog: Catalog = Depends(get_catalog)):
    quarters = _plan_quarters_in(payload.quarters)
    return PlanUnitsResponse(
        planned_units=planned_units(quarters, catalog),
        completed_planned_units=completed_planned_units(
            quarters, payload.completed_course_ids, catalog
        ),
    )
