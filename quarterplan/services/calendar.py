import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Literal, NamedTuple

logger = logging.getLogger(__name__)

Season = Literal["fall", "winter", "spring", "summer"]

SEASON_ORDER: tuple[Season, ...] = ("fall", "winter", "spring", "summer")
SEASON_NAMES: dict[str, str] = {
    "fall": "Fall",
    "winter": "Winter",
    "spring": "Spring",
    "summer": "Summer",
}

_START_LABEL = re.compile(r"^(Fall|Winter|Spring|Summer)\s*(\d{4})$", re.IGNORECASE)
_PLAN_ID = re.compile(r"^q-(\d+)$")
SLOT_PREFIX = "fy-"


class QuarterRef(NamedTuple):
    season: Season
    year: int


@dataclass
class PlanQuarter:
    """A quarter slot in a plan; only ``course_ids`` is meant to change."""

    id: str
    season: Season
    year: int
    label: str
    course_ids: list[str] = field(default_factory=list)

    @property
    def ref(self) -> QuarterRef:
        return QuarterRef(self.season, self.year)


def label(season: Season, year: int) -> str:
    return f"{SEASON_NAMES[season]} {year}"


def short_label(season: Season, year: int) -> str:
    return f"{SEASON_NAMES[season]} {year % 100}"


def parse_start(text: str, today: date | None = None) -> QuarterRef:
    """Parse "<Season> <Year>"; anything else means fall of the current year."""
    match = _START_LABEL.match(text.strip()) if text else None
    if match is None:
        year = (today or date.today()).year
        logger.info("Unrecognised start quarter %r, using Fall %s", text, year)
        return QuarterRef("fall", year)
    return QuarterRef(match.group(1).lower(), int(match.group(2)))


def calendar_next(quarter: QuarterRef) -> QuarterRef:
    # Calendar labels: winter opens a new calendar year, so Fall 2025 is
    # followed by Winter 2026.
    idx = (SEASON_ORDER.index(quarter.season) + 1) % len(SEASON_ORDER)
    season = SEASON_ORDER[idx]
    return QuarterRef(season, quarter.year + 1 if season == "winter" else quarter.year)


def sequence(start_label: str, count: int) -> list[QuarterRef]:
    quarter = parse_start(start_label)
    out: list[QuarterRef] = []
    for _ in range(max(count, 0)):
        out.append(quarter)
        quarter = calendar_next(quarter)
    return out


def four_year_sequence(start_year: int) -> list[QuarterRef]:
    return [
        QuarterRef(season, start_year + offset)
        for offset in range(4)
        for season in SEASON_ORDER
    ]


def next_quarter(quarter: QuarterRef) -> QuarterRef:
    idx = SEASON_ORDER.index(quarter.season) + 1
    if idx >= len(SEASON_ORDER):
        return QuarterRef(SEASON_ORDER[0], quarter.year + 1)
    return QuarterRef(SEASON_ORDER[idx], quarter.year)


def advance(quarter: QuarterRef, n: int) -> QuarterRef:
    if n < 0:
        raise ValueError(f"Cannot advance a quarter by {n}")
    for _ in range(n):
        quarter = next_quarter(quarter)
    return quarter


def current_quarter(today: date | None = None) -> QuarterRef:
    """Approximate current quarter from the calendar month (Fall ~Sept, Winter ~Jan,
    Spring ~Mar, Summer ~June)."""
    today = today or date.today()
    month = today.month
    if month >= 9:
        return QuarterRef("fall", today.year)
    if month >= 6:
        return QuarterRef("summer", today.year)
    if month >= 3:
        return QuarterRef("spring", today.year)
    if month >= 1:
        return QuarterRef("winter", today.year)
    return QuarterRef("fall", today.year - 1)


# ── Plan skeletons ────────────────────────────────────────────────────────────

def slot_id(quarter: QuarterRef) -> str:
    return f"{SLOT_PREFIX}{quarter.year}-{quarter.season}"


def _slot(quarter: QuarterRef, quarter_id: str) -> PlanQuarter:
    return PlanQuarter(
        id=quarter_id,
        season=quarter.season,
        year=quarter.year,
        label=label(quarter.season, quarter.year),
    )


def create_empty_quarters(start_label: str, count: int) -> list[PlanQuarter]:
    return [
        _slot(quarter, f"q-{i}")
        for i, quarter in enumerate(sequence(start_label, count))
    ]


def four_year_quarters(start_year: int) -> list[PlanQuarter]:
    return [_slot(quarter, slot_id(quarter)) for quarter in four_year_sequence(start_year)]


def quarter_after(last: PlanQuarter, position: int | None = None) -> PlanQuarter:
    """Empty slot following ``last`` under the rule that produced it.

    Four-year ``fy-`` slots roll the year over after summer. Slots from
    ``create_empty_quarters`` keep calendar labels and are numbered
    ``q-<position>``; without a position the number after ``last`` is used.
    """
    if last.id.startswith(SLOT_PREFIX):
        nxt = next_quarter(last.ref)
        return _slot(nxt, slot_id(nxt))
    if position is None:
        match = _PLAN_ID.match(last.id)
        if match is None:
            raise ValueError(f"Cannot number the quarter after {last.id!r}")
        position = int(match.group(1)) + 1
    return _slot(calendar_next(last.ref), f"q-{position}")


def current_and_next_quarters(today: date | None = None) -> list[PlanQuarter]:
    cur = current_quarter(today)
    nxt = advance(cur, 1)
    return [_slot(cur, slot_id(cur)), _slot(nxt, slot_id(nxt))]


def quarter_options(today: date | None = None) -> list[str]:
    year = (today or date.today()).year
    return [
        label(season, y)
        for y in range(year - 1, year + 4)
        for season in SEASON_ORDER
    ]
