from datetime import date

import pytest

from quarterplan.services.calendar import (
    PlanQuarter,
    QuarterRef,
    advance,
    create_empty_quarters,
    current_and_next_quarters,
    current_quarter,
    four_year_quarters,
    four_year_sequence,
    label,
    next_quarter,
    parse_start,
    quarter_after,
    quarter_options,
    sequence,
    short_label,
)


class TestLabels:
    def test_long_label(self):
        assert label("fall", 2025) == "Fall 2025"

    def test_short_label_uses_two_digit_year(self):
        assert short_label("winter", 2026) == "Winter 26"
        assert short_label("spring", 2005) == "Spring 5"


class TestParseStart:
    def test_parses_season_and_year(self):
        assert parse_start("Spring 2027") == QuarterRef("spring", 2027)

    def test_season_is_case_insensitive(self):
        assert parse_start("wInTeR 2026") == ("winter", 2026)

    def test_unparseable_label_falls_back_to_fall_of_current_year(self):
        assert parse_start("next year sometime", today=date(2031, 4, 2)) == ("fall", 2031)

    def test_empty_label_falls_back(self):
        assert parse_start("", today=date(2030, 1, 1)) == ("fall", 2030)


class TestSequence:
    def test_fall_2025_four_quarters(self):
        assert sequence("Fall 2025", 4) == [
            ("fall", 2025),
            ("winter", 2026),
            ("spring", 2026),
            ("summer", 2026),
        ]

    def test_summer_rolls_over_to_fall(self):
        assert sequence("Summer 2026", 2) == [("summer", 2026), ("fall", 2026)]

    def test_zero_count_is_empty(self):
        assert sequence("Fall 2025", 0) == []

    def test_sequence_is_strictly_increasing_in_calendar_order(self):
        quarters = sequence("Winter 2026", 12)
        seasons = ["winter", "spring", "summer", "fall"]
        keys = [(q.year, seasons.index(q.season)) for q in quarters]
        assert keys == sorted(keys)
        assert len(set(keys)) == 12


class TestFourYear:
    def test_has_sixteen_quarters_in_season_order_per_year(self):
        quarters = four_year_sequence(2025)
        assert len(quarters) == 16
        assert quarters[:4] == [
            ("fall", 2025),
            ("winter", 2025),
            ("spring", 2025),
            ("summer", 2025),
        ]
        assert quarters[-1] == ("summer", 2028)

    def test_slots_have_unique_ids_and_no_courses(self):
        slots = four_year_quarters(2025)
        assert len({q.id for q in slots}) == 16
        assert slots[0].id == "fy-2025-fall"
        assert slots[0].label == "Fall 2025"
        assert all(q.course_ids == [] for q in slots)

    def test_slots_do_not_share_course_lists(self):
        slots = four_year_quarters(2025)
        slots[0].course_ids.append("x")
        assert slots[1].course_ids == []


class TestNextAndAdvance:
    def test_next_within_year(self):
        assert next_quarter(QuarterRef("winter", 2026)) == ("spring", 2026)

    def test_next_after_summer_is_fall_of_next_year(self):
        assert next_quarter(QuarterRef("summer", 2028)) == ("fall", 2029)

    def test_advance_zero_is_identity(self):
        q = QuarterRef("spring", 2026)
        assert advance(q, 0) == q

    def test_advance_matches_repeated_next(self):
        q = QuarterRef("fall", 2025)
        expected = q
        for _ in range(6):
            expected = next_quarter(expected)
        assert advance(q, 6) == expected == ("spring", 2026)

    def test_negative_advance_rejected(self):
        with pytest.raises(ValueError):
            advance(QuarterRef("fall", 2025), -1)


class TestCurrentQuarter:
    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2026, 10, 19), ("fall", 2026)),
            (date(2026, 9, 1), ("fall", 2026)),
            (date(2026, 8, 31), ("summer", 2026)),
            (date(2026, 6, 1), ("summer", 2026)),
            (date(2026, 5, 31), ("spring", 2026)),
            (date(2026, 3, 1), ("spring", 2026)),
            (date(2026, 2, 28), ("winter", 2026)),
            (date(2026, 1, 1), ("winter", 2026)),
        ],
    )
    def test_month_mapping(self, today, expected):
        assert current_quarter(today) == expected

    def test_current_and_next(self):
        cur, nxt = current_and_next_quarters(date(2026, 7, 4))
        assert (cur.season, cur.year, cur.id) == ("summer", 2026, "fy-2026-summer")
        assert (nxt.season, nxt.year, nxt.id) == ("fall", 2027, "fy-2027-fall")


class TestPlanSkeletons:
    def test_create_empty_quarters_numbers_ids(self):
        quarters = create_empty_quarters("Fall 2025", 3)
        assert [q.id for q in quarters] == ["q-0", "q-1", "q-2"]
        assert [q.label for q in quarters] == ["Fall 2025", "Winter 2026", "Spring 2026"]

    def test_quarter_after_uses_slot_ids(self):
        last = PlanQuarter(id="fy-2028-summer", season="summer", year=2028, label="Summer 2028")
        nxt = quarter_after(last)
        assert (nxt.id, nxt.label, nxt.course_ids) == ("fy-2029-fall", "Fall 2029", [])

    def test_quarter_options_span_five_years(self):
        options = quarter_options(date(2026, 10, 19))
        assert len(options) == 20
        assert options[0] == "Fall 2025"
        assert options[-1] == "Summer 2029"

    def test_quarter_after_plan_slot_keeps_calendar_labels(self):
        last = create_empty_quarters("Fall 2025", 1)[0]
        nxt = quarter_after(last)
        assert (nxt.id, nxt.label) == ("q-1", "Winter 2026")
        assert quarter_after(last, position=7).id == "q-7"

    def test_quarter_after_unnumbered_slot_needs_position(self):
        last = PlanQuarter(id="custom", season="fall", year=2025, label="Fall 2025")
        with pytest.raises(ValueError):
            quarter_after(last)
        assert quarter_after(last, position=3).label == "Winter 2026"
