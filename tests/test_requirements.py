import pytest

from quarterplan.services.catalog import CatalogLookupError, InMemoryCatalog
from quarterplan.services.requirements import (
    estimate_quarters_remaining,
    manual_requirements,
    progress,
    remaining_course_ids,
    remaining_units,
    required_course_ids,
)
from tests.helpers import course, major


class TestRequiredCourseIds:
    def test_union_is_deduplicated_in_first_seen_order(self):
        m = major("m", ["a", "b"], ["b", "c"], ["a"])
        assert required_course_ids(m) == ["a", "b", "c"]

    def test_empty_groups_contribute_nothing(self):
        m = major("m", [], ["a"], [])
        assert required_course_ids(m) == ["a"]

    def test_major_without_course_lists_is_empty(self):
        assert required_course_ids(major("m", [], [])) == []

    def test_manual_requirements_are_the_empty_groups(self):
        m = major("m", [], ["a"], [])
        assert [g.id for g in manual_requirements(m)] == ["m-0", "m-2"]


class TestRemaining:
    def test_scenario_nothing_completed(self, two_course_catalog):
        m, catalog = two_course_catalog
        assert remaining_units(m, set(), catalog) == 7
        assert estimate_quarters_remaining(m, set(), catalog, 14) == 1

    def test_scenario_first_course_completed(self, two_course_catalog):
        m, catalog = two_course_catalog
        assert remaining_course_ids(m, {"c1"}) == ["c2"]
        assert remaining_units(m, {"c1"}, catalog) == 4

    def test_unknown_course_counts_zero_units(self):
        catalog = InMemoryCatalog(courses=[course("a", units=5)])
        m = major("m", ["a", "ghost"])
        assert remaining_units(m, set(), catalog) == 5

    def test_strict_mode_raises_on_unknown_course(self):
        catalog = InMemoryCatalog(courses=[course("a", units=5)])
        m = major("m", ["a", "ghost"])
        with pytest.raises(CatalogLookupError):
            remaining_units(m, set(), catalog, strict=True)

    def test_completing_a_course_never_increases_remaining_units(self):
        catalog = InMemoryCatalog(courses=[course(c, units=u) for c, u in
                                           [("a", 4), ("b", 5), ("c", 3), ("d", 2)]])
        m = major("m", ["a", "b"], ["c", "d", "x"])
        completed: set[str] = set()
        previous = remaining_units(m, completed, catalog)
        for course_id in ["x", "c", "a", "zzz", "d", "b"]:
            completed.add(course_id)
            current = remaining_units(m, completed, catalog)
            assert current <= previous
            previous = current
        assert previous == 0


class TestEstimate:
    def test_floor_of_one_when_nothing_remains(self, two_course_catalog):
        m, catalog = two_course_catalog
        assert remaining_units(m, {"c1", "c2"}, catalog) == 0
        assert estimate_quarters_remaining(m, {"c1", "c2"}, catalog) == 1

    def test_rounds_up(self):
        catalog = InMemoryCatalog(courses=[course(c, units=5) for c in "abc"])
        m = major("m", ["a", "b", "c"])
        assert estimate_quarters_remaining(m, set(), catalog, units_per_quarter=14) == 2
        assert estimate_quarters_remaining(m, set(), catalog, units_per_quarter=5) == 3

    def test_rejects_non_positive_throughput(self, two_course_catalog):
        m, catalog = two_course_catalog
        with pytest.raises(ValueError):
            estimate_quarters_remaining(m, set(), catalog, units_per_quarter=0)


class TestProgress:
    def test_counts_only_required_courses(self):
        m = major("m", ["a", "b", "c", "d", "e", "f", "g", "h"])
        result = progress(m, {"a", "unrelated"})
        assert (result.completed, result.total, result.percent) == (1, 8, 13)

    def test_no_course_list_is_zero_percent(self):
        result = progress(major("m", []), {"a"})
        assert (result.completed, result.total, result.percent) == (0, 0, 0)
