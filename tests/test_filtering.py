"""
Tests for the filter pipeline.
"""

import itertools

import pytest

from dexplorer.criteria import FilterCriteria
from dexplorer.filtering import apply_filters, matches


def names(records):
    return [r.name for r in records]


def naive_filter(records, criteria):
    out = []
    for r in records:
        if criteria.name_substring and criteria.name_substring.lower() not in r.name.lower():
            continue
        if not (criteria.weight_range[0] <= r.weight <= criteria.weight_range[1]):
            continue
        if not (criteria.height_range[0] <= r.height <= criteria.height_range[1]):
            continue
        if criteria.type_selector and criteria.type_selector not in r.types:
            continue
        out.append(r)
    return out


class TestApplyFilters:
    """Test single-axis and combined filtering."""

    def test_end_to_end_char_fire(self, make_record):
        """Only Charmander survives name, weight, height and type together."""
        records = [
            make_record(6, "Charizard", 905, 17, ("fire", "flying")),
            make_record(4, "Charmander", 85, 6, ("fire",)),
            make_record(7, "Squirtle", 90, 5, ("water",)),
        ]
        criteria = FilterCriteria(
            name_substring="char",
            weight_range=(0, 100),
            height_range=(0, 20),
            type_selector="fire",
        )
        assert names(apply_filters(records, criteria)) == ["Charmander"]

    def test_empty_input(self):
        assert apply_filters([], FilterCriteria(name_substring="x")) == []

    def test_empty_criteria_is_sorted_permutation(self, sample_records):
        """No active axes: every record comes back, ordered by name."""
        wide = FilterCriteria(weight_range=(0, 10_000), height_range=(0, 100))
        result = apply_filters(sample_records, wide)
        assert sorted(result, key=lambda r: r.id) == sorted(sample_records, key=lambda r: r.id)
        assert names(result) == sorted(names(sample_records), key=str.casefold)

    def test_name_is_case_insensitive(self, sample_records):
        result = apply_filters(sample_records, FilterCriteria(name_substring="PIDG"))
        assert names(result) == ["Pidgey"]

    def test_sort_ignores_case(self, sample_records):
        """'Pidgey' sorts between 'magikarp' and 'pikachu'."""
        result = apply_filters(sample_records, FilterCriteria(weight_range=(0, 10_000)))
        ordered = names(result)
        assert ordered.index("magikarp") < ordered.index("Pidgey") < ordered.index("pikachu")

    def test_accented_names_sort_with_base_letter(self, make_record):
        records = [make_record(41, "zubat"), make_record(133, "Éevee"), make_record(63, "abra")]
        assert names(apply_filters(records, FilterCriteria())) == ["abra", "Éevee", "zubat"]

    def test_accent_only_breaks_ties(self, make_record):
        records = [make_record(2, "ekans"), make_record(3, "éevee"), make_record(1, "eevee")]
        assert names(apply_filters(records, FilterCriteria())) == ["eevee", "éevee", "ekans"]

    def test_type_selector_secondary_tag(self, sample_records):
        wide = FilterCriteria(type_selector="flying", weight_range=(0, 1000))
        assert names(apply_filters(sample_records, wide)) == ["charizard", "Pidgey"]

    def test_ranges_are_inclusive(self, sample_records):
        """A single-point range keeps exact matches."""
        criteria = FilterCriteria(weight_range=(85, 85), height_range=(6, 6))
        assert names(apply_filters(sample_records, criteria)) == ["charmander"]

    def test_ranges_exclude_just_outside(self, sample_records):
        criteria = FilterCriteria(weight_range=(85.5, 89.9))
        assert apply_filters(sample_records, criteria) == []

    def test_stable_for_equal_names(self, make_record):
        """Identical names keep their input order."""
        first = make_record(1, "ditto", types=("normal",))
        second = make_record(2, "Ditto", types=("normal",))
        third = make_record(3, "DITTO", types=("normal",))
        assert apply_filters([second, third, first], FilterCriteria()) == [second, third, first]

    def test_idempotent(self, sample_records):
        criteria = FilterCriteria(name_substring="a", weight_range=(50, 1000))
        once = apply_filters(sample_records, criteria)
        assert apply_filters(once, criteria) == once

    def test_does_not_mutate_input(self, sample_records):
        before = list(sample_records)
        apply_filters(sample_records, FilterCriteria(name_substring="char"))
        assert sample_records == before


class TestAgainstNaiveFilter:
    """Exhaustive comparison with a straightforward reference filter."""

    BOUNDS = [0, 18, 60, 85, 90, 100, 190, 905, 4600]

    def test_weight_ranges_no_false_positives_or_negatives(self, sample_records):
        for low, high in itertools.combinations_with_replacement(self.BOUNDS, 2):
            criteria = FilterCriteria(weight_range=(low, high), height_range=(0, 100))
            result = apply_filters(sample_records, criteria)
            assert all(low <= r.weight <= high for r in result)
            assert {r.id for r in result} == {r.id for r in naive_filter(sample_records, criteria)}

    @pytest.mark.parametrize("term", ["", "a", "char", "CHAR", "z", "pi"])
    @pytest.mark.parametrize("type_selector", ["", "fire", "flying", "water", "ghost"])
    def test_combined_axes(self, sample_records, term, type_selector):
        for height in [(0, 5), (4, 11), (0, 100)]:
            criteria = FilterCriteria(
                name_substring=term,
                weight_range=(0, 1000),
                height_range=height,
                type_selector=type_selector,
            )
            result = apply_filters(sample_records, criteria)
            assert {r.id for r in result} == {r.id for r in naive_filter(sample_records, criteria)}
            assert all(matches(r, criteria) for r in result)
