import math
import random

import pytest

from conftest import category, grain, standard
from config.constants import DEFECT_TYPES, TOTAL_DEFECT_LABEL
from inspection.calculator import (
    calculate_inspection_results,
    compute_composition,
    compute_defects,
    format_percentage,
    matches_length,
    percentage_of,
)
from inspection.models import Batch


def _percent(actual):
    assert actual.endswith("%")
    return float(actual[:-1])


def _defect_map(rows):
    return {row.name: row.actual for row in rows}


class TestComposition:
    def test_reference_scenario(self, scenario_batch):
        rows = compute_composition(scenario_batch.grains, standard(category()))

        assert len(rows) == 1
        assert rows[0].name == "Whole"
        assert rows[0].length == "5 - 7 mm"
        assert rows[0].actual == "66.67%"

    def test_empty_batch_gives_zero_rows(self):
        std = standard(category(name="A"), category(name="B", shape=("broken",)))

        rows = compute_composition([], std)

        assert [r.actual for r in rows] == ["0.00%", "0.00%"]
        assert [r.name for r in rows] == ["A", "B"]

    def test_rows_follow_category_order_without_merging(self):
        std = standard(
            category(name="Z"),
            category(name="A"),
            category(name="Z"),
        )

        rows = compute_composition([grain()], std)

        assert [r.name for r in rows] == ["Z", "A", "Z"]

    def test_overlapping_categories_both_count_the_grain(self):
        std = standard(
            category(name="Wide", min_length=1, max_length=10),
            category(name="Narrow", min_length=4, max_length=6),
        )

        rows = compute_composition([grain(length=5, weight=2)], std)

        assert [r.actual for r in rows] == ["100.00%", "100.00%"]
        assert sum(_percent(r.actual) for r in rows) > 100

    def test_shape_outside_set_is_excluded_at_boundary(self):
        std = standard(category(shape=("broken",)))

        rows = compute_composition([grain(length=5, shape="wholegrain")], std)

        assert rows[0].actual == "0.00%"

    def test_empty_shape_set_matches_nothing(self):
        std = standard(category(shape=()))

        rows = compute_composition([grain(length=6), grain(length=6, shape="broken")], std)

        assert rows[0].actual == "0.00%"

    def test_unrecognized_min_condition_imposes_no_lower_bound(self):
        std = standard(category(min_length=1000, max_length=7, condition_min=""))

        rows = compute_composition([grain(length=0.1)], std)

        assert rows[0].actual == "100.00%"

    def test_unrecognized_max_condition_imposes_no_upper_bound(self):
        std = standard(category(min_length=5, max_length=0, condition_max="XX"))

        rows = compute_composition([grain(length=500)], std)

        assert rows[0].actual == "100.00%"

    def test_inverted_bounds_are_not_rejected(self):
        std = standard(category(min_length=7, max_length=5))

        rows = compute_composition([grain(length=6)], std)

        assert rows[0].actual == "0.00%"
        assert rows[0].length == "7 - 5 mm"

    def test_length_range_keeps_decimals(self):
        std = standard(category(min_length=3.5, max_length=6.25))

        rows = compute_composition([], std)

        assert rows[0].length == "3.5 - 6.25 mm"

    def test_grains_are_not_mutated(self, scenario_batch, scenario_standard):
        before = list(scenario_batch.grains)

        compute_composition(scenario_batch.grains, scenario_standard)
        compute_defects(scenario_batch.grains)

        assert list(scenario_batch.grains) == before

    def test_repeated_calls_are_identical(self, scenario_batch, scenario_standard):
        first = calculate_inspection_results(scenario_batch, scenario_standard)
        second = calculate_inspection_results(scenario_batch, scenario_standard)

        assert first == second


class TestLengthBoundaries:
    @pytest.mark.parametrize(
        "condition_min, expected",
        [("GE", True), ("GT", False), ("", True), (None, True)],
    )
    def test_min_bound(self, condition_min, expected):
        cat = category(min_length=5, max_length=7, condition_min=condition_min)

        assert matches_length(5, cat) is expected

    @pytest.mark.parametrize(
        "condition_max, expected",
        [("LE", True), ("LT", False), ("", True), ("GE", True)],
    )
    def test_max_bound(self, condition_max, expected):
        cat = category(min_length=5, max_length=7, condition_max=condition_max)

        assert matches_length(7, cat) is expected

    def test_min_tags_are_not_accepted_as_max(self):
        cat = category(min_length=0, max_length=1, condition_max="GT")

        assert matches_length(100, cat) is True


class TestDefects:
    def test_reference_scenario(self, scenario_batch):
        rows = compute_defects(scenario_batch.grains)
        actual = _defect_map(rows)

        assert [r.name for r in rows] == list(DEFECT_TYPES) + [TOTAL_DEFECT_LABEL]
        assert actual["yellow"] == "33.33%"
        for defect_type in ("red", "damage", "paddy", "chalky", "glutinous"):
            assert actual[defect_type] == "0.00%"
        assert actual[TOTAL_DEFECT_LABEL] == "33.33%"

    def test_empty_batch(self):
        rows = compute_defects([])

        assert len(rows) == len(DEFECT_TYPES) + 1
        assert all(r.actual == "0.00%" for r in rows)

    def test_white_grains_only_contribute_to_denominator(self):
        rows = compute_defects([grain(type="white", weight=3), grain(type="red", weight=1)])
        actual = _defect_map(rows)

        assert actual["red"] == "25.00%"
        assert actual[TOTAL_DEFECT_LABEL] == "25.00%"

    def test_all_white_batch_has_no_defects(self):
        rows = compute_defects([grain(type="white", weight=w) for w in (1, 2, 3)])

        assert all(r.actual == "0.00%" for r in rows)

    def test_unknown_type_is_ignored(self):
        rows = compute_defects([grain(type="purple", weight=1), grain(type="paddy", weight=1)])
        actual = _defect_map(rows)

        assert actual["paddy"] == "50.00%"
        assert actual[TOTAL_DEFECT_LABEL] == "50.00%"

    def test_standard_shape_does_not_matter(self):
        rows = compute_defects([grain(type="chalky", shape="broken", length=0.5)])

        assert _defect_map(rows)["chalky"] == "100.00%"

    def test_total_matches_sum_of_types_for_random_batches(self):
        rng = random.Random(20231019)
        types = list(DEFECT_TYPES) + ["white"]

        for _ in range(300):
            grains = [
                grain(weight=rng.uniform(0.001, 5.0), type=rng.choice(types))
                for _ in range(rng.randint(1, 60))
            ]
            batch_weight = sum(g.weight for g in grains)
            raw_sum = sum(
                g.weight / batch_weight * 100 for g in grains if g.type != "white"
            )

            rows = compute_defects(grains)
            actual = _defect_map(rows)
            total = _percent(actual[TOTAL_DEFECT_LABEL])
            rounded_rows = sum(_percent(actual[t]) for t in DEFECT_TYPES)

            assert abs(total - raw_sum) <= 0.01
            # each row is off by at most half a cent
            assert abs(total - rounded_rows) <= 0.005 * (len(DEFECT_TYPES) + 1) + 1e-9
            assert not any("nan" in r.actual.lower() for r in rows)


class TestInspectionResults:
    def test_bundles_rows_count_and_image(self, scenario_batch, scenario_standard):
        result = calculate_inspection_results(scenario_batch, scenario_standard)

        assert result.total_sample == 2
        assert result.image_url == "https://example.com/raw.jpg"
        assert [r.actual for r in result.composition] == ["66.67%", "33.33%"]
        assert _defect_map(result.defects)["total"] == "33.33%"

    def test_broken_category_uses_strict_bounds(self, scenario_batch, scenario_standard):
        # the 1mm broken grain is inside 0 < length < 5
        batch = Batch(grains=scenario_batch.grains[1:])

        result = calculate_inspection_results(batch, scenario_standard)

        assert [r.actual for r in result.composition] == ["0.00%", "100.00%"]

    def test_empty_batch(self, scenario_standard):
        result = calculate_inspection_results(Batch(grains=()), scenario_standard)

        assert result.total_sample == 0
        assert all(r.actual == "0.00%" for r in result.composition)
        assert all(r.actual == "0.00%" for r in result.defects)


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0.00%"), (100, "100.00%"), (66.666666, "66.67%"), (33.333333, "33.33%")],
    )
    def test_format_percentage(self, value, expected):
        assert format_percentage(value) == expected

    @pytest.mark.parametrize("value, expected", [(0.125, "0.13%"), (0.375, "0.38%"), (-0.125, "-0.13%")])
    def test_ties_round_away_from_zero(self, value, expected):
        assert format_percentage(value) == expected

    def test_inexact_float_is_not_a_tie(self):
        # 1.005 is stored as 1.00499999...
        assert format_percentage(1.005) == "1.00%"

    def test_non_finite(self):
        assert format_percentage(float("nan")) == "NaN%"

    def test_one_in_eight_hundred_rows(self):
        grains = [grain(type="yellow")] + [grain() for _ in range(799)]
        std = standard(category(name="Yellow only", shape=("none",)), category())

        defects = {row.name: row.actual for row in compute_defects(grains)}
        composition = compute_composition(grains[:1] + [grain(shape="broken")] * 799, std)

        assert defects["yellow"] == "0.13%"
        assert defects[TOTAL_DEFECT_LABEL] == "0.13%"
        assert composition[1].actual == "0.13%"

    def test_percentage_of_zero_total(self):
        assert percentage_of(5, 0) == 0
        assert not math.isnan(percentage_of(0, 0))

    def test_percentage_of_negative_total(self):
        assert percentage_of(1, -3) == 0
