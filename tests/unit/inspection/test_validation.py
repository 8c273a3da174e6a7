import pytest

from conftest import category, grain, standard
from inspection.exceptions import InvalidInputError
from inspection.models import Batch
from inspection.validation import ensure_valid, validate_batch, validate_standard


class TestValidateBatch:
    def test_clean_batch(self, scenario_batch):
        assert validate_batch(scenario_batch) == []

    def test_reports_each_problem(self):
        batch = Batch(grains=(
            grain(length=-1),
            grain(weight=0),
            grain(shape="round"),
            grain(type="blue"),
            grain(weight=float("nan")),
        ))

        problems = validate_batch(batch)

        assert len(problems) == 5
        assert problems[0].startswith("grain 0: length")
        assert "unknown shape 'round'" in problems[2]
        assert "unknown type 'blue'" in problems[3]


class TestValidateStandard:
    def test_clean_standard(self, scenario_standard):
        assert validate_standard(scenario_standard) == []

    def test_inverted_bounds(self):
        problems = validate_standard(standard(category(min_length=7, max_length=5)))

        assert problems == ["category 'Whole': minLength 7 exceeds maxLength 5"]

    def test_unrecognized_tags(self):
        problems = validate_standard(standard(category(condition_min="", condition_max="GT")))

        assert len(problems) == 2
        assert "conditionMin ''" in problems[0]
        assert "conditionMax 'GT'" in problems[1]

    def test_negative_length_and_unknown_shape(self):
        problems = validate_standard(
            standard(category(min_length=-1, shape=("wholegrain", "round")))
        )

        assert any("minLength must be a non-negative number" in p for p in problems)
        assert any("unknown shape 'round'" in p for p in problems)


class TestEnsureValid:
    def test_passes_clean_input(self, scenario_batch, scenario_standard):
        ensure_valid(scenario_batch, scenario_standard)

    def test_raises_with_all_problems(self, scenario_standard):
        batch = Batch(grains=(grain(weight=-2),))

        with pytest.raises(InvalidInputError) as exc_info:
            ensure_valid(batch, scenario_standard)

        assert exc_info.value.problems == ["grain 0: weight must be a positive number, got -2"]
