"""Unit tests for the named field validators."""

from decimal import Decimal

import pytest

from src.catalog.entities.core.errors import UnknownValidatorError
from src.catalog.entities.core.validators import (
    VALIDATORS,
    get_validator,
    non_empty,
    non_negative,
    number,
    run_validators,
)


class TestNonEmpty:
    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, set()])
    def test_empty_values(self, value):
        assert non_empty(value) == "must not be empty"

    @pytest.mark.parametrize("value", ["a", 0, 0.0, False, [1], {"k": "v"}])
    def test_present_values(self, value):
        assert non_empty(value) is None


class TestNumber:
    @pytest.mark.parametrize("value", [0, 1, -3, 2.5, Decimal("1.10"), "42", " 3.5 ", "-1"])
    def test_numbers(self, value):
        assert number(value) is None

    @pytest.mark.parametrize(
        "value", [True, False, "abc", "", None, [1], float("nan"), float("inf"), "NaN"]
    )
    def test_not_numbers(self, value):
        assert number(value) == "must be a number"


class TestNonNegative:
    @pytest.mark.parametrize("value", [0, 5, "7", 0.1])
    def test_non_negative(self, value):
        assert non_negative(value) is None

    @pytest.mark.parametrize("value", [-1, "-0.5", Decimal("-2")])
    def test_negative(self, value):
        assert non_negative(value) == "must not be negative"

    def test_non_numbers_are_left_to_number(self):
        assert non_negative("abc") is None


class TestRegistry:
    def test_registered_names(self):
        assert set(VALIDATORS) == {"NonEmpty", "Number", "NonNegative"}
        assert get_validator("Number") is number

    def test_unknown_validator(self):
        with pytest.raises(UnknownValidatorError):
            get_validator("Email")

    def test_unknown_validator_is_a_key_error(self):
        with pytest.raises(KeyError):
            get_validator("Email")

    def test_run_validators_collects_messages(self):
        assert run_validators(-1, ["NonEmpty", "Number", "NonNegative"]) == [
            "must not be negative"
        ]
        assert run_validators("x", ["Number", "NonNegative"]) == ["must be a number"]

    def test_run_validators_stops_after_empty(self):
        assert run_validators("", ["NonEmpty", "Number"]) == ["must not be empty"]

    def test_run_validators_without_names(self):
        assert run_validators(None, []) == []
