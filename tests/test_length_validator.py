"""
Tests for LengthValidator.
"""

import pytest

from modules.validation import LengthValidator, ValidationContext


@pytest.mark.parametrize("value, is_valid, constraint", [
    ("ab", False, "min"),
    ("abc", True, None),
    ("abcd", True, None),
    ("abcde", True, None),
    ("abcdef", False, "max"),
])
def test_boundaries(value, is_valid, constraint):
    result = LengthValidator(min=3, max=5).validate(value)

    assert result.is_valid is is_valid
    assert result.constraint == constraint


def test_range_failure_category():
    result = LengthValidator(min=3).validate("ab")

    assert result.category == "range_violation"
    assert result.errors["length"] == 2
    assert result.errors["min"] == 3


def test_exact_takes_precedence():
    validator = LengthValidator(min=1, max=2, exact=4)

    assert validator.validate("abcd").is_valid
    result = validator.validate("ab")
    assert result.constraint == "exact"


def test_counts_characters_not_bytes():
    assert LengthValidator(max=4).validate("žąšė").is_valid


def test_use_bytes():
    result = LengthValidator(max=4, use_bytes=True).validate("žąšė")

    assert not result.is_valid
    assert result.errors["length"] == 8
    assert "bytes" in result.message


def test_min_greater_than_max_rejects_everything():
    validator = LengthValidator(min=5, max=3)

    for value in ["", "abc", "abcd", "abcde", "abcdefgh"]:
        assert not validator.validate(value).is_valid


def test_context_bounds():
    validator = LengthValidator(min=3, max=5)

    assert validator.validate("abcdefgh", ValidationContext({"max": 10})).is_valid
    assert not validator.validate("abc", ValidationContext({"exact": 2})).is_valid


def test_no_bounds_accepts_any_string():
    result = LengthValidator().validate("")

    assert result.is_valid
    assert result.errors["length"] == 0


@pytest.mark.parametrize("bound", ["3", 3.5, True])
def test_invalid_bound_parameter(bound):
    result = LengthValidator(min=bound).validate("abcd")

    assert not result.is_valid
    assert result.constraint == "parameter"
    assert result.errors["parameter"] == "min"


def test_non_string():
    result = LengthValidator(min=1).validate(12345)

    assert result.constraint == "type"
    assert result.category == "type_mismatch"


def test_presets():
    assert LengthValidator.min_length(2).parameters == {"min": 2, "use_bytes": False}
    assert LengthValidator.max_length(2).validate("ab").is_valid
    assert not LengthValidator.exact_length(2).validate("abc").is_valid
    assert LengthValidator.between(1, 3, use_bytes=True).validate("ž").is_valid
    assert not LengthValidator.between(1, 1, use_bytes=True).validate("ž").is_valid


def test_range_success_message():
    result = LengthValidator(min=3, max=5).validate("abcd")

    assert result.message == "String length is within range (3-5)"
