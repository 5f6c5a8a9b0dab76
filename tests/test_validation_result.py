"""
Tests for ValidationResult and ValidationContext.
"""

import pytest

from modules.validation import ErrorCategory, ValidationContext, ValidationResult, ValidationResultType


def test_success_result():
    result = ValidationResult.success("ok", {"normalized": "abc"})

    assert result.is_valid
    assert result.kind == ValidationResultType.SUCCESS
    assert result.message == "ok"
    assert result.errors == {"normalized": "abc"}
    assert not result.is_warning


def test_failure_result_exposes_constraint_and_category():
    result = ValidationResult.failure(
        "bad checksum",
        {"constraint": "checksum", "category": ErrorCategory.CHECKSUM_FAILURE.value}
    )

    assert not result.is_valid
    assert result.kind == ValidationResultType.FAILURE
    assert result.constraint == "checksum"
    assert result.category == "checksum_failure"


def test_warning_is_a_pass():
    result = ValidationResult.warning("disposable", {"constraint": "disposable"})

    assert result.is_valid
    assert result.is_warning
    assert result.constraint == "disposable"
    assert result.category is None


def test_kind_is_derived_from_validity():
    assert ValidationResult(True).kind == ValidationResultType.SUCCESS
    assert ValidationResult(False).kind == ValidationResultType.FAILURE


@pytest.mark.parametrize("is_valid, kind", [
    (False, ValidationResultType.WARNING),
    (True, ValidationResultType.FAILURE),
    (False, ValidationResultType.SUCCESS),
])
def test_inconsistent_kind_is_rejected(is_valid, kind):
    with pytest.raises(ValueError):
        ValidationResult(is_valid, "inconsistent", {}, kind)


def test_result_is_immutable():
    result = ValidationResult.success()

    with pytest.raises(AttributeError):
        result.is_valid = False


def test_errors_are_copied_on_construction():
    errors = {"constraint": "min"}
    result = ValidationResult.failure("too short", errors)
    errors["constraint"] = "max"

    assert result.constraint == "min"


def test_to_dict():
    result = ValidationResult.failure("too short", {"constraint": "min", "min": 3})

    assert result.to_dict() == {
        "is_valid": False,
        "message": "too short",
        "errors": {"constraint": "min", "min": 3},
        "kind": "failure",
    }


def test_context_distinguishes_absent_from_none():
    context = ValidationContext({"max": None})

    assert context.has("max")
    assert context.get("max", 10) is None
    assert not context.has("min")
    assert context.get("min", 10) == 10


def test_context_fluent_mutation():
    context = ValidationContext().set("min", 3).set("max", 5)

    assert context.all() == {"min": 3, "max": 5}
    assert list(context) == ["min", "max"]

    context.remove("min").remove("missing")
    assert context.all() == {"max": 5}

    context.clear()
    assert len(context) == 0


def test_context_all_returns_copy():
    context = ValidationContext(min=1)
    data = context.all()
    data["min"] = 99

    assert context.get("min") == 1


def test_context_copy_and_equality():
    context = ValidationContext({"strict": True})
    clone = context.copy()

    assert clone == context
    clone.set("strict", False)
    assert clone != context
    assert "strict" in context
