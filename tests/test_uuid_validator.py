"""
Tests for UuidValidator.
"""

import pytest

from modules.validation import UuidValidator, ValidationContext

V4_UUID = "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def validator():
    return UuidValidator()


@pytest.mark.parametrize("uuid, version", [
    ("c232ab00-9414-11ec-b3c8-9e6bdeced846", 1),
    ("6fa459ea-ee8a-3ca4-894e-db77e160355e", 3),
    (V4_UUID, 4),
    ("886313e1-3b8a-5372-9b90-0c9aee199e5d", 5),
])
def test_valid_versions(validator, uuid, version):
    result = validator.validate(uuid)

    assert result.is_valid, result.message
    assert result.errors["version"] == version


def test_success_details(validator):
    result = validator.validate("  550E8400-E29B-41D4-A716-446655440000 ")

    assert result.is_valid
    assert result.errors["normalized"] == V4_UUID
    assert result.errors["version"] == 4
    assert result.errors["variant"] == "a"


def test_required_version_mismatch(validator):
    result = validator.validate(V4_UUID, ValidationContext({"version": 1}))

    assert not result.is_valid
    assert result.constraint == "version_mismatch"
    assert result.errors["actual_version"] == 4
    assert result.errors["required_version"] == 1


def test_required_version_match():
    assert UuidValidator(version=4).validate(V4_UUID).is_valid


def test_context_version_overrides_construction():
    validator = UuidValidator(version=1)

    assert not validator.validate(V4_UUID).is_valid
    assert validator.validate(V4_UUID, ValidationContext({"version": 4})).is_valid


@pytest.mark.parametrize("version", [2, 7, "4", 4.0, True])
def test_unusable_required_version(validator, version):
    result = validator.validate(V4_UUID, ValidationContext({"version": version}))

    assert not result.is_valid
    assert result.constraint == "parameter"
    assert result.category == "unsupported_variant"


@pytest.mark.parametrize("uuid", [
    "550e8400-e29b-41d4-a716-44665544000g",
    "550e8400e29b41d4a716446655440000",
    "550e8400-e29b-41d4-a716-4466554400",
    "{550e8400-e29b-41d4-a716-446655440000}",
])
def test_format_mismatch(validator, uuid):
    result = validator.validate(uuid)

    assert not result.is_valid
    assert result.constraint == "format"
    assert result.category == "format_mismatch"


def test_unsupported_version_digit(validator):
    result = validator.validate("550e8400-e29b-61d4-a716-446655440000")

    assert result.constraint == "version"
    assert result.errors["version"] == 6


def test_invalid_variant(validator):
    result = validator.validate("550e8400-e29b-41d4-c716-446655440000")

    assert result.constraint == "variant"
    assert result.errors["variant"] == "c"


def test_empty_and_non_string(validator):
    assert validator.validate("").constraint == "empty"
    assert validator.validate(None).constraint == "type"
