"""
Tests for the ValidationEngine facade.
"""

import pytest

from modules.validation import (
    LengthValidator,
    ValidationContext,
    ValidationEngine,
    ValidatorNotFoundError,
    ValidatorRegistry,
    get_default_registry,
)
from shared.utils.config import settings

BUILTINS = [
    "alpha", "alphanumeric", "email", "float", "iban", "integer",
    "length", "number", "phone", "url", "uuid",
]


def test_builtins_registered(engine):
    assert engine.available_validators() == BUILTINS


def test_validate_returns_detailed_result(engine):
    result = engine.validate("iban", "DE89370400440532013000")

    assert result.is_valid
    assert result.errors["country_code"] == "DE"


def test_unknown_validator_raises(engine):
    with pytest.raises(ValidatorNotFoundError, match="postcode"):
        engine.validate("postcode", "LT-01100")

    with pytest.raises(LookupError):
        engine.is_valid("postcode", "LT-01100")


def test_per_call_context_accepts_dict(engine):
    result = engine.validate("uuid", "550e8400-e29b-41d4-a716-446655440000", {"version": 1})

    assert result.constraint == "version_mismatch"


def test_stored_context_applies_when_call_has_none(registry):
    engine = ValidationEngine(registry, context={"allow_spaces": True}, config_path="")

    assert engine.is_alpha("hello world")
    assert not engine.validate("alpha", "hello world", ValidationContext()).is_valid


def test_with_context_returns_new_engine(engine):
    spaced = engine.with_context({"allow_spaces": True})

    assert spaced is not engine
    assert spaced.registry is engine.registry
    assert spaced.is_alpha("hello world")
    assert not engine.is_alpha("hello world")
    assert engine.context is None
    assert spaced.context == ValidationContext({"allow_spaces": True})


def test_existing_registrations_are_kept(registry):
    custom = LengthValidator(max=2)
    registry.register(custom)

    engine = ValidationEngine(registry, config_path="")

    assert engine.registry.get("length") is custom
    assert engine.registry.count() == len(BUILTINS)


def test_engines_share_registry_without_conflict(registry):
    ValidationEngine(registry, config_path="")
    ValidationEngine(registry, config_path="")

    assert registry.count() == len(BUILTINS)


def test_auto_register_disabled():
    engine = ValidationEngine(ValidatorRegistry(), auto_register=False, config_path="")

    assert engine.available_validators() == []
    assert engine.is_email("user@example.com") is False


def test_default_registry_used():
    engine = ValidationEngine(config_path="")

    assert engine.registry is get_default_registry()


def test_register_validator(engine):
    engine.register_validator(LengthValidator(name="pin", exact=4))

    assert engine.is_valid("pin", "1234")
    assert not engine.is_valid("pin", "12345")


def test_convenience_methods(engine):
    assert engine.is_email("user@example.com")
    assert not engine.is_email("not-an-email")
    assert engine.is_phone("+37061234567")
    assert not engine.is_phone("123")
    assert engine.is_url("https://example.com")
    assert not engine.is_url("example.com")
    assert engine.is_number("3.14")
    assert not engine.is_number("pi")
    assert engine.is_alpha("abc")
    assert engine.is_alphanumeric("abc123")
    assert engine.is_iban("GB82WEST12345698765432")
    assert not engine.is_iban("GB82WEST12345698765433")
    assert engine.is_uuid("550e8400-e29b-41d4-a716-446655440000")
    assert not engine.is_uuid("550e8400")


def test_is_length(engine):
    assert engine.is_length("abcd", 3, 5)
    assert not engine.is_length("ab", 3, 5)
    assert not engine.is_length("abcdef", min=3, max=5)
    assert engine.is_length("a" * 100, min=1)


def test_load_config(tmp_path, engine):
    path = tmp_path / "validators.yaml"
    path.write_text("""
global:
  default_context:
    allow_spaces: true
validators:
  - name: username_length
    type: length
    params: {min: 3, max: 20}
  - type: uuid
    params: {version: 4}
    overwrite: true
""", encoding="utf-8")

    created = engine.load_config(path)

    assert set(created) == {"username_length", "uuid"}
    assert engine.is_valid("username_length", "jonas")
    assert not engine.is_valid("username_length", "jo")
    assert not engine.is_uuid("c232ab00-9414-11ec-b3c8-9e6bdeced846")
    assert engine.is_alpha("hello world")


def test_config_path_on_construction(tmp_path, registry):
    path = tmp_path / "validators.yaml"
    path.write_text("validators:\n  - name: pin\n    type: length\n    params: {exact: 4}\n", encoding="utf-8")

    engine = ValidationEngine(registry, config_path=path)

    assert engine.is_valid("pin", "1234")


@pytest.mark.parametrize("name, value", [
    ("iban", "LT601010012345678901"),
    ("uuid", "550e8400-e29b-41d4-a716-446655440000"),
    ("email", "not-an-email"),
    ("float", "1.25"),
])
def test_idempotent(engine, name, value):
    assert engine.validate(name, value) == engine.validate(name, value)


def test_initialization_logs_application_name(caplog, registry):
    with caplog.at_level("INFO", logger="modules.validation.engine"):
        ValidationEngine(registry, config_path="")

    assert f"{settings.APP_NAME} {settings.APP_VERSION}" in caplog.text
    assert f"initialized with {len(BUILTINS)} validators" in caplog.text
