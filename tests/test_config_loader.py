"""
Tests for ValidationConfigLoader.
"""

import pytest

from modules.validation import ConfigurationError, ValidationConfigLoader


def write_config(tmp_path, content):
    path = tmp_path / "validators.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_loads_definitions_and_default_context(tmp_path):
    path = write_config(tmp_path, """
global:
  default_context:
    allow_spaces: true
validators:
  - name: username_length
    type: length
    params:
      min: 3
      max: 20
  - type: uuid
""")
    loader = ValidationConfigLoader(path)

    assert loader.get_default_context() == {"allow_spaces": True}
    definitions = loader.get_validator_definitions()
    assert [d["type"] for d in definitions] == ["length", "uuid"]
    assert definitions[0]["params"] == {"min": 3, "max": 20}


def test_missing_file_gives_empty_config(tmp_path):
    loader = ValidationConfigLoader(tmp_path / "absent.yaml")

    assert loader.load() == {"global": {"default_context": {}}, "validators": []}
    assert loader.get_validator_definitions() == []


def test_no_path_gives_empty_config():
    loader = ValidationConfigLoader("")

    assert loader.config_path is None
    assert loader.get_default_context() == {}


def test_empty_file(tmp_path):
    loader = ValidationConfigLoader(write_config(tmp_path, ""))

    assert loader.get_validator_definitions() == []


def test_malformed_yaml_raises(tmp_path):
    loader = ValidationConfigLoader(write_config(tmp_path, "validators: [unclosed"))

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        loader.load()


def test_non_mapping_document_raises(tmp_path):
    loader = ValidationConfigLoader(write_config(tmp_path, "- just\n- a list\n"))

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        loader.load()


@pytest.mark.parametrize("validators", [
    "validators: {type: length}",
    "validators:\n  - name: no_type",
    "validators:\n  - just-a-string",
    "validators:\n  - type: length\n    params: [1, 2]",
])
def test_malformed_definitions_raise(tmp_path, validators):
    loader = ValidationConfigLoader(write_config(tmp_path, validators))

    with pytest.raises(ConfigurationError):
        loader.get_validator_definitions()


def test_non_mapping_global_raises(tmp_path):
    loader = ValidationConfigLoader(write_config(tmp_path, "global: [1]"))

    with pytest.raises(ConfigurationError):
        loader.get_default_context()


def test_reload_picks_up_changes(tmp_path):
    path = write_config(tmp_path, "validators:\n  - type: iban\n")
    loader = ValidationConfigLoader(path)
    assert len(loader.get_validator_definitions()) == 1

    path.write_text("validators:\n  - type: iban\n  - type: uuid\n", encoding="utf-8")
    loader.reload()

    assert len(loader.get_validator_definitions()) == 2
