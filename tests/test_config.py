"""
Tests for Configuration Loading.

Verifies that:
1. Defaults target the tfsdk helper package.
2. ``[tool.schemalint]`` is found in the nearest parent ``pyproject.toml``.
3. CLI overrides win over TOML values, while disabled rules accumulate.
4. Invalid values are rejected by validation.
"""

import pytest
from pydantic import ValidationError

from schemalint.config import DEFAULT_SCHEMA_TYPES, LintConfig


def write_toml(directory, body):
  (directory / "pyproject.toml").write_text(body, encoding="utf-8")


def test_defaults(tmp_path):
  config = LintConfig.load(search_path=tmp_path)

  assert config.schema_types == DEFAULT_SCHEMA_TYPES
  assert config.set_method == "set"
  assert config.disabled_rules == []
  assert config.jobs == 1
  assert config.is_enabled("S011")


def test_toml_found_in_parent(tmp_path):
  write_toml(
    tmp_path,
    """
[tool.schemalint]
schema_types = ["mysdk.schema.Schema"]
set_method = "put"
jobs = 3
""",
  )
  nested = tmp_path / "provider" / "resources"
  nested.mkdir(parents=True)

  config = LintConfig.load(search_path=nested)

  assert config.schema_types == ["mysdk.schema.Schema"]
  assert config.set_method == "put"
  assert config.jobs == 3


def test_overrides_win_and_disabled_rules_accumulate(tmp_path):
  write_toml(
    tmp_path,
    """
[tool.schemalint]
schema_types = ["mysdk.schema.Schema"]
disabled_rules = ["S011"]
""",
  )

  config = LintConfig.load(
    schema_types=["other.Schema"],
    disabled_rules=["s012"],
    search_path=tmp_path,
  )

  assert config.schema_types == ["other.Schema"]
  assert config.disabled_rules == ["S011", "S012"]
  assert not config.is_enabled("s011")


def test_other_tool_sections_are_ignored(tmp_path):
  write_toml(tmp_path, '[tool.ruff]\nline-length = 80\n')

  config = LintConfig.load(search_path=tmp_path)

  assert config == LintConfig()


def test_broken_toml_falls_back_to_defaults(tmp_path):
  write_toml(tmp_path, "[tool.schemalint\n")

  config = LintConfig.load(search_path=tmp_path)

  assert config == LintConfig()


@pytest.mark.parametrize(
  "kwargs",
  [
    {"schema_types": []},
    {"schema_types": ["  "]},
    {"jobs": 0},
  ],
)
def test_invalid_values_rejected(kwargs):
  with pytest.raises(ValidationError):
    LintConfig(**kwargs)


def test_type_names_are_stripped():
  config = LintConfig(resource_data_types=["  mysdk.Data "])

  assert config.resource_data_types == ["mysdk.Data"]
