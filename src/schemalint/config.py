"""
Runtime Configuration Store.

Holds the names the passes match against (schema type, resource data type,
setter method) and the rule selection. Values come from the
``[tool.schemalint]`` table of the nearest ``pyproject.toml`` and are
overridden by CLI arguments.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

DEFAULT_SCHEMA_TYPES = ["tfsdk.helper.schema.Schema"]
DEFAULT_RESOURCE_DATA_TYPES = ["tfsdk.helper.schema.ResourceData"]


class LintConfig(BaseModel):
  """
  Configuration container for an analysis run.
  """

  schema_types: List[str] = Field(
    default_factory=lambda: list(DEFAULT_SCHEMA_TYPES),
    description="Fully qualified names of the provider schema type.",
  )
  resource_data_types: List[str] = Field(
    default_factory=lambda: list(DEFAULT_RESOURCE_DATA_TYPES),
    description="Fully qualified names of the resource data type.",
  )
  set_method: str = Field("set", description="Method name of the resource data setter.")
  disabled_rules: List[str] = Field(default_factory=list, description="Rule names excluded from the run.")
  jobs: int = Field(1, ge=1, description="Number of units analyzed concurrently.")

  @field_validator("schema_types", "resource_data_types")
  @classmethod
  def validate_qualified_names(cls, v: List[str]) -> List[str]:
    """
    Strips whitespace and rejects empty names.

    Args:
        v (List[str]): Dotted names.

    Returns:
        List[str]: Cleaned names.

    Raises:
        ValueError: If a name is blank or the list is empty.
    """
    cleaned = [name.strip() for name in v]
    if not cleaned or any(not name for name in cleaned):
      raise ValueError("type names must be non-empty dotted names")
    return cleaned

  @field_validator("disabled_rules")
  @classmethod
  def validate_rules(cls, v: List[str]) -> List[str]:
    """Normalizes rule names to upper case."""
    return [name.strip().upper() for name in v if name.strip()]

  def is_enabled(self, rule: str) -> bool:
    """
    Checks whether a rule participates in the run.

    Args:
        rule (str): Rule name.

    Returns:
        bool: False if the rule is disabled.
    """
    return rule.upper() not in self.disabled_rules

  @classmethod
  def load(
    cls,
    schema_types: Optional[List[str]] = None,
    resource_data_types: Optional[List[str]] = None,
    set_method: Optional[str] = None,
    disabled_rules: Optional[List[str]] = None,
    jobs: Optional[int] = None,
    search_path: Optional[Path] = None,
  ) -> "LintConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        schema_types (Optional[List[str]]): Override for schema type names.
        resource_data_types (Optional[List[str]]): Override for resource data type names.
        set_method (Optional[str]): Override for the setter method name.
        disabled_rules (Optional[List[str]]): Additional rules to disable.
        jobs (Optional[int]): Override for concurrency.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        LintConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    values: Dict[str, Any] = {}
    for key, override in (
      ("schema_types", schema_types),
      ("resource_data_types", resource_data_types),
      ("set_method", set_method),
      ("jobs", jobs),
    ):
      if override:
        values[key] = override
      elif key in toml_config:
        values[key] = toml_config[key]

    # Disabled rules accumulate rather than override
    values["disabled_rules"] = [*toml_config.get("disabled_rules", []), *(disabled_rules or [])]

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("schemalint", {}), parent

  return {}, None
