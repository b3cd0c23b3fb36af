"""
Introspection Command Handlers.

- ``rules``: lists the available rules with their summaries.
- ``sets``: lists resource data setter calls found by the ``resourcedataset`` pass.
"""

from pathlib import Path
from typing import List

from rich.markup import escape
from rich.table import Table

from schemalint.cli.handlers.check import EXIT_CLEAN, EXIT_ERROR, collect_python_files
from schemalint.config import LintConfig
from schemalint.core.errors import AnalyzerError, UnitLoadError
from schemalint.core.executor import Executor
from schemalint.core.unit import load_unit
from schemalint.passes import ALL_CHECKS, resourcedataset
from schemalint.utils.console import console, log_warning


def handle_rules() -> int:
  """
  Prints the rule catalog.

  Returns:
      int: Exit code (always 0).
  """
  config = LintConfig.load()
  table = Table(title="Rules")
  table.add_column("Rule", style="rule")
  table.add_column("Enabled")
  table.add_column("Summary")
  for check in ALL_CHECKS:
    enabled = "yes" if config.is_enabled(check.name) else "no"
    table.add_row(check.name, enabled, escape(check.summary))
  console.print(table)
  return EXIT_CLEAN


def handle_sets(paths: List[Path]) -> int:
  """
  Prints every detected resource data setter call.

  Args:
      paths: Input files or directories.

  Returns:
      int: Exit code (2 if any file could not be analyzed).
  """
  files = collect_python_files(paths)
  if files is None:
    return EXIT_ERROR

  executor = Executor([resourcedataset.ANALYZER], LintConfig.load())
  status = EXIT_CLEAN
  for path in files:
    try:
      unit = load_unit(path)
      try:
        calls = executor.run(resourcedataset.ANALYZER, unit)
      finally:
        executor.release(unit)
    except (UnitLoadError, AnalyzerError) as e:
      log_warning(escape(str(e)))
      status = EXIT_ERROR
      continue

    for call in calls:
      code_range = unit.types.position(call)
      if code_range is None:
        continue
      start = code_range.start
      console.print(f"{escape(unit.path)}:{start.line}:{start.column + 1}: {escape(unit.module.code_for_node(call.func))}()")

  return status
