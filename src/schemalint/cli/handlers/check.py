"""
Check Command Handler.

Runs every enabled rule over Python files and renders the diagnostics as a
table or as JSON.

Exit codes:
    0: no diagnostics.
    1: at least one diagnostic.
    2: a path was missing, or a unit failed to load or analyze.
"""

import json
from pathlib import Path
from typing import Iterable, List, Optional

from rich.markup import escape
from rich.table import Table

from schemalint.config import LintConfig
from schemalint.core.executor import Executor, UnitReport
from schemalint.passes import ALL_CHECKS, get_check
from schemalint.utils.console import console, log_error, log_info, log_success, log_warning

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2

_SKIP_DIRS = {".git", ".hg", ".tox", ".venv", "venv", "__pycache__", "build", "dist"}


def collect_python_files(paths: Iterable[Path]) -> Optional[List[Path]]:
  """
  Expands files and directories into a sorted list of Python files.

  Args:
      paths: Files or directories given on the command line.

  Returns:
      The files to analyze, or None if any path does not exist.
  """
  files: List[Path] = []
  for path in paths:
    if not path.exists():
      log_error(f"Path not found: {escape(str(path))}")
      return None
    if path.is_file():
      files.append(path)
      continue
    for candidate in sorted(path.rglob("*.py")):
      if _SKIP_DIRS.isdisjoint(candidate.relative_to(path).parts[:-1]):
        files.append(candidate)
  return files


def handle_check(
  paths: List[Path],
  json_mode: bool = False,
  jobs: Optional[int] = None,
  disabled_rules: Optional[List[str]] = None,
  schema_types: Optional[List[str]] = None,
  resource_data_types: Optional[List[str]] = None,
) -> int:
  """
  Analyzes files and prints diagnostics.

  Args:
      paths: Input files or directories.
      json_mode: If True, print a JSON list of diagnostics to stdout.
      jobs: Concurrent units (overrides config).
      disabled_rules: Rules to skip (added to config).
      schema_types: Schema type names (overrides config).
      resource_data_types: Resource data type names (overrides config).

  Returns:
      int: Exit code.
  """
  files = collect_python_files(paths)
  if files is None:
    return EXIT_ERROR

  config = LintConfig.load(
    schema_types=schema_types,
    resource_data_types=resource_data_types,
    disabled_rules=disabled_rules,
    jobs=jobs,
  )
  for rule in config.disabled_rules:
    if get_check(rule) is None:
      log_warning(f"Unknown rule in disabled rules: {escape(rule)}")

  executor = Executor(ALL_CHECKS, config)

  if not json_mode:
    log_info(f"Checking {len(files)} files with {len(ALL_CHECKS)} rules...")

  reports = executor.analyze_paths(files)
  diagnostics = [d for report in reports for d in report.diagnostics]
  failed = [report for report in reports if not report.ok]

  if json_mode:
    print(json.dumps([d.model_dump() for d in diagnostics], indent=2))
  else:
    _print_reports(reports, failed)

  if failed:
    return EXIT_ERROR
  if diagnostics:
    return EXIT_FINDINGS
  return EXIT_CLEAN


def _print_reports(reports: List[UnitReport], failed: List[UnitReport]) -> None:
  diagnostics = [d for report in reports for d in report.diagnostics]

  if diagnostics:
    table = Table(title="Diagnostics")
    table.add_column("Location", style="path")
    table.add_column("Rule", style="rule")
    table.add_column("Message")
    for d in diagnostics:
      table.add_row(escape(d.location), d.rule, escape(d.message))
    console.print(table)

  for report in failed:
    log_warning(f"Skipped {escape(report.path)}: {escape(report.error or '')}")

  if not diagnostics and not failed:
    log_success(f"No issues found in {len(reports)} files.")
  else:
    log_info(f"{len(diagnostics)} issues, {len(failed)} files not analyzed.")
